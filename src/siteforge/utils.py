"""Utility helpers."""

from __future__ import annotations

import json
import re
import uuid
from typing import Any, Dict


def generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.strip().lower())
    return slug.strip("-")


def _phone_digits(phone: str) -> str:
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    return digits


def format_phone_display(phone: str) -> str:
    """(704) 555-0123 for 10-digit US numbers, input unchanged otherwise."""
    digits = _phone_digits(phone)
    if len(digits) != 10:
        return phone
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


def format_phone_link(phone: str) -> str:
    digits = _phone_digits(phone)
    if len(digits) == 10:
        return f"tel:+1{digits}"
    return f"tel:{digits}"


def strip_code_fences(text: str) -> str:
    """Removes a leading ``` / ```json marker and a trailing ``` marker."""
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def extract_json(data: Any) -> Any:
    """Best-effort JSON view of a task result.

    Structured task results arrive already parsed; free-text results may
    still hold JSON (optionally fenced). Returns None when nothing parses.
    """
    if isinstance(data, (dict, list)):
        return data
    if not isinstance(data, str) or not data.strip():
        return None
    try:
        return json.loads(strip_code_fences(data))
    except json.JSONDecodeError:
        return None


def json_dumps(data: Dict[str, Any] | list[Any] | None, indent: int | None = 2) -> str:
    return json.dumps(data if data is not None else {}, ensure_ascii=False, indent=indent)


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def camelize(value: Any) -> Any:
    """Recursively converts snake_case dict keys to camelCase."""
    if isinstance(value, dict):
        return {to_camel(str(k)): camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [camelize(v) for v in value]
    return value

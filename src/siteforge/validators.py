"""Business precondition checks and generated output validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from .business import BusinessInfo
from .industries import INDUSTRIES, TONES
from .scaffold import REQUIRED_FILES

PRIORITIES = ("high", "medium", "low")


class BusinessValidationError(ValueError):
    """BusinessInfo is missing required fields; no provider call was made."""

    def __init__(self, issues: List[str]) -> None:
        super().__init__("Invalid business info: " + "; ".join(issues))
        self.issues = issues


def business_issues(info: BusinessInfo) -> List[str]:
    issues: List[str] = []
    if not info.name:
        issues.append("name is required")
    if info.industry not in INDUSTRIES:
        issues.append(f"unknown industry {info.industry!r}")
    if info.tone not in TONES:
        issues.append(f"unknown tone {info.tone!r}")
    seen_slugs: Dict[str, int] = {}
    for index, service in enumerate(info.services):
        if not service.name:
            issues.append(f"services[{index}].name is required")
        elif service.slug in seen_slugs:
            issues.append(
                f"services[{index}] slug {service.slug!r} duplicates services[{seen_slugs[service.slug]}]"
            )
        else:
            seen_slugs[service.slug] = index
    for index, area in enumerate(info.service_areas):
        if not area.city:
            issues.append(f"service_areas[{index}].city is required")
        if area.priority not in PRIORITIES:
            issues.append(f"service_areas[{index}].priority must be one of {', '.join(PRIORITIES)}")
    return issues


def validate_business_info(info: BusinessInfo) -> None:
    issues = business_issues(info)
    if issues:
        raise BusinessValidationError(issues)


def validate_output(output_dir: str) -> Dict[str, Any]:
    root = Path(output_dir)
    missing = [path for path in REQUIRED_FILES if not (root / path).is_file()]
    return {
        "ok": not missing,
        "checked": list(REQUIRED_FILES),
        "missing": missing,
    }

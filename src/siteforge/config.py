"""Configuration loading and defaults."""

from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_SETTINGS: Dict[str, Any] = {
    "llm": {
        "claude": {
            "model": "claude-sonnet-4-20250514",
            "max_tokens": 4096,
            "temperature": 0.7,
            "timeout_seconds": 60,
        },
        "groq": {
            "model": "llama-3.3-70b-versatile",
            "max_tokens": 8192,
            "temperature": 0.3,
            "timeout_seconds": 60,
        },
    },
    "pricing": {
        "claude": {"input_per_1m": 3.0, "output_per_1m": 15.0},
        "groq": {"input_per_1m": 0.05, "output_per_1m": 0.08},
    },
    # Per task type overrides, e.g. {"expand:faqs": "claude"}.
    "routing": {},
    "engine": {
        "max_workers": 4,
        "about_page": True,
    },
    "output": {
        "default_dir": ".",
    },
    "logging": {
        "level": "INFO",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_settings(settings_path: str = "config/settings.yaml") -> Dict[str, Any]:
    """Loads settings.yaml and merges it onto defaults."""
    merged = deepcopy(DEFAULT_SETTINGS)
    config_path = Path(settings_path)
    if config_path.exists():
        with config_path.open("r", encoding="utf-8") as f:
            user_cfg = yaml.safe_load(f) or {}
        merged = _deep_merge(merged, user_cfg)
    return merged


def merge_settings(overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Defaults with an in-memory override dict applied (no file access)."""
    return _deep_merge(DEFAULT_SETTINGS, overrides or {})


def llm_settings(config: Dict[str, Any], provider: str) -> Dict[str, Any]:
    defaults = DEFAULT_SETTINGS["llm"][provider]
    return {**defaults, **config.get("llm", {}).get(provider, {})}


def pricing_per_token(config: Dict[str, Any], provider: str) -> tuple[float, float]:
    """Returns (input, output) USD per single token for a provider."""
    defaults = DEFAULT_SETTINGS["pricing"][provider]
    pricing = {**defaults, **config.get("pricing", {}).get(provider, {})}
    return (
        float(pricing["input_per_1m"]) / 1_000_000,
        float(pricing["output_per_1m"]) / 1_000_000,
    )

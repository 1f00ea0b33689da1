"""Static industry metadata and theme colour schemes."""

from __future__ import annotations

from typing import Dict

INDUSTRIES: Dict[str, Dict[str, str]] = {
    "roofing": {"name": "Roofing", "icon": "Home", "schema_type": "RoofingContractor"},
    "landscaping": {"name": "Landscaping", "icon": "Trees", "schema_type": "LandscapingBusiness"},
    "plumbing": {"name": "Plumbing", "icon": "Droplets", "schema_type": "Plumber"},
    "hvac": {"name": "HVAC", "icon": "Thermometer", "schema_type": "HVACBusiness"},
    "electrical": {"name": "Electrical", "icon": "Zap", "schema_type": "Electrician"},
    "painting": {"name": "Painting", "icon": "Paintbrush", "schema_type": "HousePainter"},
    "general-contractor": {"name": "General Contractor", "icon": "Hammer", "schema_type": "GeneralContractor"},
    "pressure-washing": {"name": "Pressure Washing", "icon": "Sparkles", "schema_type": "LocalBusiness"},
    "tree-service": {"name": "Tree Service", "icon": "TreeDeciduous", "schema_type": "LocalBusiness"},
    "fencing": {"name": "Fencing", "icon": "Fence", "schema_type": "LocalBusiness"},
    "concrete": {"name": "Concrete", "icon": "Square", "schema_type": "LocalBusiness"},
    "flooring": {"name": "Flooring", "icon": "LayoutGrid", "schema_type": "LocalBusiness"},
    "window-cleaning": {"name": "Window Cleaning", "icon": "SquareStack", "schema_type": "LocalBusiness"},
    "pest-control": {"name": "Pest Control", "icon": "Bug", "schema_type": "LocalBusiness"},
    "garage-door": {"name": "Garage Door", "icon": "DoorOpen", "schema_type": "LocalBusiness"},
    "locksmith": {"name": "Locksmith", "icon": "Key", "schema_type": "Locksmith"},
    "pool-service": {"name": "Pool Service", "icon": "Waves", "schema_type": "LocalBusiness"},
    "gutters": {"name": "Gutters", "icon": "Gauge", "schema_type": "LocalBusiness"},
    "siding": {"name": "Siding", "icon": "Building", "schema_type": "LocalBusiness"},
    "solar": {"name": "Solar", "icon": "Sun", "schema_type": "LocalBusiness"},
}

TONES = ("professional", "friendly", "premium", "family-owned", "technical")

COLOR_SCHEMES: Dict[str, Dict[str, str]] = {
    "blue": {
        "primary": "#1A43AA",
        "primary_dark": "#142F7A",
        "primary_light": "#2E5BC9",
        "secondary": "#475569",
        "accent": "#C62F2F",
        "accent_dark": "#A52525",
    },
    "green": {
        "primary": "#166534",
        "primary_dark": "#14532d",
        "primary_light": "#22c55e",
        "secondary": "#475569",
        "accent": "#C62F2F",
        "accent_dark": "#A52525",
    },
    "amber": {
        "primary": "#b45309",
        "primary_dark": "#92400e",
        "primary_light": "#f59e0b",
        "secondary": "#475569",
        "accent": "#1A43AA",
        "accent_dark": "#142F7A",
    },
    "red": {
        "primary": "#b91c1c",
        "primary_dark": "#991b1b",
        "primary_light": "#ef4444",
        "secondary": "#475569",
        "accent": "#1A43AA",
        "accent_dark": "#142F7A",
    },
    "neutral": {
        "primary": "#1e293b",
        "primary_dark": "#0f172a",
        "primary_light": "#334155",
        "secondary": "#475569",
        "accent": "#C62F2F",
        "accent_dark": "#A52525",
    },
}


def industry_display(industry: str) -> str:
    info = INDUSTRIES.get(industry)
    if info:
        return info["name"]
    return industry.replace("-", " ").title()

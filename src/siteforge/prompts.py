"""Prompt builders."""

from __future__ import annotations

from .business import BusinessInfo, ServiceArea, ServiceDefinition

VALUE_PROP_ICONS = "Shield, Award, Clock, Star, Users, ThumbsUp, Wrench, Phone, Leaf, Heart"


def _services_line(info: BusinessInfo) -> str:
    return ", ".join(s.name for s in info.services) or "General services"


def _location(info: BusinessInfo) -> str:
    return ", ".join(part for part in (info.primary_city, info.primary_state) if part)


def build_research_prompt(info: BusinessInfo) -> str:
    return (
        f'Analyze the {info.industry} industry for a business named "{info.name}" in {_location(info)}.\n\n'
        f"Business description: {info.description or 'Local service business'}\n\n"
        f"Services offered: {_services_line(info)}\n\n"
        "Provide:\n"
        "1. 5 key industry insights for their website content\n"
        "2. 10 target SEO keywords (local focus)\n"
        "3. 3 competitive advantages to highlight\n"
        "4. 3 local SEO tips for this market\n\n"
        "Return as JSON:\n"
        "{\n"
        '  "industryInsights": ["insight1", "insight2", ...],\n'
        '  "keywords": ["keyword1", "keyword2", ...],\n'
        '  "competitorStrategies": ["strategy1", ...],\n'
        '  "localSeoTips": ["tip1", ...]\n'
        "}"
    )


def build_hero_prompt(info: BusinessInfo) -> str:
    years = f"Years in business: {info.years_in_business}\n" if info.years_in_business else ""
    return (
        f"Create compelling hero section copy for a {info.industry} business:\n\n"
        f"Business: {info.name}\n"
        f"Location: {_location(info)}\n"
        f"Services: {_services_line(info)}\n"
        f"Tone: {info.tone}\n"
        f"{years}\n"
        "Return JSON:\n"
        "{\n"
        '  "headline": "Short, powerful headline (6-10 words)",\n'
        '  "subheadline": "Supporting text explaining value proposition (15-25 words)"\n'
        "}"
    )


def build_value_props_prompt(info: BusinessInfo) -> str:
    extras = ""
    if info.years_in_business:
        extras += f"Years in business: {info.years_in_business}\n"
    if info.certifications:
        extras += f"Certifications: {', '.join(info.certifications)}\n"
    return (
        f"Create 4 value propositions for this {info.industry} business:\n\n"
        f"Business: {info.name}\n"
        f"Services: {_services_line(info)}\n"
        f"{extras}\n"
        "Return JSON array:\n"
        "[\n"
        '  { "title": "Short title", "description": "1-2 sentence description", "icon": "LucideIconName" }\n'
        "]\n\n"
        f"Use these Lucide icon names: {VALUE_PROP_ICONS}"
    )


def build_service_prompt(info: BusinessInfo, service: ServiceDefinition) -> str:
    return (
        f'Write a compelling service description for "{service.name}" ({info.industry} business).\n\n'
        f"Business: {info.name}\n"
        f"Tone: {info.tone}\n\n"
        "Return JSON:\n"
        "{\n"
        '  "description": "2-3 sentence service description",\n'
        '  "features": ["feature 1", "feature 2", "feature 3", "feature 4", "feature 5"]\n'
        "}"
    )


def build_about_prompt(info: BusinessInfo) -> str:
    facts = [f"Business: {info.name}", f"Location: {_location(info)}", f"Services: {_services_line(info)}"]
    if info.years_in_business:
        facts.append(f"Years in business: {info.years_in_business}")
    if info.description:
        facts.append(f"Owner's description: {info.description}")
    if info.awards:
        facts.append(f"Awards: {', '.join(info.awards)}")
    return (
        f"Write a 2-paragraph About Us section for a {info.industry} business in a {info.tone} tone. "
        "Use only the facts below; do not invent details.\n\n" + "\n".join(facts)
    )


def build_city_prompt(info: BusinessInfo, area: ServiceArea) -> str:
    return (
        f"Generate city page data for {area.city}, {area.state} for a {info.industry} business.\n\n"
        "Return JSON:\n"
        "{\n"
        '  "h1": "Main heading for the page",\n'
        '  "metaTitle": "SEO title (50-60 chars)",\n'
        '  "metaDescription": "SEO description (150-160 chars)",\n'
        '  "primaryKeyword": "main keyword to target",\n'
        '  "nearbyAreas": ["area1", "area2", "area3"],\n'
        '  "neighborhoods": ["neighborhood1", "neighborhood2", "neighborhood3"]\n'
        "}"
    )


def build_city_system_prompt(info: BusinessInfo) -> str:
    return f"You are a local SEO expert. Generate content for {info.industry} services."

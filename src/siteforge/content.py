"""Generated copy: result shapes, template defaults and SiteConfig assembly.

Every ``*_from`` function takes whatever a task returned (parsed JSON or
raw text) and yields the typed value, or None when the shape is wrong.
Every ``default_*`` function is the deterministic fallback used instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from .business import BusinessInfo, ServiceArea, ServiceDefinition
from .industries import COLOR_SCHEMES, industry_display
from .site import (
    CityConfig,
    FormattedAddress,
    HoursConfig,
    RatingConfig,
    SEOConfig,
    ServiceConfig,
    SiteConfig,
    ThemeConfig,
    ValuePropConfig,
    WarrantyConfig,
)
from .utils import extract_json, format_phone_display, format_phone_link, slugify


@dataclass
class ResearchResult:
    industry_insights: List[str]
    keywords: List[str]
    competitor_strategies: List[str] = field(default_factory=list)
    local_seo_tips: List[str] = field(default_factory=list)


@dataclass
class HeroCopy:
    headline: str
    subheadline: str


@dataclass
class ServiceCopy:
    description: str
    features: List[str]


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def _text(data: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


# -- shape checks -----------------------------------------------------------


def research_from(data: Any) -> Optional[ResearchResult]:
    payload = extract_json(data)
    if not isinstance(payload, dict):
        return None
    insights = _str_list(payload.get("industryInsights") or payload.get("industry_insights"))
    keywords = _str_list(payload.get("keywords"))
    if not insights or not keywords:
        return None
    return ResearchResult(
        industry_insights=insights,
        keywords=keywords,
        competitor_strategies=_str_list(payload.get("competitorStrategies") or payload.get("competitor_strategies")),
        local_seo_tips=_str_list(payload.get("localSeoTips") or payload.get("local_seo_tips")),
    )


def hero_from(data: Any) -> Optional[HeroCopy]:
    payload = extract_json(data)
    if not isinstance(payload, dict):
        return None
    headline = _text(payload, "headline")
    subheadline = _text(payload, "subheadline")
    if not headline or not subheadline:
        return None
    return HeroCopy(headline=headline, subheadline=subheadline)


def value_props_from(data: Any) -> Optional[List[ValuePropConfig]]:
    payload = extract_json(data)
    if isinstance(payload, dict):
        payload = payload.get("valueProps") or payload.get("value_props")
    if not isinstance(payload, list):
        return None
    props = [
        ValuePropConfig(
            title=_text(item, "title"),
            description=_text(item, "description"),
            icon=_text(item, "icon") or "Star",
        )
        for item in payload
        if isinstance(item, dict) and _text(item, "title")
    ]
    return props or None


def service_copy_from(data: Any) -> Optional[ServiceCopy]:
    payload = extract_json(data)
    if not isinstance(payload, dict):
        return None
    description = _text(payload, "description")
    if not description:
        return None
    return ServiceCopy(description=description, features=_str_list(payload.get("features")))


def about_from(data: Any) -> Optional[str]:
    if not isinstance(data, str) or not data.strip():
        return None
    return data.strip()


def city_from(data: Any, info: BusinessInfo, area: ServiceArea) -> Optional[CityConfig]:
    payload = extract_json(data)
    if not isinstance(payload, dict):
        return None
    h1 = _text(payload, "h1")
    meta_title = _text(payload, "metaTitle", "meta_title")
    meta_description = _text(payload, "metaDescription", "meta_description")
    if not (h1 and meta_title and meta_description):
        return None
    display = industry_display(info.industry)
    return CityConfig(
        name=area.city,
        state=area.state,
        state_abbr=area.state_abbr,
        slug=city_slug(area),
        priority=area.priority,
        county=area.county,
        h1=h1,
        meta_title=meta_title,
        meta_description=meta_description,
        primary_keyword=_text(payload, "primaryKeyword", "primary_keyword") or f"{display.lower()} {area.city}",
        nearby_areas=_str_list(payload.get("nearbyAreas") or payload.get("nearby_areas")),
        neighborhoods=_str_list(payload.get("neighborhoods")) or list(area.neighborhoods),
    )


# -- defaults ---------------------------------------------------------------


def default_research(info: BusinessInfo) -> ResearchResult:
    display = industry_display(info.industry).lower()
    city = info.primary_city
    keywords = [f"{display} near me", f"best {display}"]
    if city:
        keywords.append(f"{city} {display}")
    return ResearchResult(
        industry_insights=[
            "Quality service is paramount",
            "Customer reviews drive business",
            "Local presence matters",
        ],
        keywords=keywords,
        competitor_strategies=["Responsive service", "Transparent pricing", "Strong warranties"],
        local_seo_tips=[
            "Optimize Google Business Profile",
            "Get local reviews",
            "Create city-specific content",
        ],
    )


def default_hero(info: BusinessInfo) -> HeroCopy:
    display = industry_display(info.industry)
    city = info.primary_city
    headline = f"{city}'s Trusted {display} Experts" if city else f"Trusted {display} Experts"
    return HeroCopy(
        headline=headline,
        subheadline=(
            f"Professional {display.lower()} services for residential and commercial clients. "
            "Licensed, insured, and committed to excellence."
        ),
    )


DEFAULT_VALUE_PROPS = (
    ValuePropConfig("Licensed & Insured", "Fully licensed and insured for your protection.", "Shield"),
    ValuePropConfig("Free Estimates", "No-obligation quotes for all projects.", "FileText"),
    ValuePropConfig("Quality Guaranteed", "Satisfaction guaranteed on every job.", "Award"),
    ValuePropConfig("Fast Response", "Quick turnaround on all requests.", "Clock"),
)


def default_value_props() -> List[ValuePropConfig]:
    return list(DEFAULT_VALUE_PROPS)


def supplied_value_props(info: BusinessInfo) -> List[ValuePropConfig]:
    return [ValuePropConfig(vp.title, vp.description, vp.icon or "Star") for vp in info.value_props]


def default_service_copy(service: ServiceDefinition) -> ServiceCopy:
    return ServiceCopy(
        description=service.description or f"Professional {service.name.lower()} services.",
        features=list(service.features) or ["Expert service", "Quality materials", "Timely completion"],
    )


def default_services(info: BusinessInfo) -> List[ServiceDefinition]:
    """The business's services, or one industry-wide service when none were given."""
    if info.services:
        return list(info.services)
    name = f"{industry_display(info.industry)} Services"
    return [ServiceDefinition(name=name, slug=slugify(name), is_primary=True)]


def default_service_areas(info: BusinessInfo) -> List[ServiceArea]:
    """The business's service areas, or the primary address city when none were given."""
    if info.service_areas:
        return list(info.service_areas)
    address = info.primary_address
    if address and address.city:
        return [ServiceArea(city=address.city, state=address.state, state_abbr=address.state_abbr, priority="high")]
    return []


def default_about(info: BusinessInfo) -> str:
    display = industry_display(info.industry).lower()
    city = info.primary_city
    where = f" serving {city} and the surrounding area" if city else ""
    parts = [f"{info.name} is a local {display} company{where}."]
    if info.years_in_business:
        parts.append(f"For {info.years_in_business} years we have delivered dependable work at fair prices.")
    if info.description:
        parts.append(info.description.strip())
    parts.append("Every project is backed by licensed professionals and a commitment to quality.")
    return " ".join(parts)


def city_slug(area: ServiceArea) -> str:
    return area.slug or slugify(f"{area.city}-{area.state_abbr}")


def default_city(info: BusinessInfo, area: ServiceArea) -> CityConfig:
    display = industry_display(info.industry)
    return CityConfig(
        name=area.city,
        state=area.state,
        state_abbr=area.state_abbr,
        slug=city_slug(area),
        priority=area.priority,
        county=area.county,
        h1=f"{display} Services in {area.city}, {area.state_abbr}",
        meta_title=f"{display} in {area.city}, {area.state_abbr} | {info.name}",
        meta_description=(
            f"Professional {display.lower()} services in {area.city}. Call {info.name} for free estimates."
        ),
        primary_keyword=f"{display.lower()} {area.city}",
        nearby_areas=[],
        neighborhoods=list(area.neighborhoods),
    )


# -- assembly ---------------------------------------------------------------


def _format_address(city: str, state: str, state_abbr: str, zip_code: str, street: Optional[str]) -> FormattedAddress:
    prefix = f"{street}, " if street else ""
    return FormattedAddress(
        city=city,
        state=state,
        state_abbr=state_abbr,
        zip=zip_code,
        street=street,
        full=f"{prefix}{city}, {state_abbr} {zip_code}".strip(),
        formatted=f"{city}, {state_abbr}",
    )


def _theme(info: BusinessInfo) -> ThemeConfig:
    style = "modern" if info.tone == "premium" else "professional"
    colors = dict(COLOR_SCHEMES["blue"])
    brand = {key: value for key, value in info.brand_colors.items() if value}
    if brand:
        colors.update(brand)
        return ThemeConfig(color_scheme="custom", colors=colors, style=style)
    return ThemeConfig(color_scheme="blue", colors=colors, style=style)


def _unique(items: List[str]) -> List[str]:
    seen = set()
    unique = []
    for item in items:
        if item and item.lower() not in seen:
            seen.add(item.lower())
            unique.append(item)
    return unique


def build_site_config(
    info: BusinessInfo,
    hero: HeroCopy,
    value_props: List[ValuePropConfig],
    services: List[ServiceDefinition],
    service_copy: Mapping[str, ServiceCopy],
    cities: List[CityConfig],
    about_text: str,
    research: Optional[ResearchResult] = None,
) -> SiteConfig:
    display = industry_display(info.industry)
    city = info.primary_city
    state = info.primary_state

    addresses = [_format_address(a.city, a.state, a.state_abbr, a.zip, a.street) for a in info.addresses]
    primary = info.primary_address
    if primary is not None:
        primary_address: Optional[FormattedAddress] = _format_address(
            primary.city, primary.state, primary.state_abbr, primary.zip, primary.street
        )
    elif info.service_areas:
        area = info.service_areas[0]
        primary_address = _format_address(area.city, area.state, area.state_abbr, "", None)
    else:
        primary_address = None

    service_configs = []
    for service in services:
        copy = service_copy.get(service.slug) or default_service_copy(service)
        in_city = f" in {city}" if city else ""
        service_configs.append(
            ServiceConfig(
                title=service.name,
                short_title=" ".join(service.name.split()[:2]),
                slug=service.slug,
                description=copy.description,
                short_description=service.short_description or "",
                features=list(copy.features),
                benefits=list(service.benefits),
                icon="Star" if service.is_primary else "Wrench",
                keywords=list(service.keywords) or [service.name.lower()],
                meta_title=f"{service.name} | {info.name}",
                meta_description=(
                    f"Professional {service.name.lower()} services{in_city}. Call {info.name} today."
                ),
            )
        )

    review = info.reviews[0] if info.reviews else None
    if review is not None:
        rating = RatingConfig(
            value=review.rating,
            count=review.count,
            source=review.platform,
            display=f"{review.rating:g} stars ({review.count} reviews)",
        )
    else:
        rating = RatingConfig(value=5, count=0, source="google", display="5 stars")

    hours = info.hours
    domain = info.website or f"{slugify(info.name)}.com"
    domain = domain.split("://", 1)[-1].rstrip("/")
    location = f" in {city}" if city else ""
    location_full = ", ".join(part for part in (city, state) if part)
    phone_display = format_phone_display(info.phone)

    keywords = [display.lower()] + ([city] if city else []) + [s.slug for s in service_configs]
    if research is not None:
        keywords += research.keywords[:10]

    return SiteConfig(
        name=info.name,
        legal_name=info.legal_name or info.name,
        domain=domain,
        tagline=info.tagline or hero.subheadline,
        description=info.description or hero.subheadline,
        hero_headline=hero.headline,
        hero_subheadline=hero.subheadline,
        about_text=about_text,
        phone=info.phone,
        phone_display=phone_display,
        phone_link=format_phone_link(info.phone),
        email=info.email,
        addresses=addresses,
        primary_address=primary_address,
        hours=HoursConfig(
            weekdays=hours.weekdays if hours else "8:00 AM - 6:00 PM",
            saturday=hours.saturday if hours else "9:00 AM - 4:00 PM",
            sunday=hours.sunday if hours else "Closed",
            emergency=hours.emergency if hours else False,
        ),
        social=dict(info.social),
        rating=rating,
        years_in_business=info.years_in_business or 1,
        certifications=list(info.certifications),
        licenses=list(info.licenses),
        insurance=list(info.insurance),
        warranties=[WarrantyConfig(w.name, w.duration, w.description) for w in info.warranties],
        value_props=list(value_props),
        services=service_configs,
        cities=list(cities),
        primary_city=cities[0] if cities else None,
        industry=info.industry,
        industry_display=display,
        seo=SEOConfig(
            title_template=f"%s | {info.name}",
            default_title=f"{info.name} | {display}{location}",
            default_description=(
                f"Professional {display.lower()} services in {location_full}. "
                f"Call {phone_display} for free estimates."
                if location_full
                else f"Professional {display.lower()} services. Call {phone_display} for free estimates."
            ),
            keywords=_unique(keywords),
            canonical_base=f"https://{domain}",
        ),
        theme=_theme(info),
    )

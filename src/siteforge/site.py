"""Site configuration assembled from business facts plus generated copy."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .utils import camelize


@dataclass(frozen=True)
class FormattedAddress:
    city: str
    state: str
    state_abbr: str
    zip: str
    full: str
    formatted: str
    street: Optional[str] = None


@dataclass(frozen=True)
class HoursConfig:
    weekdays: str
    saturday: str
    sunday: str
    emergency: bool


@dataclass(frozen=True)
class RatingConfig:
    value: float
    count: int
    source: str
    display: str


@dataclass(frozen=True)
class WarrantyConfig:
    name: str
    duration: str
    description: str


@dataclass(frozen=True)
class ValuePropConfig:
    title: str
    description: str
    icon: str


@dataclass(frozen=True)
class ServiceConfig:
    title: str
    short_title: str
    slug: str
    description: str
    short_description: str
    features: List[str]
    benefits: List[str]
    icon: str
    keywords: List[str]
    meta_title: str
    meta_description: str


@dataclass(frozen=True)
class CityConfig:
    name: str
    state: str
    state_abbr: str
    slug: str
    priority: str
    h1: str
    meta_title: str
    meta_description: str
    primary_keyword: str
    nearby_areas: List[str] = field(default_factory=list)
    neighborhoods: List[str] = field(default_factory=list)
    county: Optional[str] = None


@dataclass(frozen=True)
class SEOConfig:
    title_template: str
    default_title: str
    default_description: str
    keywords: List[str]
    canonical_base: str


@dataclass(frozen=True)
class ThemeConfig:
    color_scheme: str
    colors: Dict[str, str]
    style: str
    dark_mode: bool = False


@dataclass(frozen=True)
class SiteConfig:
    name: str
    legal_name: str
    domain: str
    tagline: str
    description: str
    hero_headline: str
    hero_subheadline: str
    about_text: str
    phone: str
    phone_display: str
    phone_link: str
    email: str
    addresses: List[FormattedAddress]
    primary_address: Optional[FormattedAddress]
    hours: HoursConfig
    social: Dict[str, str]
    rating: RatingConfig
    years_in_business: int
    certifications: List[str]
    licenses: List[str]
    insurance: List[str]
    warranties: List[WarrantyConfig]
    value_props: List[ValuePropConfig]
    services: List[ServiceConfig]
    cities: List[CityConfig]
    primary_city: Optional[CityConfig]
    industry: str
    industry_display: str
    seo: SEOConfig
    theme: ThemeConfig

    def to_dict(self) -> Dict[str, Any]:
        """camelCase view, the shape the generated site's data files use."""
        return camelize(asdict(self))

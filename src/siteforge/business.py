"""Business information collected from the interview (chat or wizard)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .utils import slugify


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins; accepts both camelCase and snake_case input."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _abbr(state: str, explicit: Optional[str]) -> str:
    if explicit:
        return explicit
    return state.upper() if len(state) == 2 else state


@dataclass(frozen=True)
class Address:
    city: str
    state: str
    state_abbr: str
    zip: str = ""
    street: Optional[str] = None
    type: str = "primary"
    service_radius: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Address":
        state = str(_pick(data, "state", default=""))
        return cls(
            city=str(_pick(data, "city", default="")),
            state=state,
            state_abbr=_abbr(state, _pick(data, "stateAbbr", "state_abbr")),
            zip=str(_pick(data, "zip", default="")),
            street=_pick(data, "street"),
            type=str(_pick(data, "type", default="primary")),
            service_radius=_pick(data, "serviceRadius", "service_radius"),
        )


@dataclass(frozen=True)
class ServiceDefinition:
    name: str
    slug: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    features: List[str] = field(default_factory=list)
    benefits: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    is_primary: bool = False
    is_emergency: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceDefinition":
        name = str(_pick(data, "name", default=""))
        return cls(
            name=name,
            slug=str(_pick(data, "slug", default="")) or slugify(name),
            description=_pick(data, "description"),
            short_description=_pick(data, "shortDescription", "short_description"),
            features=list(_pick(data, "features", default=[])),
            benefits=list(_pick(data, "benefits", default=[])),
            keywords=list(_pick(data, "keywords", default=[])),
            is_primary=bool(_pick(data, "isPrimary", "is_primary", default=False)),
            is_emergency=bool(_pick(data, "isEmergency", "is_emergency", default=False)),
        )


@dataclass(frozen=True)
class ServiceArea:
    city: str
    state: str
    state_abbr: str
    priority: str = "medium"
    county: Optional[str] = None
    neighborhoods: List[str] = field(default_factory=list)
    slug: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ServiceArea":
        state = str(_pick(data, "state", default=""))
        return cls(
            city=str(_pick(data, "city", default="")),
            state=state,
            state_abbr=_abbr(state, _pick(data, "stateAbbr", "state_abbr")),
            priority=str(_pick(data, "priority", default="medium")),
            county=_pick(data, "county"),
            neighborhoods=list(_pick(data, "neighborhoods", default=[])),
            slug=_pick(data, "slug"),
        )


@dataclass(frozen=True)
class WarrantyInfo:
    name: str
    duration: str
    description: str = ""


@dataclass(frozen=True)
class ValueProp:
    title: str
    description: str = ""
    icon: str = "Star"


@dataclass(frozen=True)
class ReviewSource:
    platform: str
    rating: float
    count: int
    url: Optional[str] = None


@dataclass(frozen=True)
class BusinessHours:
    weekdays: str = "8:00 AM - 6:00 PM"
    saturday: str = "9:00 AM - 4:00 PM"
    sunday: str = "Closed"
    emergency: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BusinessHours":
        defaults = cls()
        return cls(
            weekdays=str(_pick(data, "weekdays", default=defaults.weekdays)),
            saturday=str(_pick(data, "saturday", default=defaults.saturday)),
            sunday=str(_pick(data, "sunday", default=defaults.sunday)),
            emergency=bool(_pick(data, "emergency", default=defaults.emergency)),
        )


@dataclass(frozen=True)
class BusinessInfo:
    name: str
    industry: str
    description: Optional[str] = None
    tagline: Optional[str] = None
    legal_name: Optional[str] = None
    website: Optional[str] = None
    years_in_business: Optional[int] = None
    phone: str = ""
    email: str = ""
    addresses: List[Address] = field(default_factory=list)
    hours: Optional[BusinessHours] = None
    social: Dict[str, str] = field(default_factory=dict)
    services: List[ServiceDefinition] = field(default_factory=list)
    service_areas: List[ServiceArea] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    licenses: List[str] = field(default_factory=list)
    insurance: List[str] = field(default_factory=list)
    warranties: List[WarrantyInfo] = field(default_factory=list)
    value_props: List[ValueProp] = field(default_factory=list)
    reviews: List[ReviewSource] = field(default_factory=list)
    awards: List[str] = field(default_factory=list)
    brand_colors: Dict[str, str] = field(default_factory=dict)
    tone: str = "professional"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BusinessInfo":
        hours = _pick(data, "hours")
        return cls(
            name=str(_pick(data, "name", default="")).strip(),
            industry=str(_pick(data, "industry", default="")).strip(),
            description=_pick(data, "description"),
            tagline=_pick(data, "tagline"),
            legal_name=_pick(data, "legalName", "legal_name"),
            website=_pick(data, "website"),
            years_in_business=_pick(data, "yearsInBusiness", "years_in_business"),
            phone=str(_pick(data, "phone", default="")),
            email=str(_pick(data, "email", default="")),
            addresses=[Address.from_dict(a) for a in _pick(data, "addresses", default=[])],
            hours=BusinessHours.from_dict(hours) if isinstance(hours, dict) else None,
            social=dict(_pick(data, "social", default={})),
            services=[ServiceDefinition.from_dict(s) for s in _pick(data, "services", default=[])],
            service_areas=[
                ServiceArea.from_dict(a) for a in _pick(data, "serviceAreas", "service_areas", default=[])
            ],
            certifications=list(_pick(data, "certifications", default=[])),
            licenses=list(_pick(data, "licenses", default=[])),
            insurance=list(_pick(data, "insurance", default=[])),
            warranties=[
                WarrantyInfo(
                    name=str(w.get("name", "")),
                    duration=str(w.get("duration", "")),
                    description=str(w.get("description") or ""),
                )
                for w in _pick(data, "warranties", default=[])
            ],
            value_props=[
                ValueProp(
                    title=str(v.get("title", "")),
                    description=str(v.get("description") or ""),
                    icon=str(v.get("icon") or "Star"),
                )
                for v in _pick(data, "valueProps", "value_props", default=[])
            ],
            reviews=[
                ReviewSource(
                    platform=str(r.get("platform", "google")),
                    rating=float(r.get("rating", 5)),
                    count=int(r.get("count", 0)),
                    url=r.get("url"),
                )
                for r in _pick(data, "reviews", default=[])
            ],
            awards=list(_pick(data, "awards", default=[])),
            brand_colors=dict(_pick(data, "brandColors", "brand_colors", default={})),
            tone=str(_pick(data, "tone", default="professional")),
        )

    @property
    def primary_address(self) -> Optional[Address]:
        for address in self.addresses:
            if address.type == "primary":
                return address
        return self.addresses[0] if self.addresses else None

    @property
    def primary_city(self) -> str:
        """City of the primary address, else of the first service area."""
        address = self.primary_address
        if address and address.city:
            return address.city
        if self.service_areas:
            return self.service_areas[0].city
        return ""

    @property
    def primary_state(self) -> str:
        address = self.primary_address
        if address and address.city:
            return address.state_abbr
        if self.service_areas:
            return self.service_areas[0].state_abbr
        return ""

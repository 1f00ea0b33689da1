import pytest

from siteforge.business import BusinessInfo
from siteforge.content import (
    build_site_config,
    city_from,
    default_hero,
    default_service_areas,
    default_services,
    default_value_props,
    research_from,
    value_props_from,
)
from siteforge.validators import BusinessValidationError, business_issues, validate_business_info


def test_from_dict_accepts_camel_and_snake_case():
    camel = BusinessInfo.from_dict(
        {"name": "A", "industry": "hvac", "yearsInBusiness": 3, "serviceAreas": [{"city": "Cary", "state": "nc"}]}
    )
    snake = BusinessInfo.from_dict(
        {"name": "A", "industry": "hvac", "years_in_business": 3, "service_areas": [{"city": "Cary", "state": "nc"}]}
    )

    assert camel == snake
    assert camel.service_areas[0].state_abbr == "NC"
    assert camel.service_areas[0].priority == "medium"


def test_service_slug_is_derived_from_name():
    info = BusinessInfo.from_dict({"name": "A", "industry": "hvac", "services": [{"name": "AC Repair & Tune-Up"}]})
    assert info.services[0].slug == "ac-repair-tune-up"


def test_primary_city_falls_back_to_first_service_area():
    info = BusinessInfo.from_dict(
        {"name": "A", "industry": "hvac", "serviceAreas": [{"city": "Durham", "state": "North Carolina", "stateAbbr": "NC"}]}
    )
    assert info.primary_address is None
    assert info.primary_city == "Durham"
    assert info.primary_state == "NC"


def test_business_issues_lists_every_problem():
    info = BusinessInfo.from_dict(
        {
            "name": "",
            "industry": "spaceships",
            "tone": "sarcastic",
            "serviceAreas": [{"city": "", "state": "NC", "priority": "urgent"}],
        }
    )

    issues = business_issues(info)

    assert "name is required" in issues
    assert any("spaceships" in issue for issue in issues)
    assert any("sarcastic" in issue for issue in issues)
    assert "service_areas[0].city is required" in issues
    with pytest.raises(BusinessValidationError):
        validate_business_info(info)


def test_defaults_when_services_and_areas_are_missing():
    info = BusinessInfo.from_dict(
        {"name": "Bolt Electric", "industry": "electrical", "addresses": [{"city": "Austin", "state": "TX"}]}
    )

    assert [s.name for s in default_services(info)] == ["Electrical Services"]
    areas = default_service_areas(info)
    assert [(a.city, a.state_abbr, a.priority) for a in areas] == [("Austin", "TX", "high")]
    assert default_service_areas(BusinessInfo(name="x", industry="electrical")) == []


def test_research_shape_requires_insights_and_keywords():
    assert research_from({"industryInsights": ["a"], "keywords": []}) is None
    assert research_from("not json") is None
    result = research_from('{"industryInsights": ["a"], "keywords": ["k"]}')
    assert result.keywords == ["k"]
    assert result.local_seo_tips == []


def test_value_props_accept_wrapped_list():
    props = value_props_from({"valueProps": [{"title": "Fast"}, {"description": "untitled"}]})
    assert [(p.title, p.icon) for p in props] == [("Fast", "Star")]
    assert value_props_from([]) is None


def test_city_shape_fills_identity_from_area():
    info = BusinessInfo.from_dict(
        {"name": "A", "industry": "plumbing", "serviceAreas": [{"city": "Mesa", "state": "AZ", "neighborhoods": ["Dobson"]}]}
    )
    area = info.service_areas[0]

    assert city_from({"h1": "Plumbers in Mesa"}, info, area) is None

    city = city_from({"h1": "Plumbers in Mesa", "metaTitle": "t", "metaDescription": "d"}, info, area)
    assert (city.name, city.slug, city.state_abbr) == ("Mesa", "mesa-az", "AZ")
    assert city.primary_keyword == "plumbing Mesa"
    assert city.neighborhoods == ["Dobson"]


def test_site_config_theme_and_seo():
    info = BusinessInfo.from_dict(
        {
            "name": "Lux Pools",
            "industry": "pool-service",
            "tone": "premium",
            "brandColors": {"primary": "#000000"},
            "reviews": [{"platform": "google", "rating": 4.9, "count": 87}],
            "addresses": [{"city": "Tampa", "state": "FL", "zip": "33602", "street": "1 Bay St"}],
        }
    )
    site = build_site_config(
        info,
        hero=default_hero(info),
        value_props=default_value_props(),
        services=default_services(info),
        service_copy={},
        cities=[],
        about_text="",
    )

    assert site.theme.color_scheme == "custom"
    assert site.theme.colors["primary"] == "#000000"
    assert site.theme.style == "modern"
    assert site.rating.display == "4.9 stars (87 reviews)"
    assert site.domain == "lux-pools.com"
    assert site.seo.canonical_base == "https://lux-pools.com"
    assert site.seo.default_title == "Lux Pools | Pool Service in Tampa"
    assert site.primary_address.full == "1 Bay St, Tampa, FL 33602"
    assert site.primary_city is None
    assert site.tagline == site.hero_subheadline
    assert site.to_dict()["seo"]["titleTemplate"] == "%s | Lux Pools"


def test_hours_ignore_unknown_keys_and_fill_defaults():
    info = BusinessInfo.from_dict(
        {"name": "A", "industry": "roofing", "hours": {"weekdays": "7:00 AM - 5:00 PM", "notes": "by appointment"}}
    )

    assert info.hours.weekdays == "7:00 AM - 5:00 PM"
    assert info.hours.saturday == "9:00 AM - 4:00 PM"
    assert info.hours.sunday == "Closed"
    assert info.hours.emergency is False


def test_services_with_the_same_slug_are_rejected():
    info = BusinessInfo.from_dict(
        {"name": "A", "industry": "roofing", "services": [{"name": "Roof Repair"}, {"name": "Roof-Repair"}]}
    )

    issues = business_issues(info)

    assert issues == ["services[1] slug 'roof-repair' duplicates services[0]"]

import pytest

from siteforge.config import merge_settings
from siteforge.llm.routing import (
    ESTIMATED_TOKENS,
    STRUCTURED_TASK_TYPES,
    TASK_ROUTING,
    TaskRouter,
    is_structured,
    system_prompt_for,
)
from siteforge.llm.types import Provider, TaskType, UnknownTaskTypeError


def test_every_task_type_is_routed_and_estimated():
    router = TaskRouter(merge_settings())
    for task_type in TaskType:
        assert router.get_provider(task_type) in (Provider.CLAUDE, Provider.GROQ)
        assert task_type in ESTIMATED_TOKENS
    assert set(TASK_ROUTING) == set(TaskType)


def test_routing_is_deterministic():
    router = TaskRouter(merge_settings())
    assert router.get_provider("research:industry") is Provider.CLAUDE
    assert router.get_provider("expand:cities") is Provider.GROQ
    assert [router.get_provider(t) for t in TaskType] == [router.get_provider(t) for t in TaskType]


def test_routing_decision_cost_matches_table():
    router = TaskRouter(merge_settings())
    decision = router.get_routing_decision(TaskType.EXPAND_FAQS)

    assert decision.provider is Provider.GROQ
    assert (decision.estimated_input_tokens, decision.estimated_output_tokens) == (600, 1500)
    assert decision.estimated_cost == pytest.approx(router.cost_for(Provider.GROQ, 600, 1500))
    assert "Structured generation" in decision.reason


def test_estimate_cost_for_mixed_task_list():
    router = TaskRouter(merge_settings())
    estimate = router.estimate_cost(["research:industry", "expand:cities"])

    assert estimate.claude_tokens == 3500
    assert estimate.groq_tokens == 1500
    assert estimate.claude_cost == pytest.approx(0.0345)
    assert estimate.groq_cost == pytest.approx(0.000105)
    assert estimate.total_cost == pytest.approx(0.034605)
    # all-claude baseline: 2000 input + 3000 output tokens
    assert estimate.savings == pytest.approx(0.051 - 0.034605)
    assert estimate.savings_percent == pytest.approx((0.051 - 0.034605) / 0.051 * 100)


def test_estimate_cost_of_nothing_is_zero():
    estimate = TaskRouter(merge_settings()).estimate_cost([])
    assert estimate.total_cost == 0
    assert estimate.savings == 0
    assert estimate.savings_percent == 0


def test_savings_never_negative_across_all_types():
    router = TaskRouter(merge_settings())
    assert router.estimate_cost(list(TaskType)).savings >= 0


def test_cost_is_monotonic_in_tokens():
    router = TaskRouter(merge_settings())
    for provider in Provider:
        assert router.cost_for(provider, 100, 100) <= router.cost_for(provider, 200, 100)
        assert router.cost_for(provider, 100, 100) <= router.cost_for(provider, 100, 200)


def test_unknown_task_type_is_rejected():
    router = TaskRouter(merge_settings())
    with pytest.raises(UnknownTaskTypeError):
        router.get_provider("content:poetry")
    with pytest.raises(UnknownTaskTypeError):
        router.estimate_cost(["research:industry", "nope"])


def test_routing_override_moves_task_to_claude():
    router = TaskRouter(merge_settings({"routing": {"expand:cities": "claude"}}))
    assert router.get_provider("expand:cities") is Provider.CLAUDE
    assert router.estimate_cost(["expand:cities"]).savings == pytest.approx(0)


def test_routing_override_validation():
    with pytest.raises(UnknownTaskTypeError):
        TaskRouter(merge_settings({"routing": {"expand:planets": "groq"}}))
    with pytest.raises(UnknownTaskTypeError):
        TaskRouter(merge_settings({"routing": {"expand:cities": "gemini"}}))


def test_pricing_comes_from_settings():
    router = TaskRouter(merge_settings({"pricing": {"groq": {"input_per_1m": 1.0, "output_per_1m": 2.0}}}))
    assert router.cost_for(Provider.GROQ, 1_000_000, 1_000_000) == pytest.approx(3.0)


def test_structured_types_and_system_prompts():
    assert is_structured("expand:cities")
    assert is_structured(TaskType.RESEARCH_KEYWORDS)
    assert not is_structured("content:hero-copy")
    assert "local SEO" in system_prompt_for("expand:cities")
    assert system_prompt_for("review:seo-audit") == "You are a helpful assistant."


def test_structured_set_matches_task_type_flag():
    assert len(STRUCTURED_TASK_TYPES) == 11
    assert all(t.structured for t in TaskType if t.value.startswith(("expand:", "architecture:")))
    assert not TaskType.GENERATE_PAGE_CODE.structured

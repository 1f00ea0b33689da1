"""Static task routing tables and cost estimation.

Claude: research, creative writing, strategic decisions, quality review.
Groq: expansion, boilerplate, structured generation.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping

from ..config import pricing_per_token
from .types import CostEstimate, Provider, RoutingDecision, TaskType, UnknownTaskTypeError

_C = Provider.CLAUDE
_G = Provider.GROQ

TASK_ROUTING: Mapping[TaskType, Provider] = MappingProxyType(
    {
        TaskType.RESEARCH_INDUSTRY: _C,
        TaskType.RESEARCH_COMPETITORS: _C,
        TaskType.RESEARCH_LOCAL_SEO: _C,
        TaskType.RESEARCH_KEYWORDS: _C,
        TaskType.CONTENT_HERO_COPY: _C,
        TaskType.CONTENT_SERVICE_DESCRIPTIONS: _C,
        TaskType.CONTENT_VALUE_PROPS: _C,
        TaskType.CONTENT_ABOUT_PAGE: _C,
        TaskType.CONTENT_META_DESCRIPTIONS: _C,
        TaskType.CONTENT_BLOG_POSTS: _C,
        TaskType.ARCHITECTURE_PAGE_STRUCTURE: _C,
        TaskType.ARCHITECTURE_COMPONENT_SELECTION: _C,
        TaskType.ARCHITECTURE_SITEMAP: _C,
        TaskType.REVIEW_QUALITY_CHECK: _C,
        TaskType.REVIEW_SEO_AUDIT: _C,
        TaskType.REVIEW_ACCESSIBILITY: _C,
        TaskType.CONVERSATION_INTERVIEW: _C,
        TaskType.CONVERSATION_CLARIFY: _C,
        TaskType.EXPAND_CITIES: _G,
        TaskType.EXPAND_NEIGHBORHOODS: _G,
        TaskType.EXPAND_FAQS: _G,
        TaskType.EXPAND_SERVICE_FEATURES: _G,
        TaskType.EXPAND_TESTIMONIALS: _G,
        TaskType.GENERATE_COMPONENT_CODE: _G,
        TaskType.GENERATE_PAGE_CODE: _G,
        TaskType.GENERATE_SCHEMA_MARKUP: _G,
        TaskType.GENERATE_DATA_FILES: _G,
        TaskType.TRANSFORM_TEMPLATE: _G,
        TaskType.TRANSFORM_CONTENT_INTERPOLATION: _G,
    }
)

# (input, output) tokens for a typical call of each task type.
ESTIMATED_TOKENS: Mapping[TaskType, tuple[int, int]] = MappingProxyType(
    {
        TaskType.RESEARCH_INDUSTRY: (1500, 2000),
        TaskType.RESEARCH_COMPETITORS: (1200, 1500),
        TaskType.RESEARCH_LOCAL_SEO: (1000, 1500),
        TaskType.RESEARCH_KEYWORDS: (800, 1000),
        TaskType.CONTENT_HERO_COPY: (1000, 500),
        TaskType.CONTENT_SERVICE_DESCRIPTIONS: (600, 500),  # per service
        TaskType.CONTENT_VALUE_PROPS: (800, 400),
        TaskType.CONTENT_ABOUT_PAGE: (1200, 1000),
        TaskType.CONTENT_META_DESCRIPTIONS: (400, 200),  # per page
        TaskType.CONTENT_BLOG_POSTS: (1500, 2000),
        TaskType.ARCHITECTURE_PAGE_STRUCTURE: (1500, 1000),
        TaskType.ARCHITECTURE_COMPONENT_SELECTION: (1200, 800),
        TaskType.ARCHITECTURE_SITEMAP: (800, 600),
        TaskType.REVIEW_QUALITY_CHECK: (2000, 800),
        TaskType.REVIEW_SEO_AUDIT: (1500, 1000),
        TaskType.REVIEW_ACCESSIBILITY: (1200, 800),
        TaskType.CONVERSATION_INTERVIEW: (800, 200),  # per turn
        TaskType.CONVERSATION_CLARIFY: (500, 200),
        TaskType.EXPAND_CITIES: (500, 1000),
        TaskType.EXPAND_NEIGHBORHOODS: (400, 800),
        TaskType.EXPAND_FAQS: (600, 1500),
        TaskType.EXPAND_SERVICE_FEATURES: (400, 800),
        TaskType.EXPAND_TESTIMONIALS: (500, 1000),
        TaskType.GENERATE_COMPONENT_CODE: (800, 1500),  # per component
        TaskType.GENERATE_PAGE_CODE: (1000, 2000),  # per page
        TaskType.GENERATE_SCHEMA_MARKUP: (600, 800),
        TaskType.GENERATE_DATA_FILES: (500, 1200),
        TaskType.TRANSFORM_TEMPLATE: (800, 1200),
        TaskType.TRANSFORM_CONTENT_INTERPOLATION: (400, 600),
    }
)

# Task types whose output is parsed as JSON by the executor.
STRUCTURED_TASK_TYPES = frozenset(t for t in TaskType if t.structured)

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

SYSTEM_PROMPTS: Mapping[TaskType, str] = MappingProxyType(
    {
        TaskType.RESEARCH_INDUSTRY: (
            "You are a market research expert specializing in local service businesses. "
            "Provide detailed, actionable insights."
        ),
        TaskType.CONTENT_HERO_COPY: (
            "You are an expert copywriter specializing in conversion-focused headlines "
            "and CTAs for service businesses."
        ),
        TaskType.CONTENT_SERVICE_DESCRIPTIONS: (
            "You are a marketing copywriter creating compelling service descriptions "
            "that highlight benefits and build trust."
        ),
        TaskType.CONTENT_VALUE_PROPS: (
            "You are a marketing strategist. Create compelling value propositions."
        ),
        TaskType.CONTENT_ABOUT_PAGE: (
            "You are a copywriter telling the story of local service businesses "
            "in a warm, credible voice."
        ),
        TaskType.EXPAND_CITIES: (
            "You are a local SEO expert generating city-specific content data. Return valid JSON."
        ),
        TaskType.EXPAND_FAQS: (
            "You are a content strategist creating helpful FAQ content. Return valid JSON arrays."
        ),
        TaskType.GENERATE_COMPONENT_CODE: (
            "You are an expert React/Next.js developer. Generate clean, production-ready TypeScript code."
        ),
    }
)

ROUTING_REASONS: Mapping[Provider, str] = MappingProxyType(
    {
        Provider.CLAUDE: "Requires creative thinking, strategic decisions, or quality assessment",
        Provider.GROQ: "Structured generation, data expansion, or template transformation",
    }
)


def as_task_type(value: TaskType | str) -> TaskType:
    try:
        return TaskType(value)
    except ValueError as exc:
        raise UnknownTaskTypeError(f"Unknown task type: {value!r}") from exc


def is_structured(task_type: TaskType | str) -> bool:
    return as_task_type(task_type) in STRUCTURED_TASK_TYPES


def system_prompt_for(task_type: TaskType | str) -> str:
    return SYSTEM_PROMPTS.get(as_task_type(task_type), DEFAULT_SYSTEM_PROMPT)


class TaskRouter:
    """Deterministic task type -> provider assignment with cost estimates."""

    def __init__(self, config: Dict[str, Any] | None = None) -> None:
        config = config or {}
        routing: Dict[TaskType, Provider] = dict(TASK_ROUTING)
        for raw_type, raw_provider in (config.get("routing") or {}).items():
            task_type = as_task_type(raw_type)
            try:
                routing[task_type] = Provider(raw_provider)
            except ValueError as exc:
                raise UnknownTaskTypeError(
                    f"Routing override for {task_type.value} names unknown provider {raw_provider!r}"
                ) from exc
        self._routing: Mapping[TaskType, Provider] = MappingProxyType(routing)
        self._pricing = {provider: pricing_per_token(config, provider.value) for provider in Provider}

    def get_provider(self, task_type: TaskType | str) -> Provider:
        return self._routing[as_task_type(task_type)]

    def cost_for(self, provider: Provider, input_tokens: int, output_tokens: int) -> float:
        in_rate, out_rate = self._pricing[provider]
        return input_tokens * in_rate + output_tokens * out_rate

    def get_routing_decision(self, task_type: TaskType | str) -> RoutingDecision:
        task_type = as_task_type(task_type)
        provider = self._routing[task_type]
        input_tokens, output_tokens = ESTIMATED_TOKENS[task_type]
        return RoutingDecision(
            task_type=task_type,
            provider=provider,
            reason=ROUTING_REASONS[provider],
            estimated_input_tokens=input_tokens,
            estimated_output_tokens=output_tokens,
            estimated_cost=self.cost_for(provider, input_tokens, output_tokens),
        )

    def estimate_cost(self, task_types: Iterable[TaskType | str]) -> CostEstimate:
        tokens = {provider: [0, 0] for provider in Provider}
        for raw in task_types:
            task_type = as_task_type(raw)
            input_tokens, output_tokens = ESTIMATED_TOKENS[task_type]
            bucket = tokens[self._routing[task_type]]
            bucket[0] += input_tokens
            bucket[1] += output_tokens

        claude_cost = self.cost_for(Provider.CLAUDE, *tokens[Provider.CLAUDE])
        groq_cost = self.cost_for(Provider.GROQ, *tokens[Provider.GROQ])
        all_claude_cost = self.cost_for(
            Provider.CLAUDE,
            tokens[Provider.CLAUDE][0] + tokens[Provider.GROQ][0],
            tokens[Provider.CLAUDE][1] + tokens[Provider.GROQ][1],
        )

        total_cost = claude_cost + groq_cost
        savings = all_claude_cost - total_cost
        savings_percent = (savings / all_claude_cost) * 100 if all_claude_cost > 0 else 0.0

        return CostEstimate(
            claude_tokens=sum(tokens[Provider.CLAUDE]),
            claude_cost=claude_cost,
            groq_tokens=sum(tokens[Provider.GROQ]),
            groq_cost=groq_cost,
            total_cost=total_cost,
            savings=savings,
            savings_percent=savings_percent,
        )

    def table(self) -> Dict[TaskType, Provider]:
        return dict(self._routing)

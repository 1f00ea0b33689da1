"""Shared LLM data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class Provider(str, Enum):
    CLAUDE = "claude"
    GROQ = "groq"


class TaskType(str, Enum):
    # Claude: research, creative writing, strategic decisions, review
    RESEARCH_INDUSTRY = "research:industry"
    RESEARCH_COMPETITORS = "research:competitors"
    RESEARCH_LOCAL_SEO = "research:local-seo"
    RESEARCH_KEYWORDS = "research:keywords"
    CONTENT_HERO_COPY = "content:hero-copy"
    CONTENT_SERVICE_DESCRIPTIONS = "content:service-descriptions"
    CONTENT_VALUE_PROPS = "content:value-props"
    CONTENT_ABOUT_PAGE = "content:about-page"
    CONTENT_META_DESCRIPTIONS = "content:meta-descriptions"
    CONTENT_BLOG_POSTS = "content:blog-posts"
    ARCHITECTURE_PAGE_STRUCTURE = "architecture:page-structure"
    ARCHITECTURE_COMPONENT_SELECTION = "architecture:component-selection"
    ARCHITECTURE_SITEMAP = "architecture:sitemap"
    REVIEW_QUALITY_CHECK = "review:quality-check"
    REVIEW_SEO_AUDIT = "review:seo-audit"
    REVIEW_ACCESSIBILITY = "review:accessibility"
    CONVERSATION_INTERVIEW = "conversation:interview"
    CONVERSATION_CLARIFY = "conversation:clarify"
    # Groq: expansion, boilerplate, structured generation
    EXPAND_CITIES = "expand:cities"
    EXPAND_NEIGHBORHOODS = "expand:neighborhoods"
    EXPAND_FAQS = "expand:faqs"
    EXPAND_SERVICE_FEATURES = "expand:service-features"
    EXPAND_TESTIMONIALS = "expand:testimonials"
    GENERATE_COMPONENT_CODE = "generate:component-code"
    GENERATE_PAGE_CODE = "generate:page-code"
    GENERATE_SCHEMA_MARKUP = "generate:schema-markup"
    GENERATE_DATA_FILES = "generate:data-files"
    TRANSFORM_TEMPLATE = "transform:template"
    TRANSFORM_CONTENT_INTERPOLATION = "transform:content-interpolation"

    @property
    def structured(self) -> bool:
        """Output of this task type is parsed as JSON by the executor."""
        group = self.value.split(":", 1)[0]
        return group in ("expand", "architecture") or self.value in (
            "generate:schema-markup",
            "generate:data-files",
            "research:keywords",
        )


@dataclass(frozen=True)
class LLMTask:
    id: str
    type: TaskType
    provider: Provider
    input: Any
    priority: str = "normal"
    dependencies: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class LLMUsage:
    tokens: TokenUsage = field(default_factory=TokenUsage)
    cost: float = 0.0
    latency_ms: int = 0


@dataclass
class ChatResponse:
    content: str
    usage: LLMUsage
    stop_reason: str
    model: str


@dataclass
class LLMResponse(Generic[T]):
    success: bool
    usage: LLMUsage
    provider: Provider
    model: str
    task_id: str
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, task: LLMTask, model: str, error: str) -> "LLMResponse[Any]":
        return cls(
            success=False,
            usage=LLMUsage(),
            provider=task.provider,
            model=model,
            task_id=task.id,
            error=error,
        )

    def unwrap_or(self, default: T) -> T:
        if self.success and self.data is not None:
            return self.data
        return default


@dataclass(frozen=True)
class RoutingDecision:
    task_type: TaskType
    provider: Provider
    reason: str
    estimated_input_tokens: int
    estimated_output_tokens: int
    estimated_cost: float


@dataclass(frozen=True)
class CostEstimate:
    claude_tokens: int
    claude_cost: float
    groq_tokens: int
    groq_cost: float
    total_cost: float
    savings: float  # vs routing every task to claude
    savings_percent: float


class ProviderError(RuntimeError):
    """Provider failed to return a valid generation."""


class ParseError(ValueError):
    """Provider text could not be parsed as JSON."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class UnknownTaskTypeError(ValueError):
    """Task type (or routing override) is not part of the routing table."""


class DependencyNotSatisfiedError(RuntimeError):
    """A task was executed before one of its dependencies."""


class TaskAlreadyExecutedError(RuntimeError):
    """Task ids are executed at most once per router."""

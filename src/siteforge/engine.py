"""Generation engine: research -> plan -> content -> code -> validate for one business."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from .business import BusinessInfo, ServiceArea, ServiceDefinition
from .config import merge_settings
from .content import (
    ResearchResult,
    ServiceCopy,
    about_from,
    build_site_config,
    city_from,
    default_about,
    default_city,
    default_hero,
    default_research,
    default_service_areas,
    default_service_copy,
    default_services,
    default_value_props,
    hero_from,
    research_from,
    service_copy_from,
    supplied_value_props,
    value_props_from,
)
from .llm.router import LLMRouter
from .llm.types import CostEstimate, LLMResponse, LLMUsage, Provider, TaskType
from .prompts import (
    build_about_prompt,
    build_city_prompt,
    build_city_system_prompt,
    build_hero_prompt,
    build_research_prompt,
    build_service_prompt,
    build_value_props_prompt,
)
from .scaffold import FILE_TYPES, GenerationResult, generate_project
from .site import CityConfig, SiteConfig
from .validators import validate_business_info, validate_output

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

PHASES = ("research", "plan", "generate-content", "generate-code", "validate")

PHASE_STATUS = {
    "research": "researching",
    "plan": "planning",
    "generate-content": "generating-content",
    "generate-code": "generating-code",
    "validate": "reviewing",
}


@dataclass
class GenerationStats:
    total_files: int = 0
    total_lines: int = 0
    total_bytes: int = 0
    files_by_type: Dict[str, int] = field(default_factory=lambda: {t: 0 for t in FILE_TYPES})
    claude_usage: LLMUsage = field(default_factory=LLMUsage)
    groq_usage: LLMUsage = field(default_factory=LLMUsage)
    total_cost: float = 0.0
    duration_ms: int = 0


class GenerationEngine:
    """Runs one business's website generation.

    Every provider failure inside a phase is replaced by a template default,
    so a run always finishes. Only invalid business info (before research)
    and task sequencing errors are raised to the caller.
    """

    def __init__(
        self,
        config: Dict[str, Any] | None = None,
        router: LLMRouter | None = None,
        scaffold: Callable[[SiteConfig, str], GenerationResult] = generate_project,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config if config is not None else merge_settings()
        self.router = router or LLMRouter(self.config)
        self._scaffold = scaffold
        engine_cfg = self.config.get("engine", {})
        self.max_workers = max(1, int(engine_cfg.get("max_workers", 4)))
        self.about_page = bool(engine_cfg.get("about_page", True))

        self.status = "pending"
        self.completed_phases: List[str] = []
        self.research_result: Optional[ResearchResult] = None

        self._cancel = threading.Event()
        self._stats_lock = threading.Lock()
        self._stats = GenerationStats()
        self._clock = clock
        self._start = clock()

    # -- bookkeeping ---------------------------------------------------------

    def _enter(self, phase: str) -> None:
        self.status = PHASE_STATUS[phase]
        logger.info("Phase %s started", phase)

    def _leave(self, phase: str) -> None:
        self.completed_phases.append(phase)
        logger.info("Phase %s finished", phase)

    def _record_usage(self, response: LLMResponse[Any]) -> None:
        usage = response.usage
        with self._stats_lock:
            bucket = self._stats.claude_usage if response.provider is Provider.CLAUDE else self._stats.groq_usage
            bucket.tokens.input_tokens += usage.tokens.input_tokens
            bucket.tokens.output_tokens += usage.tokens.output_tokens
            bucket.cost += usage.cost
            bucket.latency_ms += usage.latency_ms
            self._stats.total_cost += usage.cost

    def _run_task(self, task_type: TaskType, prompt: str, system_prompt: str = "", **metadata: Any) -> LLMResponse[Any]:
        payload = {"prompt": prompt}
        if system_prompt:
            payload["system_prompt"] = system_prompt
        task = self.router.create_task(task_type, payload, metadata=metadata)
        response = self.router.execute(task, cancel_event=self._cancel)
        self._record_usage(response)
        return response

    @staticmethod
    def _shape_or(response: LLMResponse[Any], shape: Callable[[Any], Optional[T]], default: T) -> T:
        value = shape(response.unwrap_or(None))
        if value is None:
            logger.warning(
                "Task %s fell back to defaults: %s",
                response.task_id,
                response.error or "unexpected output shape",
            )
            return default
        return value

    def _fan_out(self, fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
        items = list(items)
        if not items:
            return []
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
            return list(pool.map(fn, items))

    # -- phases --------------------------------------------------------------

    def research(self, info: BusinessInfo) -> ResearchResult:
        validate_business_info(info)
        self._enter("research")
        response = self._run_task(
            TaskType.RESEARCH_INDUSTRY,
            build_research_prompt(info),
            "Provide actionable, specific insights. Respond with JSON only.",
        )
        self.research_result = self._shape_or(response, research_from, default_research(info))
        self._leave("research")
        return self.research_result

    def plan(self, info: BusinessInfo) -> None:
        # Page structure and components are templated per industry; the
        # architecture:* task types stay routable but are not issued here.
        self._enter("plan")
        logger.debug("Using templated architecture for industry %s", info.industry)
        self._leave("plan")

    def generate_content(self, info: BusinessInfo) -> SiteConfig:
        # service copy is keyed by slug, which validation keeps unique
        validate_business_info(info)
        self._enter("generate-content")

        hero = self._shape_or(
            self._run_task(TaskType.CONTENT_HERO_COPY, build_hero_prompt(info), "Respond with JSON only."),
            hero_from,
            default_hero(info),
        )

        if info.value_props:
            value_props = supplied_value_props(info)
        else:
            value_props = self._shape_or(
                self._run_task(TaskType.CONTENT_VALUE_PROPS, build_value_props_prompt(info), "Respond with JSON only."),
                value_props_from,
                default_value_props(),
            )

        services = default_services(info)

        def describe(service: ServiceDefinition) -> ServiceCopy:
            response = self._run_task(
                TaskType.CONTENT_SERVICE_DESCRIPTIONS,
                build_service_prompt(info, service),
                "Respond with JSON only.",
                service=service.slug,
            )
            return self._shape_or(response, service_copy_from, default_service_copy(service))

        service_copy = dict(zip((s.slug for s in services), self._fan_out(describe, services)))

        if self.about_page:
            about_text = self._shape_or(
                self._run_task(TaskType.CONTENT_ABOUT_PAGE, build_about_prompt(info)),
                about_from,
                default_about(info),
            )
        else:
            about_text = default_about(info)

        def expand(area: ServiceArea) -> CityConfig:
            response = self._run_task(
                TaskType.EXPAND_CITIES,
                build_city_prompt(info, area),
                build_city_system_prompt(info),
                city=area.city,
            )
            return self._shape_or(
                response,
                lambda data: city_from(data, info, area),
                default_city(info, area),
            )

        cities = self._fan_out(expand, default_service_areas(info))

        site = build_site_config(
            info,
            hero=hero,
            value_props=value_props,
            services=services,
            service_copy=service_copy,
            cities=cities,
            about_text=about_text,
            research=self.research_result,
        )
        self._leave("generate-content")
        return site

    def generate_code(self, site: SiteConfig, output_dir: str) -> GenerationResult:
        self._enter("generate-code")
        result = self._scaffold(site, output_dir)
        with self._stats_lock:
            self._stats.total_files = len(result.files)
            self._stats.total_lines = sum(f.lines for f in result.files)
            self._stats.total_bytes = sum(f.size for f in result.files)
            by_type = {t: 0 for t in FILE_TYPES}
            for generated in result.files:
                by_type[generated.type] = by_type.get(generated.type, 0) + 1
            self._stats.files_by_type = by_type
        self._leave("generate-code")
        return result

    def validate(self, output_dir: str) -> Dict[str, Any]:
        self._enter("validate")
        report = validate_output(output_dir)
        if not report["ok"]:
            logger.warning("Generated project is missing files: %s", ", ".join(report["missing"]))
        self._leave("validate")
        self.status = "complete"
        return report

    def run(
        self,
        info: BusinessInfo,
        output_dir: str,
        on_phase: Optional[Callable[[str], None]] = None,
    ) -> Dict[str, Any]:
        """All five phases in order; ``on_phase`` is called as each one starts."""

        def notify(phase: str) -> None:
            if on_phase is not None:
                on_phase(phase)

        validate_business_info(info)
        notify("research")
        research = self.research(info)
        notify("plan")
        self.plan(info)
        notify("generate-content")
        site = self.generate_content(info)
        notify("generate-code")
        generation = self.generate_code(site, output_dir)
        notify("validate")
        validation = self.validate(output_dir)
        return {
            "ok": validation["ok"],
            "research": research,
            "site_config": site,
            "generation": generation,
            "validation": validation,
            "stats": self.get_stats(),
        }

    # -- accessors -----------------------------------------------------------

    def get_stats(self) -> GenerationStats:
        with self._stats_lock:
            self._stats.duration_ms = int((self._clock() - self._start) * 1000)
            return deepcopy(self._stats)

    def cancel(self) -> None:
        """Sub-tasks not yet dispatched resolve to their defaults."""
        self._cancel.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def planned_task_types(self, info: BusinessInfo) -> List[TaskType]:
        planned = [TaskType.RESEARCH_INDUSTRY, TaskType.CONTENT_HERO_COPY]
        if not info.value_props:
            planned.append(TaskType.CONTENT_VALUE_PROPS)
        planned += [TaskType.CONTENT_SERVICE_DESCRIPTIONS] * len(default_services(info))
        if self.about_page:
            planned.append(TaskType.CONTENT_ABOUT_PAGE)
        planned += [TaskType.EXPAND_CITIES] * len(default_service_areas(info))
        return planned

    def estimate(self, info: BusinessInfo) -> CostEstimate:
        return self.router.estimate_cost(self.planned_task_types(info))

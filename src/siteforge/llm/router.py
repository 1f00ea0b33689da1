"""Task routing facade: owns the routing table, both clients and the task history."""

from __future__ import annotations

import os
import threading
from typing import Any, Dict, Iterable, Mapping, Optional

from ..config import llm_settings, pricing_per_token
from ..utils import generate_id
from .executor import TaskExecutor
from .providers.base import ChatClient
from .providers.claude import ClaudeClient
from .providers.groq import GroqClient
from .routing import TaskRouter, as_task_type
from .types import CostEstimate, LLMResponse, LLMTask, Provider, RoutingDecision, TaskType

PRIORITIES = ("high", "normal", "low")


def _client_kwargs(config: Dict[str, Any], provider: Provider) -> Dict[str, Any]:
    settings = llm_settings(config, provider.value)
    return {
        "max_tokens": settings["max_tokens"],
        "temperature": settings["temperature"],
        "timeout_seconds": settings["timeout_seconds"],
        "pricing": pricing_per_token(config, provider.value),
    }


def default_clients(config: Dict[str, Any]) -> Dict[Provider, ChatClient]:
    """Env-configured clients. A missing API key only fails at call time."""
    return {
        Provider.CLAUDE: ClaudeClient(
            model=os.getenv("CLAUDE_MODEL") or llm_settings(config, "claude")["model"],
            **_client_kwargs(config, Provider.CLAUDE),
        ),
        Provider.GROQ: GroqClient(
            model=os.getenv("GROQ_MODEL") or llm_settings(config, "groq")["model"],
            **_client_kwargs(config, Provider.GROQ),
        ),
    }


class LLMRouter:
    def __init__(
        self,
        config: Dict[str, Any] | None = None,
        clients: Mapping[Provider, ChatClient] | None = None,
    ) -> None:
        self.config = config or {}
        self.task_router = TaskRouter(self.config)
        self.clients: Dict[Provider, ChatClient] = dict(clients or default_clients(self.config))
        self.executor = TaskExecutor(self.clients)

    @property
    def claude(self) -> ChatClient:
        return self.clients[Provider.CLAUDE]

    @property
    def groq(self) -> ChatClient:
        return self.clients[Provider.GROQ]

    def get_provider(self, task_type: TaskType | str) -> Provider:
        return self.task_router.get_provider(task_type)

    def get_routing_decision(self, task_type: TaskType | str) -> RoutingDecision:
        return self.task_router.get_routing_decision(task_type)

    def estimate_cost(self, task_types: Iterable[TaskType | str]) -> CostEstimate:
        return self.task_router.estimate_cost(task_types)

    def create_task(
        self,
        task_type: TaskType | str,
        input: Any,
        priority: str = "normal",
        dependencies: Optional[Iterable[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> LLMTask:
        if priority not in PRIORITIES:
            raise ValueError(f"Invalid priority: {priority!r}")
        task_type = as_task_type(task_type)
        return LLMTask(
            id=generate_id("task"),
            type=task_type,
            provider=self.task_router.get_provider(task_type),
            input=input,
            priority=priority,
            dependencies=list(dependencies or []),
            metadata=dict(metadata or {}),
        )

    def execute(self, task: LLMTask, cancel_event: Optional[threading.Event] = None) -> LLMResponse[Any]:
        return self.executor.execute(task, cancel_event=cancel_event)

    def get_task_result(self, task_id: str) -> Optional[LLMResponse[Any]]:
        return self.executor.get_result(task_id)

    def clear_history(self) -> None:
        self.executor.clear()

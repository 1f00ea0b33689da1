"""Turns one LLMTask into one provider call plus a typed result."""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Set

from ..utils import strip_code_fences
from .providers.base import ChatClient
from .routing import is_structured, system_prompt_for
from .types import (
    DependencyNotSatisfiedError,
    LLMResponse,
    LLMTask,
    Provider,
    TaskAlreadyExecutedError,
)

logger = logging.getLogger(__name__)


def build_prompt(task: LLMTask) -> tuple[str, str]:
    """System + user prompt for a task.

    ``input`` may carry ``prompt`` and ``system_prompt``; any other input is
    sent to the model as JSON.
    """
    base_system = system_prompt_for(task.type)
    payload = task.input if isinstance(task.input, dict) else {}
    extra_system = payload.get("system_prompt") or payload.get("systemPrompt")
    system = f"{base_system}\n\n{extra_system}" if extra_system else base_system

    if isinstance(task.input, str):
        prompt = task.input
    elif payload.get("prompt"):
        prompt = str(payload["prompt"])
    else:
        prompt = json.dumps(task.input, ensure_ascii=False, default=str)
    return system, prompt


class TaskExecutor:
    def __init__(self, clients: Mapping[Provider, ChatClient]) -> None:
        self.clients = dict(clients)
        self._history: Dict[str, LLMResponse[Any]] = {}
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()

    def _reserve(self, task: LLMTask) -> None:
        """Checks ordering and claims the task id; the caller must release it."""
        with self._lock:
            if task.id in self._history or task.id in self._in_flight:
                raise TaskAlreadyExecutedError(f"Task {task.id} has already been executed")
            missing = [dep for dep in task.dependencies if dep not in self._history]
            if missing:
                raise DependencyNotSatisfiedError(
                    f"Task {task.id} depends on tasks that have not completed: {', '.join(missing)}"
                )
            self._in_flight.add(task.id)

    def execute(self, task: LLMTask, cancel_event: Optional[threading.Event] = None) -> LLMResponse[Any]:
        self._reserve(task)
        try:
            client = self.clients.get(task.provider)
            model = getattr(client, "model", "unknown")
            if cancel_event is not None and cancel_event.is_set():
                response: LLMResponse[Any] = LLMResponse.failure(task, model, "cancelled")
            elif client is None:
                response = LLMResponse.failure(task, model, f"provider not available: {task.provider.value}")
            else:
                response = self._call(task, client)

            with self._lock:
                self._history[task.id] = response
            return response
        finally:
            with self._lock:
                self._in_flight.discard(task.id)

    def _call(self, task: LLMTask, client: ChatClient) -> LLMResponse[Any]:
        system, prompt = build_prompt(task)
        structured = is_structured(task.type)
        try:
            chat = client.chat(
                system=system,
                messages=[{"role": "user", "content": prompt}],
                json_mode=structured and task.provider is Provider.GROQ,
            )
        except Exception as exc:
            logger.warning("Task %s (%s) failed on %s: %s", task.id, task.type.value, task.provider.value, exc)
            return LLMResponse.failure(task, getattr(client, "model", "unknown"), str(exc))

        data: Any = chat.content
        if structured:
            try:
                data = json.loads(strip_code_fences(chat.content))
            except json.JSONDecodeError:
                logger.info("Task %s (%s) returned non-JSON output, keeping raw text", task.id, task.type.value)

        logger.debug(
            "Task %s (%s) via %s: %s tokens, $%.6f",
            task.id,
            task.type.value,
            task.provider.value,
            chat.usage.tokens.total_tokens,
            chat.usage.cost,
        )
        return LLMResponse(
            success=True,
            data=data,
            usage=chat.usage,
            provider=task.provider,
            model=chat.model,
            task_id=task.id,
        )

    def get_result(self, task_id: str) -> Optional[LLMResponse[Any]]:
        with self._lock:
            return self._history.get(task_id)

    def clear(self) -> None:
        with self._lock:
            self._history.clear()

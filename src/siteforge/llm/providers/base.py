"""LLM client interface and behaviour shared by both providers."""

from __future__ import annotations

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Protocol

from ...config import DEFAULT_SETTINGS
from ...utils import strip_code_fences
from ..types import ChatResponse, LLMResponse, LLMUsage, ParseError, Provider, TokenUsage

Message = Dict[str, str]
TokenCallback = Callable[[str], None]
CompleteCallback = Callable[[ChatResponse], None]

JSON_ONLY_INSTRUCTION = (
    "\n\nIMPORTANT: You must respond with valid JSON only. "
    "No markdown, no explanation, just the JSON object."
)


class ChatClient(Protocol):
    provider: Provider
    model: str

    def chat(
        self,
        system: str,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> ChatResponse:
        ...


class BaseChatClient(ABC):
    """Provider-independent half of a client.

    Subclasses implement ``_request`` and ``_request_stream`` (the wire
    format) and set ``provider``; pricing and defaults come from settings.
    """

    provider: Provider
    json_temperature = 0.3

    def __init__(
        self,
        api_key: Optional[str],
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[int] = None,
        pricing: Optional[tuple[float, float]] = None,
    ) -> None:
        defaults = DEFAULT_SETTINGS["llm"][self.provider.value]
        rates = DEFAULT_SETTINGS["pricing"][self.provider.value]
        self._api_key = api_key
        self.model = model or defaults["model"]
        self.default_max_tokens = int(max_tokens or defaults["max_tokens"])
        self.default_temperature = float(defaults["temperature"] if temperature is None else temperature)
        self.timeout_seconds = int(timeout_seconds or defaults["timeout_seconds"])
        self.pricing = pricing or (
            rates["input_per_1m"] / 1_000_000,
            rates["output_per_1m"] / 1_000_000,
        )

    @abstractmethod
    def _request(
        self,
        system: str,
        messages: List[Message],
        max_tokens: int,
        temperature: float,
        json_mode: bool,
    ) -> tuple[str, TokenUsage, str]:
        ...

    @abstractmethod
    def _request_stream(
        self,
        system: str,
        messages: List[Message],
        max_tokens: int,
        temperature: float,
        on_token: Optional[TokenCallback],
    ) -> tuple[str, TokenUsage, str]:
        ...

    @staticmethod
    def _check_messages(messages: List[Message]) -> None:
        if not messages:
            raise ValueError("messages must not be empty")
        for message in messages:
            if message.get("role") not in {"user", "assistant"}:
                raise ValueError(f"Unsupported message role: {message.get('role')!r}")

    def _resolve(self, max_tokens: Optional[int], temperature: Optional[float]) -> tuple[int, float]:
        return (
            int(max_tokens or self.default_max_tokens),
            self.default_temperature if temperature is None else float(temperature),
        )

    def chat(
        self,
        system: str,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> ChatResponse:
        self._check_messages(messages)
        max_tokens, temperature = self._resolve(max_tokens, temperature)

        start = time.perf_counter()
        content, tokens, stop_reason = self._request(system, messages, max_tokens, temperature, json_mode)
        latency_ms = int((time.perf_counter() - start) * 1000)

        return ChatResponse(
            content=content,
            usage=LLMUsage(tokens=tokens, cost=self.calculate_cost(tokens), latency_ms=latency_ms),
            stop_reason=stop_reason,
            model=self.model,
        )

    def stream(
        self,
        system: str,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        on_token: Optional[TokenCallback] = None,
        on_complete: Optional[CompleteCallback] = None,
    ) -> ChatResponse:
        self._check_messages(messages)
        max_tokens, temperature = self._resolve(max_tokens, temperature)

        start = time.perf_counter()
        content, tokens, stop_reason = self._request_stream(system, messages, max_tokens, temperature, on_token)
        latency_ms = int((time.perf_counter() - start) * 1000)

        response = ChatResponse(
            content=content,
            usage=LLMUsage(tokens=tokens, cost=self.calculate_cost(tokens), latency_ms=latency_ms),
            stop_reason=stop_reason,
            model=self.model,
        )
        if on_complete is not None:
            on_complete(response)
        return response

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        response = self.chat(
            system=system or "You are a helpful assistant.",
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return response.content

    def json(self, prompt: str, system: Optional[str] = None, max_tokens: Optional[int] = None) -> Any:
        response = self.chat(
            system=(system or "") + JSON_ONLY_INSTRUCTION,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=self.json_temperature,
            json_mode=True,
        )
        raw = response.content
        try:
            return json.loads(strip_code_fences(raw))
        except json.JSONDecodeError as exc:
            raise ParseError(f"Failed to parse JSON response: {exc}", raw=raw) from exc

    def calculate_cost(self, tokens: TokenUsage) -> float:
        in_rate, out_rate = self.pricing
        return tokens.input_tokens * in_rate + tokens.output_tokens * out_rate

    def to_standard_response(self, response: ChatResponse, task_id: str, data: Any = None) -> LLMResponse[Any]:
        return LLMResponse(
            success=True,
            data=data,
            usage=response.usage,
            provider=self.provider,
            model=response.model,
            task_id=task_id,
        )

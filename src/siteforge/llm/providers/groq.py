"""Groq client (OpenAI-compatible chat completions) for Llama models."""

from __future__ import annotations

import math
import os
from typing import Any, Dict, List, Optional

from openai import OpenAI

from ..types import Provider, ProviderError, TokenUsage
from .base import BaseChatClient, Message, TokenCallback

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


def _estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / 4)


class GroqClient(BaseChatClient):
    provider = Provider.GROQ
    json_temperature = 0.1

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        client: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            api_key=api_key or os.getenv("GROQ_API_KEY"),
            model=model or os.getenv("GROQ_MODEL"),
            **kwargs,
        )
        self._client = client
        if self._client is None and self._api_key:
            self._client = OpenAI(api_key=self._api_key, base_url=GROQ_BASE_URL)

    def _messages(self, system: str, messages: List[Message]) -> List[Dict[str, str]]:
        return [{"role": "system", "content": system}] + [
            {"role": m["role"], "content": m["content"]} for m in messages
        ]

    def _require_client(self) -> Any:
        if self._client is None:
            raise ProviderError("GROQ_API_KEY missing")
        return self._client

    def _request(
        self,
        system: str,
        messages: List[Message],
        max_tokens: int,
        temperature: float,
        json_mode: bool,
    ) -> tuple[str, TokenUsage, str]:
        client = self._require_client()
        params: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": self._messages(system, messages),
            "timeout": self.timeout_seconds,
        }
        if json_mode:
            params["response_format"] = {"type": "json_object"}

        try:
            response = client.chat.completions.create(**params)
        except Exception as exc:
            raise ProviderError(str(exc)) from exc

        choice = response.choices[0] if response.choices else None
        content = (choice.message.content if choice else "") or ""
        usage = getattr(response, "usage", None)
        tokens = TokenUsage(
            input_tokens=int(getattr(usage, "prompt_tokens", 0) or 0),
            output_tokens=int(getattr(usage, "completion_tokens", 0) or 0),
        )
        return content, tokens, (choice.finish_reason if choice else None) or "unknown"

    def _request_stream(
        self,
        system: str,
        messages: List[Message],
        max_tokens: int,
        temperature: float,
        on_token: Optional[TokenCallback],
    ) -> tuple[str, TokenUsage, str]:
        client = self._require_client()
        wire_messages = self._messages(system, messages)

        chunks: List[str] = []
        try:
            stream = client.chat.completions.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=wire_messages,
                stream=True,
                timeout=self.timeout_seconds,
            )
            for chunk in stream:
                token = (chunk.choices[0].delta.content if chunk.choices else None) or ""
                if token:
                    chunks.append(token)
                    if on_token is not None:
                        on_token(token)
        except Exception as exc:
            raise ProviderError(str(exc)) from exc

        content = "".join(chunks)
        # The stream carries no usage block; estimate from character counts.
        tokens = TokenUsage(
            input_tokens=_estimate_tokens("".join(m["content"] for m in wire_messages)),
            output_tokens=_estimate_tokens(content),
        )
        return content, tokens, "stop"

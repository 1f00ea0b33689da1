"""Anthropic Messages API client."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional

import requests

from ..types import Provider, ProviderError, TokenUsage
from .base import BaseChatClient, Message, TokenCallback

API_URL = "https://api.anthropic.com/v1/messages"
API_VERSION = "2023-06-01"


class ClaudeClient(BaseChatClient):
    provider = Provider.CLAUDE
    json_temperature = 0.3

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        session: Optional[requests.Session] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            api_key=api_key or os.getenv("ANTHROPIC_API_KEY"),
            model=model or os.getenv("CLAUDE_MODEL"),
            **kwargs,
        )
        self._session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        if not self._api_key:
            raise ProviderError("ANTHROPIC_API_KEY missing")
        return {
            "x-api-key": self._api_key,
            "anthropic-version": API_VERSION,
            "content-type": "application/json",
        }

    def _payload(self, system: str, messages: List[Message], max_tokens: int, temperature: float) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "system": system,
            "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
        }

    def _request(
        self,
        system: str,
        messages: List[Message],
        max_tokens: int,
        temperature: float,
        json_mode: bool,
    ) -> tuple[str, TokenUsage, str]:
        # The Messages API has no JSON mode; json() relies on the system instruction.
        headers = self._headers()
        payload = self._payload(system, messages, max_tokens, temperature)
        try:
            res = self._session.post(API_URL, headers=headers, json=payload, timeout=self.timeout_seconds)
            res.raise_for_status()
            data = res.json()
        except Exception as exc:
            raise ProviderError(str(exc)) from exc

        content = data.get("content", [])
        text = ""
        if content and isinstance(content, list):
            text = "".join(
                item.get("text", "")
                for item in content
                if isinstance(item, dict) and item.get("type") == "text"
            )

        usage = data.get("usage", {})
        tokens = TokenUsage(
            input_tokens=int(usage.get("input_tokens", 0) or 0),
            output_tokens=int(usage.get("output_tokens", 0) or 0),
        )
        return text, tokens, data.get("stop_reason") or "unknown"

    def _request_stream(
        self,
        system: str,
        messages: List[Message],
        max_tokens: int,
        temperature: float,
        on_token: Optional[TokenCallback],
    ) -> tuple[str, TokenUsage, str]:
        headers = self._headers()
        payload = {**self._payload(system, messages, max_tokens, temperature), "stream": True}

        chunks: List[str] = []
        input_tokens = 0
        output_tokens = 0
        stop_reason = "end_turn"
        try:
            with self._session.post(
                API_URL, headers=headers, json=payload, timeout=self.timeout_seconds, stream=True
            ) as res:
                res.raise_for_status()
                for line in res.iter_lines(decode_unicode=True):
                    if not line or not line.startswith("data:"):
                        continue
                    event = json.loads(line[5:].strip())
                    kind = event.get("type")
                    if kind == "content_block_delta" and event.get("delta", {}).get("type") == "text_delta":
                        token = event["delta"].get("text", "")
                        chunks.append(token)
                        if on_token is not None:
                            on_token(token)
                    elif kind == "message_start":
                        usage = event.get("message", {}).get("usage", {})
                        input_tokens = int(usage.get("input_tokens", 0) or 0)
                    elif kind == "message_delta":
                        output_tokens = int(event.get("usage", {}).get("output_tokens", 0) or 0)
                        stop_reason = event.get("delta", {}).get("stop_reason") or stop_reason
                    elif kind == "error":
                        raise ProviderError(str(event.get("error")))
        except ProviderError:
            raise
        except Exception as exc:
            raise ProviderError(str(exc)) from exc

        return "".join(chunks), TokenUsage(input_tokens, output_tokens), stop_reason

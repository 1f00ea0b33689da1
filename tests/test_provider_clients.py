import json
from types import SimpleNamespace

import pytest

from siteforge.llm.providers.base import BaseChatClient
from siteforge.llm.providers.claude import API_URL, ClaudeClient
from siteforge.llm.providers.groq import GroqClient
from siteforge.llm.types import ParseError, Provider, ProviderError


class FakeResponse:
    def __init__(self, payload=None, lines=None, status_error=None):
        self.payload = payload or {}
        self.lines = lines or []
        self.status_error = status_error

    def raise_for_status(self):
        if self.status_error is not None:
            raise self.status_error

    def json(self):
        return self.payload

    def iter_lines(self, decode_unicode=False):
        return iter(self.lines)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def post(self, url, headers=None, json=None, timeout=None, stream=False):
        self.requests.append({"url": url, "headers": headers, "json": json, "stream": stream})
        return self.response


def _messages_reply(text, input_tokens=100, output_tokens=50):
    return FakeResponse(
        {
            "content": [{"type": "text", "text": text}],
            "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
            "stop_reason": "end_turn",
        }
    )


class FakeCompletions:
    def __init__(self, content="", chunks=None, error=None):
        self.content = content
        self.chunks = chunks or []
        self.error = error
        self.params = []

    def create(self, **params):
        self.params.append(params)
        if self.error is not None:
            raise self.error
        if params.get("stream"):
            return [
                SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=chunk))])
                for chunk in self.chunks
            ]
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content), finish_reason="stop")],
            usage=SimpleNamespace(prompt_tokens=10, completion_tokens=5),
        )


def _fake_openai(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_claude_chat_posts_messages_and_prices_usage():
    session = FakeSession(_messages_reply("Hello"))
    client = ClaudeClient(api_key="k", model="claude-test", session=session)

    response = client.chat(system="sys", messages=[{"role": "user", "content": "hi"}], max_tokens=100)

    sent = session.requests[0]
    assert sent["url"] == API_URL
    assert sent["headers"]["x-api-key"] == "k"
    assert sent["json"]["system"] == "sys"
    assert sent["json"]["max_tokens"] == 100
    assert sent["json"]["model"] == "claude-test"
    assert response.content == "Hello"
    assert response.usage.tokens.total_tokens == 150
    # 100 * $3/1M + 50 * $15/1M
    assert response.usage.cost == pytest.approx(0.00105)
    assert response.stop_reason == "end_turn"
    assert response.model == "claude-test"


def test_claude_missing_key_fails_at_call_time(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    session = FakeSession(_messages_reply("unused"))
    client = ClaudeClient(session=session)

    with pytest.raises(ProviderError):
        client.complete("hi")
    assert session.requests == []


def test_claude_reads_env_key_and_model(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
    monkeypatch.setenv("CLAUDE_MODEL", "claude-env")

    client = ClaudeClient(session=FakeSession(_messages_reply("x")))

    assert client._api_key == "env-key"
    assert client.model == "claude-env"


def test_claude_http_error_becomes_provider_error():
    session = FakeSession(FakeResponse(status_error=RuntimeError("500 Server Error")))
    client = ClaudeClient(api_key="k", session=session)

    with pytest.raises(ProviderError, match="500"):
        client.complete("hi")


def test_json_strips_fences():
    client = ClaudeClient(api_key="k", session=FakeSession(_messages_reply('```json\n{"headline": "Hi"}\n```')))
    assert client.json("give me json") == {"headline": "Hi"}


def test_json_parse_error_keeps_raw_text():
    client = ClaudeClient(api_key="k", session=FakeSession(_messages_reply("not json at all")))

    with pytest.raises(ParseError) as info:
        client.json("give me json")

    assert info.value.raw == "not json at all"
    assert isinstance(info.value.__cause__, json.JSONDecodeError)


def test_messages_are_validated():
    client = ClaudeClient(api_key="k", session=FakeSession(_messages_reply("x")))
    with pytest.raises(ValueError):
        client.chat(system="s", messages=[])
    with pytest.raises(ValueError):
        client.chat(system="s", messages=[{"role": "system", "content": "x"}])


def test_claude_stream_collects_tokens_and_usage():
    lines = [
        "event: message_start",
        'data: {"type": "message_start", "message": {"usage": {"input_tokens": 12}}}',
        'data: {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "Hel"}}',
        'data: {"type": "content_block_delta", "delta": {"type": "text_delta", "text": "lo"}}',
        'data: {"type": "message_delta", "delta": {"stop_reason": "end_turn"}, "usage": {"output_tokens": 7}}',
        'data: {"type": "message_stop"}',
    ]
    session = FakeSession(FakeResponse(lines=lines))
    client = ClaudeClient(api_key="k", session=session)
    tokens = []
    completed = []

    response = client.stream(
        system="s",
        messages=[{"role": "user", "content": "hi"}],
        on_token=tokens.append,
        on_complete=completed.append,
    )

    assert session.requests[0]["json"]["stream"] is True
    assert tokens == ["Hel", "lo"]
    assert response.content == "Hello"
    assert (response.usage.tokens.input_tokens, response.usage.tokens.output_tokens) == (12, 7)
    assert completed == [response]


def test_to_standard_response_wraps_chat():
    client = ClaudeClient(api_key="k", session=FakeSession(_messages_reply("x")))
    chat = client.chat(system="s", messages=[{"role": "user", "content": "hi"}])

    result = client.to_standard_response(chat, "task_1", data={"a": 1})

    assert result.success is True
    assert result.provider is Provider.CLAUDE
    assert result.task_id == "task_1"
    assert result.data == {"a": 1}
    assert result.usage is chat.usage


def test_groq_json_mode_sets_response_format():
    completions = FakeCompletions(content='{"cities": []}')
    client = GroqClient(api_key="k", model="llama-test", client=_fake_openai(completions))

    response = client.chat(system="sys", messages=[{"role": "user", "content": "go"}], json_mode=True)

    params = completions.params[0]
    assert params["response_format"] == {"type": "json_object"}
    assert params["messages"][0] == {"role": "system", "content": "sys"}
    assert params["model"] == "llama-test"
    assert response.content == '{"cities": []}'
    # 10 * $0.05/1M + 5 * $0.08/1M
    assert response.usage.cost == pytest.approx(0.0000009)


def test_groq_plain_chat_has_no_response_format():
    completions = FakeCompletions(content="text")
    client = GroqClient(api_key="k", client=_fake_openai(completions))

    client.complete("go")

    assert "response_format" not in completions.params[0]


def test_groq_json_uses_low_temperature():
    completions = FakeCompletions(content='{"ok": true}')
    client = GroqClient(api_key="k", client=_fake_openai(completions))

    assert client.json("go") == {"ok": True}
    assert completions.params[0]["temperature"] == pytest.approx(0.1)


def test_groq_missing_key_fails_at_call_time(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    client = GroqClient()

    with pytest.raises(ProviderError, match="GROQ_API_KEY"):
        client.complete("go")


def test_groq_sdk_error_becomes_provider_error():
    client = GroqClient(api_key="k", client=_fake_openai(FakeCompletions(error=RuntimeError("rate limited"))))
    with pytest.raises(ProviderError, match="rate limited"):
        client.complete("go")


def test_groq_stream_estimates_tokens_from_characters():
    completions = FakeCompletions(chunks=["abcd", "efg"])
    client = GroqClient(api_key="k", client=_fake_openai(completions))
    tokens = []

    response = client.stream(system="ab", messages=[{"role": "user", "content": "cdef"}], on_token=tokens.append)

    assert tokens == ["abcd", "efg"]
    assert response.content == "abcdefg"
    # ceil(6 / 4) input, ceil(7 / 4) output
    assert (response.usage.tokens.input_tokens, response.usage.tokens.output_tokens) == (2, 2)


def test_base_client_requires_wire_format_hooks():
    class HalfClient(BaseChatClient):
        provider = Provider.GROQ

        def _request(self, system, messages, max_tokens, temperature, json_mode):
            return "", None, "stop"

    with pytest.raises(TypeError):
        BaseChatClient(api_key="k")
    with pytest.raises(TypeError):
        HalfClient(api_key="k")

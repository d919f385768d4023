import asyncio
from types import SimpleNamespace

import pytest

from services.interview_coach.app import completion as completion_module
from services.interview_coach.app.completion import (
    CompletionError,
    GeminiCompletionClient,
    GroqCompletionClient,
    build_completion_client,
)
from shared.settings import Settings
from shared.tracing import estimate_tokens, log_event, span


class _FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _groq_with(fake: _FakeCompletions) -> GroqCompletionClient:
    c = GroqCompletionClient(api_key="test-key", model="openai/gpt-oss-20b")
    c.client = SimpleNamespace(chat=SimpleNamespace(completions=fake))
    return c


def test_settings_defaults(monkeypatch) -> None:
    for var in ("PORT", "LLM_PROVIDER", "GROQ_MODEL", "CORS_ORIGINS"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.port == 3000
    assert s.llm_provider == "groq"
    assert s.groq_model == "openai/gpt-oss-20b"
    assert s.cors_origin_list() == ["*"]


def test_settings_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost:5173/, https://coach.example.com")
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("LLM_PROVIDER", "gemini")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.5-pro")
    s = Settings(_env_file=None)
    assert s.port == 8080
    assert s.cors_origin_list() == [
        "http://localhost:5173",
        "https://coach.example.com",
    ]
    assert s.active_api_key() == "g-key"
    assert s.active_model() == "gemini-2.5-pro"


def test_build_without_key_returns_none() -> None:
    s = Settings(_env_file=None, groq_api_key=None)
    assert build_completion_client(s) is None


def test_build_rejects_unknown_provider() -> None:
    s = Settings(_env_file=None, llm_provider="nope", groq_api_key="k")
    with pytest.raises(ValueError):
        build_completion_client(s)


def test_build_selects_provider() -> None:
    groq = build_completion_client(
        Settings(_env_file=None, llm_provider="groq", groq_api_key="k")
    )
    assert isinstance(groq, GroqCompletionClient)
    assert groq.model == "openai/gpt-oss-20b"

    gemini = build_completion_client(
        Settings(_env_file=None, llm_provider="gemini", gemini_api_key="k")
    )
    assert isinstance(gemini, GeminiCompletionClient)


def test_groq_client_sends_messages_and_temperature() -> None:
    fake = _FakeCompletions(content="  hello  ")
    text = asyncio.run(
        _groq_with(fake).complete("prompt text", temperature=0.3, system="sys")
    )
    assert text == "  hello  "
    assert fake.kwargs["model"] == "openai/gpt-oss-20b"
    assert fake.kwargs["temperature"] == 0.3
    assert fake.kwargs["messages"] == [
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "prompt text"},
    ]


def test_groq_client_wraps_provider_errors() -> None:
    fake = _FakeCompletions(error=RuntimeError("429 rate limited"))
    with pytest.raises(CompletionError, match="rate limited"):
        asyncio.run(_groq_with(fake).complete("p", temperature=0.2))


def test_gemini_client_uses_system_instruction(monkeypatch) -> None:
    seen = {}

    class _FakeModel:
        def __init__(self, name, system_instruction=None):
            seen["name"] = name
            seen["system"] = system_instruction

        async def generate_content_async(self, prompt, generation_config=None):
            seen["prompt"] = prompt
            return SimpleNamespace(text='{"ok": true}')

    monkeypatch.setattr(completion_module.genai, "GenerativeModel", _FakeModel)
    client = GeminiCompletionClient(api_key="k", model="gemini-2.5-flash")
    text = asyncio.run(client.complete("p", temperature=0.4, system="sys"))
    assert text == '{"ok": true}'
    assert seen == {"name": "gemini-2.5-flash", "system": "sys", "prompt": "p"}


def test_tracing_span_noop_without_langfuse() -> None:
    with span("unit.test", foo=1, bar="x"):
        log_event("inside-span", payload={"k": "v"})
    assert estimate_tokens("") == 0
    assert estimate_tokens("abcdefgh") == 2

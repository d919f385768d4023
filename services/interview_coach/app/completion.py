"""Completion service clients.

Every route sends exactly one prompt to a hosted chat-completion model and
waits for its text. Two providers are supported, selected by
``LLM_PROVIDER``:

- ``groq`` (default): ``AsyncGroq`` chat completions, model
  ``openai/gpt-oss-20b``.
- ``gemini``: ``google.generativeai`` with ``generate_content_async``.

Clients are built once at startup and shared by all requests; they hold no
per-request state. There is deliberately no retry loop or timeout override:
one request, one response. Any provider failure is re-raised as
:class:`CompletionError` so routes can map it to their own error message.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol

import google.generativeai as genai
from groq import AsyncGroq

from shared.settings import Settings
from shared.tracing import estimate_tokens, log_event, span

logger = logging.getLogger(__name__)


class CompletionError(RuntimeError):
    """The completion service call failed (transport, auth, rate limit...)."""


class CompletionNotConfigured(CompletionError):
    """No completion client is available (missing API key)."""


class CompletionClient(Protocol):
    model: str

    async def complete(
        self, prompt: str, *, temperature: float, system: Optional[str] = None
    ) -> str: ...


def _messages(prompt: str, system: Optional[str]) -> List[Dict[str, str]]:
    messages: List[Dict[str, str]] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    return messages


class GroqCompletionClient:
    """Chat completions through the Groq SDK."""

    def __init__(self, api_key: str, model: str) -> None:
        self.client = AsyncGroq(api_key=api_key)
        self.model = model

    async def complete(
        self, prompt: str, *, temperature: float, system: Optional[str] = None
    ) -> str:
        with span(
            "completion.call",
            provider="groq",
            model=self.model,
            prompt_tokens=estimate_tokens(prompt),
        ):
            try:
                resp = await self.client.chat.completions.create(
                    model=self.model,
                    messages=_messages(prompt, system),
                    temperature=temperature,
                )
            except Exception as e:
                raise CompletionError(f"groq completion failed: {e}") from e

        if not resp.choices:
            return ""
        text = resp.choices[0].message.content or ""
        log_event(
            "Completion",
            payload={
                "provider": "groq",
                "model": self.model,
                "prompt_tokens": estimate_tokens(prompt),
                "output_tokens": estimate_tokens(text),
            },
        )
        return text


class GeminiCompletionClient:
    """Text generation through google-generativeai."""

    def __init__(self, api_key: str, model: str) -> None:
        genai.configure(api_key=api_key)
        self.model = model

    async def complete(
        self, prompt: str, *, temperature: float, system: Optional[str] = None
    ) -> str:
        model = genai.GenerativeModel(self.model, system_instruction=system)
        with span(
            "completion.call",
            provider="gemini",
            model=self.model,
            prompt_tokens=estimate_tokens(prompt),
        ):
            try:
                resp = await model.generate_content_async(
                    prompt,
                    generation_config=genai.GenerationConfig(temperature=temperature),
                )
                text = resp.text if hasattr(resp, "text") else ""
            except Exception as e:
                raise CompletionError(f"gemini completion failed: {e}") from e

        log_event(
            "Completion",
            payload={
                "provider": "gemini",
                "model": self.model,
                "prompt_tokens": estimate_tokens(prompt),
                "output_tokens": estimate_tokens(text or ""),
            },
        )
        return text or ""


def build_completion_client(settings: Settings) -> Optional[CompletionClient]:
    """Construct the client for the configured provider.

    Returns None when the provider's API key is missing so the service can
    still start (health checks keep answering).
    """
    provider = settings.llm_provider.lower()
    api_key = settings.active_api_key()
    if provider not in {"groq", "gemini"}:
        raise ValueError(f"Unknown LLM_PROVIDER: {settings.llm_provider!r}")
    if not api_key:
        logger.warning(
            "No API key configured for completion provider",
            extra={"provider": provider},
        )
        return None

    if provider == "gemini":
        client: CompletionClient = GeminiCompletionClient(api_key, settings.gemini_model)
    else:
        client = GroqCompletionClient(api_key, settings.groq_model)
    logger.info(
        "Completion client ready", extra={"provider": provider, "model": client.model}
    )
    return client

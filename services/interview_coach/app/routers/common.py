"""Helpers shared by the coach routers."""

from __future__ import annotations

from typing import Optional

from ..completion import CompletionClient, CompletionNotConfigured
from ..prompts import COACH_SYSTEM_PROMPT

# Sampling temperature per route
TEMPERATURES = {
    "evaluate": 0.2,
    "question": 0.4,
    "mcq-question": 0.4,
    "explain": 0.3,
    "quiz-topic": 0.4,
    "explain-wrong": 0.3,
    "followup": 0.3,
    "mock-interview/start": 0.4,
    "mock-interview/evaluate": 0.2,
}


async def complete_text(
    client: Optional[CompletionClient], prompt: str, route: str
) -> str:
    """Send one prompt for ``route`` and return the trimmed completion text."""
    if client is None:
        raise CompletionNotConfigured("completion service is not configured")
    text = await client.complete(
        prompt, temperature=TEMPERATURES[route], system=COACH_SYSTEM_PROMPT
    )
    return (text or "").strip()

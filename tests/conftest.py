import os

# Deterministic, offline-friendly tests: no tracing backend, no provider keys
os.environ["LANGFUSE_ENABLED"] = "0"
os.environ.setdefault("LLM_PROVIDER", "groq")
os.environ.pop("GROQ_API_KEY", None)
os.environ.pop("GEMINI_API_KEY", None)

from typing import Any, Callable, Dict, List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from services.interview_coach.app.deps import get_completion_client
from services.interview_coach.app.main import app


class StubCompletion:
    """Stand-in for the completion service.

    ``reply`` is either fixed text or a callable receiving the prompt.
    """

    model = "stub-model"

    def __init__(
        self,
        reply: Union[str, Callable[[str], str]] = "",
        error: Optional[Exception] = None,
    ) -> None:
        self.reply = reply
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def complete(
        self, prompt: str, *, temperature: float, system: Optional[str] = None
    ) -> str:
        self.calls.append(
            {"prompt": prompt, "temperature": temperature, "system": system}
        )
        if self.error is not None:
            raise self.error
        return self.reply(prompt) if callable(self.reply) else self.reply


@pytest.fixture
def stub() -> StubCompletion:
    return StubCompletion()


@pytest.fixture
def client(stub: StubCompletion):
    app.dependency_overrides[get_completion_client] = lambda: stub
    yield TestClient(app)
    app.dependency_overrides.clear()

"""Dependency injection utilities for the interview coach.

The completion client is built once in the application lifespan and kept
on ``app.state``; handlers receive it through :func:`get_completion_client`
rather than reaching for a module global. Tests replace it with a stub via
``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Request

from .completion import CompletionClient


def get_completion_client(request: Request) -> Optional[CompletionClient]:
    return getattr(request.app.state, "completion", None)

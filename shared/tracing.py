"""Tracing utilities with optional Langfuse integration.

By default this module provides a lightweight span context manager that
records nothing (no-op). If `LANGFUSE_ENABLED=true` and the Langfuse key
pair is configured via environment variables, spans are forwarded to
Langfuse. Errors in tracing never affect request handling; we fail-soft to
a no-op.

This module also exposes lightweight helpers for observability events
(`log_event`) and crude token estimation (`estimate_tokens`).
"""

import contextvars
import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

from langfuse import Langfuse

from shared.settings import Settings

logger = logging.getLogger(__name__)

_settings = Settings()


def _now_ms() -> int:
    return int(time.time() * 1000)


class _Span:
    """A no-op span used when tracing is disabled."""

    def __init__(self, name: str, **kwargs: Any) -> None:
        self.name = name

    def __enter__(self) -> "_Span":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


_current_trace = contextvars.ContextVar("coach.current_trace", default=None)


class Tracer:
    """Tracer facade with pluggable backends (no-op or Langfuse)."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or _settings
        self._enabled = bool(settings.langfuse_enabled)
        self._trace_name = settings.trace_name

        self._client = None
        if self._enabled:
            public_key = settings.langfuse_public_key
            secret_key = settings.langfuse_secret_key
            if public_key and secret_key:
                try:
                    self._client = Langfuse(
                        public_key=public_key,
                        secret_key=secret_key,
                        host=settings.langfuse_host or None,
                    )
                except Exception:
                    logger.warning("Langfuse client unavailable; tracing disabled")
                    self._client = None

    def start_trace(
        self, name: str, input: Optional[dict] = None, user_id: Optional[str] = None
    ):
        if self._client is None:
            return None
        try:
            tr = self._client.trace(name=name, input=input or {}, user_id=user_id)
            _current_trace.set(tr)
            return tr
        except Exception:
            return None

    def end_trace(self, output: Optional[dict] = None):
        tr = _current_trace.get()
        if tr is not None and hasattr(tr, "update"):
            try:
                tr.update(output=output or {})
            except Exception:
                pass
        _current_trace.set(None)

    def start_span(self, name: str, **kwargs: Any) -> _Span:
        if self._client is None:
            return _Span(name, **kwargs)
        # Prefer attaching spans to the current request trace if present
        return _LangfuseSpan(
            self._client,
            name,
            parent_trace=_current_trace.get(),
            trace_name=self._trace_name,
            **kwargs,
        )


tracer = Tracer()


def install_fastapi_tracing(app, service_name: str = "interview-coach") -> None:
    """Install middleware to auto-create a Langfuse trace per HTTP request."""
    from fastapi import Request

    @app.middleware("http")
    async def _trace_middleware(request: Request, call_next: Callable):
        # Concise input payload only; bodies may contain candidate answers
        tracer.start_trace(
            name=f"{service_name} {request.method} {request.url.path}",
            input={"method": request.method, "path": request.url.path},
        )
        status = None
        try:
            with span("http.request"):
                response = await call_next(request)
            status = response.status_code
            return response
        finally:
            tracer.end_trace(output={"status": status})


@contextmanager
def span(name: str, **kwargs: Any) -> Iterator[_Span]:
    """Context manager wrapper around the tracer's start_span method.

    Usage:
        with span("completion.call", model="..."):
            # do work
    """
    s = tracer.start_span(name, **kwargs)
    s.__enter__()
    try:
        yield s
    except BaseException as exc:
        s.__exit__(type(exc), exc, exc.__traceback__)
        raise
    else:
        s.__exit__(None, None, None)


class _LangfuseSpan(_Span):  # pragma: no cover - needs a Langfuse backend
    def __init__(
        self,
        client: Any,
        name: str,
        parent_trace: Any | None = None,
        trace_name: str = "coach-trace",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, **kwargs)
        self._client = client
        self._trace = parent_trace
        self._trace_name = trace_name
        self._span = None
        self._start_ms = _now_ms()
        self._kwargs = kwargs

    def __enter__(self) -> "_LangfuseSpan":
        try:
            # No request trace (e.g. background use): open a lightweight one
            if self._trace is None:
                self._trace = self._client.trace(name=self._trace_name)
            self._span = self._trace.span(name=self.name, input=self._kwargs)
        except Exception:
            self._trace = None
            self._span = None
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._span is not None:
                self._span.end(
                    output={
                        "error": str(exc) if exc else None,
                        "duration_ms": max(1, _now_ms() - self._start_ms),
                    }
                )
        except Exception:
            pass


def log_event(
    name: str, payload: Optional[dict] = None, correlation_id: Optional[str] = None
) -> None:
    """Emit a short-lived structured event span for observability.

    Args:
        name: Logical event name, e.g. "Completion" or "SchemaViolation".
        payload: Arbitrary JSON-serializable dict with event data.
        correlation_id: Optional ID to stitch events for one request.
    """
    meta = dict(payload or {})
    if correlation_id:
        meta["correlation_id"] = correlation_id
    with span(f"event.{name}", **meta):
        pass


def estimate_tokens(text: str) -> int:
    """Very rough subword token estimate (for logging only)."""
    if not text:
        return 0
    # Approximate: 1 token ~= 4 chars for English-like text
    return max(1, int(len(text) / 4))

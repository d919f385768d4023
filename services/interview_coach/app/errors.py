"""Error mapping for the HTTP surface.

Every failure is per-request. Routes wrap their work in
:func:`route_errors`, which turns interpreter and provider exceptions into a
:class:`RouteError` carrying the message the caller sees. The handlers
installed by :func:`install_error_handlers` render all errors as
``{"error": ...}``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .interpret import AnswerMismatch, InvalidAIJson

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "AI returned invalid JSON"
ANSWER_MISMATCH_MESSAGE = "Correct answer mismatch"


class RouteError(Exception):
    """A failed request; ``message`` is returned to the caller."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@contextmanager
def route_errors(message: str) -> Iterator[None]:
    """Translate failures inside the block into a :class:`RouteError`.

    Schema violations and answer mismatches keep their specific messages;
    anything else (provider errors included) becomes ``message``.
    """
    try:
        yield
    except RouteError:
        raise
    except InvalidAIJson as e:
        raise RouteError(INVALID_JSON_MESSAGE) from e
    except AnswerMismatch as e:
        raise RouteError(ANSWER_MISMATCH_MESSAGE) from e
    except Exception as e:
        logger.exception(message)
        raise RouteError(message) from e


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RouteError)
    async def _route_error_handler(request: Request, exc: RouteError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
            for e in exc.errors()
        ]
        logger.info(
            "Rejected invalid request",
            extra={"path": request.url.path, "errors": details},
        )
        return JSONResponse(
            status_code=400, content={"error": "Invalid request", "details": details}
        )

    # Global safety net: never crash the worker
    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"error": "An unexpected error occurred in interview-coach"},
        )

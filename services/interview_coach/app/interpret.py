"""Interpretation of completion text.

Structured routes expect the model to answer with JSON. The text is trimmed,
an enclosing markdown code fence is removed, and the remainder must parse as
JSON and then validate against the route's reply model. Anything else is a
schema violation: the raw text is logged and :class:`InvalidAIJson` is
raised. Nothing is retried.

Multiple-choice replies name the correct option by its text; that text is
resolved to an index with an exact post-trim comparison. A reply whose
correct answer is not among its options raises :class:`AnswerMismatch`.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

from shared.tracing import log_event

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.S | re.I)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite number {name}")


class CoachError(Exception):
    """Base class for failures interpreting a completion."""


class InvalidAIJson(CoachError):
    """Completion text is not JSON, or not JSON of the expected shape."""

    def __init__(self, raw: str, reason: str = "") -> None:
        super().__init__(reason or "invalid JSON")
        self.raw = raw


class AnswerMismatch(CoachError):
    """The declared correct answer is not one of the options."""

    def __init__(self, correct_answer: str, options: List[str]) -> None:
        super().__init__(f"correct answer {correct_answer!r} not in options")
        self.correct_answer = correct_answer
        self.options = options


def _schema_violation(raw: str, reason: str) -> InvalidAIJson:
    logger.error(
        "Completion failed schema check", extra={"reason": reason, "raw": raw}
    )
    log_event("SchemaViolation", payload={"reason": reason[:200]})
    return InvalidAIJson(raw, reason)


def strip_code_fence(text: str) -> str:
    m = _FENCE_RE.match(text)
    return m.group(1) if m else text


def parse_json_reply(text: str) -> Any:
    """Trim and parse completion text as JSON.

    Raises:
        InvalidAIJson: if the (fence-stripped) text does not parse
            as strict JSON (``NaN`` and ``Infinity`` are rejected).
    """
    raw = (text or "").strip()
    try:
        return json.loads(strip_code_fence(raw), parse_constant=_reject_constant)
    except ValueError as e:
        raise _schema_violation(raw, f"not JSON: {e}") from e


def validate_reply(model_cls: Type[M], payload: Any, raw: str = "") -> M:
    """Validate a parsed payload against ``model_cls``."""
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        raise _schema_violation(
            raw or json.dumps(payload, default=str),
            f"{model_cls.__name__}: {e.error_count()} validation error(s)",
        ) from e


def extract_items(payload: Any, raw: str = "", key: str = "questions") -> List[Any]:
    """Return the item list from a top-level array or ``{key: [...]}``."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get(key), list):
        return payload[key]
    raise _schema_violation(
        raw or json.dumps(payload, default=str), f"expected a list of {key}"
    )


def resolve_correct_index(options: List[str], correct_answer: str) -> int:
    """Index of the option equal to ``correct_answer`` after trimming.

    Raises:
        AnswerMismatch: if no option matches.
    """
    target = correct_answer.strip()
    for i, opt in enumerate(options):
        if opt.strip() == target:
            return i
    logger.error(
        "Correct answer not in options",
        extra={"correct_answer": correct_answer, "options": options},
    )
    raise AnswerMismatch(correct_answer, options)


def default_explanation(correct_answer: str) -> str:
    return f'The correct answer is "{correct_answer}".'

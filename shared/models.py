"""Pydantic data models for the interview coach service.

These models define the request and response payloads of every route, plus
the shapes the completion service is asked to produce. Wire names are
camelCase (``userAnswer``, ``correctIndex``) to stay compatible with the
existing web client; Python attributes are snake_case and populated by
alias generation.

Two families live here:

- ``*Request`` / ``*Response``: the HTTP contract.
- ``*Reply``: what the language model is instructed to return. These are
  validated after JSON parsing so an unexpected shape is rejected rather
  than relayed.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------------------------- evaluate -------------------------------- #


class EvaluateRequest(CamelModel):
    """A candidate's answer to a single interview question."""

    role: str
    question: str
    user_answer: str


class EvaluateResponse(CamelModel):
    feedback: str
    improved_answer: str
    explanation: str
    score: float
    topic: str


# ------------------------------- questions ------------------------------- #


class QuestionRequest(CamelModel):
    """Ask for one question; ``topic`` narrows it when provided."""

    role: str
    difficulty: str
    topic: Optional[str] = None


class QuestionResponse(CamelModel):
    question: str
    topic: str


class MCQQuestionRequest(QuestionRequest):
    pass


class MCQReply(CamelModel):
    """Model output for a multiple-choice question.

    ``correct_answer`` carries the literal option text; it is resolved to an
    index before anything is returned to the caller.
    """

    question: str
    options: List[str] = Field(min_length=4, max_length=4)
    correct_answer: str
    topic: str
    explanation: Optional[str] = None


class QuizItem(CamelModel):
    """A multiple-choice item: question text, 4 options and the correct index."""

    question: str
    options: List[str] = Field(min_length=4, max_length=4)
    correct_index: int = Field(ge=0, le=3)
    topic: str


class MCQQuestionResponse(QuizItem):
    explanation: str


# -------------------------------- explain -------------------------------- #


class ExplainRequest(CamelModel):
    topic: str
    role: str


class ExplainResponse(CamelModel):
    topic: str
    explanation: str


class ExplainWrongRequest(CamelModel):
    """A wrongly answered multiple-choice question.

    ``correct_answer`` and ``user_answer`` may be given as option text or as
    a zero-based index into ``options``.
    """

    question: str
    options: List[str]
    correct_answer: Union[int, str]
    user_answer: Union[int, str]
    role: str


class ExplainWrongResponse(CamelModel):
    explanation: str


class FollowUpRequest(CamelModel):
    question: str
    context: str
    user_query: str
    role: str


class FollowUpResponse(CamelModel):
    reply: str


# ------------------------------ quiz / mock ------------------------------ #


class QuizTopicRequest(CamelModel):
    topic: str
    role: str


class QuizTopicResponse(CamelModel):
    questions: List[QuizItem]


class MockQuestion(QuizItem):
    explanation: str


class MockInterviewStartRequest(CamelModel):
    role: str
    difficulty: str
    count: int = Field(ge=1, le=50)


class MockInterviewStartResponse(CamelModel):
    questions: List[MockQuestion]


class MockAnswer(CamelModel):
    question: str
    answer: str


class MockInterviewEvaluateRequest(CamelModel):
    role: str
    answers: List[MockAnswer] = Field(min_length=1)


class MockInterviewEvaluateResponse(CamelModel):
    score: float
    strengths: List[str] = []
    weak_areas: List[str] = []
    feedback: str

    @field_validator("score")
    @classmethod
    def _clamp_score(cls, v: float) -> float:
        # Models occasionally drift outside the requested 0-10 scale
        return max(0.0, min(10.0, v))


# -------------------------------- errors --------------------------------- #


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    details: Optional[List[dict]] = None

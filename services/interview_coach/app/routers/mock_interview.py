"""Mock interview routes: generate a question set, then grade the answers."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from shared.models import (
    ErrorResponse,
    MockInterviewEvaluateRequest,
    MockInterviewEvaluateResponse,
    MockInterviewStartRequest,
    MockInterviewStartResponse,
    MockQuestion,
)

from ..completion import CompletionClient
from ..deps import get_completion_client
from ..errors import route_errors
from ..interpret import extract_items, parse_json_reply, validate_reply
from ..prompts import mock_interview_evaluate_prompt, mock_interview_start_prompt
from .common import complete_text

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ai/mock-interview",
    tags=["mock-interview"],
    responses={500: {"model": ErrorResponse}},
)


@router.post("/start", response_model=MockInterviewStartResponse)
async def start_mock_interview(
    req: MockInterviewStartRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> MockInterviewStartResponse:
    """Generate ``count`` multiple-choice questions with explanations.

    Items are returned in the order the model produced them. A count that
    differs from the request is logged but not treated as an error.
    """
    logger.info("Mock interview start", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("Mock interview generation failed"):
        text = await complete_text(
            client, mock_interview_start_prompt(req), "mock-interview/start"
        )
        items = extract_items(parse_json_reply(text), text)
        questions: List[MockQuestion] = [
            validate_reply(MockQuestion, it, text) for it in items
        ]
        if len(questions) != req.count:
            logger.warning(
                "Mock interview question count differs from request",
                extra={"requested": req.count, "received": len(questions)},
            )
        return MockInterviewStartResponse(questions=questions)


@router.post("/evaluate", response_model=MockInterviewEvaluateResponse)
async def evaluate_mock_interview(
    req: MockInterviewEvaluateRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> MockInterviewEvaluateResponse:
    logger.info(
        "Mock interview evaluate",
        extra={"role": req.role, "num_answers": len(req.answers)},
    )
    with route_errors("Mock interview evaluation failed"):
        text = await complete_text(
            client, mock_interview_evaluate_prompt(req), "mock-interview/evaluate"
        )
        return validate_reply(
            MockInterviewEvaluateResponse, parse_json_reply(text), text
        )

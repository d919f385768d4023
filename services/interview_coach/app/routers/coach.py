"""Interview practice routes.

Each handler renders one prompt, awaits one completion and interprets the
text: structured routes parse and validate JSON, explanation routes return
the trimmed text verbatim. Failures are mapped to ``{"error": ...}`` with
status 500 by :func:`route_errors`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from shared.models import (
    ErrorResponse,
    EvaluateRequest,
    EvaluateResponse,
    ExplainRequest,
    ExplainResponse,
    ExplainWrongRequest,
    ExplainWrongResponse,
    FollowUpRequest,
    FollowUpResponse,
    MCQQuestionRequest,
    MCQQuestionResponse,
    MCQReply,
    QuestionRequest,
    QuestionResponse,
    QuizItem,
    QuizTopicRequest,
    QuizTopicResponse,
)

from ..completion import CompletionClient
from ..deps import get_completion_client
from ..errors import route_errors
from ..interpret import (
    default_explanation,
    extract_items,
    parse_json_reply,
    resolve_correct_index,
    validate_reply,
)
from ..prompts import (
    QUIZ_TOPIC_SIZE,
    evaluate_prompt,
    explain_prompt,
    explain_wrong_prompt,
    followup_prompt,
    mcq_question_prompt,
    question_prompt,
    quiz_topic_prompt,
)
from .common import complete_text

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ai", tags=["coach"], responses={500: {"model": ErrorResponse}}
)


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_answer(
    req: EvaluateRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> EvaluateResponse:
    """Score a candidate's answer and suggest an improved one."""
    logger.info("Evaluate request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("AI evaluation failed"):
        text = await complete_text(client, evaluate_prompt(req), "evaluate")
        return validate_reply(EvaluateResponse, parse_json_reply(text), text)


@router.post("/question", response_model=QuestionResponse)
async def generate_question(
    req: QuestionRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> QuestionResponse:
    logger.info("Question request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("AI question generation failed"):
        text = await complete_text(client, question_prompt(req), "question")
        return validate_reply(QuestionResponse, parse_json_reply(text), text)


@router.post("/mcq-question", response_model=MCQQuestionResponse)
async def generate_mcq_question(
    req: MCQQuestionRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> MCQQuestionResponse:
    """Generate one multiple-choice question.

    The model names the correct option by text; it is mapped to
    ``correctIndex`` here and a missing explanation is defaulted.
    """
    logger.info("MCQ request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("MCQ generation failed"):
        text = await complete_text(client, mcq_question_prompt(req), "mcq-question")
        reply = validate_reply(MCQReply, parse_json_reply(text), text)
        correct_index = resolve_correct_index(reply.options, reply.correct_answer)
        return MCQQuestionResponse(
            question=reply.question,
            options=reply.options,
            correct_index=correct_index,
            topic=reply.topic,
            explanation=reply.explanation or default_explanation(reply.correct_answer),
        )


@router.post("/explain", response_model=ExplainResponse)
async def explain_topic(
    req: ExplainRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> ExplainResponse:
    logger.info("Explain request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("Explain failed"):
        text = await complete_text(client, explain_prompt(req), "explain")
        return ExplainResponse(topic=req.topic, explanation=text)


@router.post("/quiz-topic", response_model=QuizTopicResponse)
async def generate_quiz(
    req: QuizTopicRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> QuizTopicResponse:
    """Generate a short multiple-choice quiz on one topic."""
    logger.info("Quiz topic request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("Quiz generation failed"):
        text = await complete_text(client, quiz_topic_prompt(req), "quiz-topic")
        items = extract_items(parse_json_reply(text), text)
        questions: List[QuizItem] = [validate_reply(QuizItem, it, text) for it in items]
        if len(questions) != QUIZ_TOPIC_SIZE:
            logger.warning(
                "Quiz question count differs from request",
                extra={"requested": QUIZ_TOPIC_SIZE, "received": len(questions)},
            )
        return QuizTopicResponse(questions=questions)


@router.post("/explain-wrong", response_model=ExplainWrongResponse)
async def explain_wrong_answer(
    req: ExplainWrongRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> ExplainWrongResponse:
    """Explain why the candidate's chosen option is wrong."""
    logger.info("Explain wrong request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("Explain wrong answer failed"):
        text = await complete_text(client, explain_wrong_prompt(req), "explain-wrong")
        return ExplainWrongResponse(explanation=text)


@router.post("/followup", response_model=FollowUpResponse)
async def follow_up(
    req: FollowUpRequest,
    client: Optional[CompletionClient] = Depends(get_completion_client),
) -> FollowUpResponse:
    logger.info("Follow-up request", extra={"body": req.model_dump(by_alias=True)})
    with route_errors("Follow-up failed"):
        text = await complete_text(client, followup_prompt(req), "followup")
        return FollowUpResponse(reply=text)

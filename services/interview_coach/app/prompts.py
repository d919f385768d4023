"""
Prompt templates for the interview coach.

Each template is a pure function from a typed request to the user prompt
string sent to the completion service. Values are interpolated as-is.

Design goals
- JSON-only output for structured routes, with the exact keys the router
  validates (no markdown, no prose outside JSON)
- Plain, well-formatted text for the explanation routes
- Multiple-choice items always carry exactly 4 options and name the
  correct option by its full text (never a letter)
"""

from __future__ import annotations

from typing import List, Optional, Union

from shared.models import (
    EvaluateRequest,
    ExplainRequest,
    ExplainWrongRequest,
    FollowUpRequest,
    MockInterviewEvaluateRequest,
    MockInterviewStartRequest,
    QuestionRequest,
    QuizTopicRequest,
)

COACH_SYSTEM_PROMPT = (
    "You are an experienced technical interview coach. "
    "Follow the requested output format exactly. "
    "When JSON is requested, return ONLY the JSON value with no markdown fences."
)

QUIZ_TOPIC_SIZE = 5

_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def _topic_clause(topic: Optional[str]) -> str:
    if not topic:
        return ""
    return f"The question MUST be strictly from the topic: {topic}.\n"


def _option_text(options: List[str], answer: Union[int, str]) -> str:
    """Option text for an answer given either as text or as an index."""
    if isinstance(answer, int) and 0 <= answer < len(options):
        return options[answer]
    return str(answer)


# ================================  EVALUATE  ================================ #


def evaluate_prompt(req: EvaluateRequest) -> str:
    return (
        f"You are an interview coach for a {req.role} developer.\n\n"
        f"Question:\n{req.question}\n\n"
        f"User Answer:\n{req.user_answer}\n\n"
        "Respond ONLY in strict JSON like this:\n"
        "{\n"
        '  "feedback": "short feedback string",\n'
        '  "improvedAnswer": "correct or improved answer",\n'
        '  "explanation": "detailed step-by-step explanation of the correct concept",\n'
        '  "score": 0,\n'
        '  "topic": "string"\n'
        "}\n"
        "score is a number from 0 (wrong) to 10 (excellent).\n"
    )


# ================================  QUESTIONS  =============================== #


def question_prompt(req: QuestionRequest) -> str:
    return (
        "You are an interview coach.\n\n"
        f"Generate ONE {req.difficulty} level interview question for a {req.role} developer.\n"
        f"{_topic_clause(req.topic)}"
        "\nRules:\n"
        "- Return ONLY strict JSON\n\n"
        "JSON format:\n"
        "{\n"
        '  "question": "string",\n'
        '  "topic": "string"\n'
        "}\n"
    )


def mcq_question_prompt(req: QuestionRequest) -> str:
    return (
        "You are an interview coach.\n\n"
        f"Generate ONE {req.difficulty} level multiple-choice interview question "
        f"for a {req.role} developer.\n"
        f"{_topic_clause(req.topic)}"
        "Rules:\n"
        "- Return ONLY strict JSON\n"
        "- Exactly 4 options\n"
        "- One correct answer\n"
        "- The correct answer MUST be one of the options\n"
        "- Do NOT return A/B/C/D\n"
        "- Return the actual correct option text\n"
        "- ALSO provide an explanation of why this option is correct\n\n"
        "JSON format:\n"
        "{\n"
        '  "question": "string",\n'
        '  "options": ["opt1", "opt2", "opt3", "opt4"],\n'
        '  "correctAnswer": "opt2",\n'
        '  "topic": "string",\n'
        '  "explanation": "brief 2-5 sentence explanation"\n'
        "}\n"
    )


def quiz_topic_prompt(req: QuizTopicRequest) -> str:
    return (
        "You are an interview coach.\n\n"
        f"Create a quiz of {QUIZ_TOPIC_SIZE} multiple-choice questions on the topic "
        f'"{req.topic}" for a {req.role} developer.\n\n'
        "Rules:\n"
        "- Return ONLY strict JSON\n"
        f"- Exactly {QUIZ_TOPIC_SIZE} questions\n"
        "- Each question has exactly 4 options\n"
        "- correctIndex is the 0-based index of the correct option\n"
        "- Vary difficulty from easy to hard\n\n"
        "JSON format:\n"
        "{\n"
        '  "questions": [\n'
        "    {\n"
        '      "question": "string",\n'
        '      "options": ["opt1", "opt2", "opt3", "opt4"],\n'
        '      "correctIndex": 0,\n'
        f'      "topic": "{req.topic}"\n'
        "    }\n"
        "  ]\n"
        "}\n"
    )


# =================================  EXPLAIN  ================================ #


def explain_prompt(req: ExplainRequest) -> str:
    return (
        "You are an interview coach.\n\n"
        f'Explain the topic "{req.topic}" for a {req.role} developer.\n\n'
        "Give:\n"
        "- Simple explanation\n"
        "- Key points (bullet format)\n"
        "- One small example if applicable\n"
        "- 2 interview tips\n\n"
        "Respond ONLY in plain text, well formatted.\n"
    )


def explain_wrong_prompt(req: ExplainWrongRequest) -> str:
    options = "\n".join(
        f"{_LETTERS[i] if i < len(_LETTERS) else i + 1}. {opt}"
        for i, opt in enumerate(req.options)
    )
    return (
        f"You are an interview coach for a {req.role} developer.\n\n"
        f"Question:\n{req.question}\n\n"
        f"Options:\n{options}\n\n"
        f"Correct answer: {_option_text(req.options, req.correct_answer)}\n"
        f"Candidate's answer: {_option_text(req.options, req.user_answer)}\n\n"
        "Explain:\n"
        "- Why the candidate's answer is wrong\n"
        "- Why the correct answer is right\n"
        "- A short tip to remember the concept\n\n"
        "Respond ONLY in plain text, well formatted and concise.\n"
    )


def followup_prompt(req: FollowUpRequest) -> str:
    return (
        f"You are an interview coach for a {req.role} developer.\n\n"
        f"The candidate is studying this interview question:\n{req.question}\n\n"
        f"Context so far:\n{req.context}\n\n"
        f"The candidate asks:\n{req.user_query}\n\n"
        "Answer the candidate's question directly and helpfully. "
        "Stay on the topic of the interview question.\n"
        "Respond ONLY in plain text.\n"
    )


# ==============================  MOCK INTERVIEW  ============================ #


def mock_interview_start_prompt(req: MockInterviewStartRequest) -> str:
    return (
        "You are an interviewer running a mock interview.\n\n"
        f"Generate {req.count} {req.difficulty} level multiple-choice interview "
        f"questions for a {req.role} developer, covering different topics.\n\n"
        "Rules:\n"
        "- Return ONLY strict JSON\n"
        f"- Exactly {req.count} questions\n"
        "- Each question has exactly 4 options\n"
        "- correctIndex is the 0-based index of the correct option\n"
        "- explanation briefly says why the correct option is right\n\n"
        "JSON format:\n"
        "{\n"
        '  "questions": [\n'
        "    {\n"
        '      "question": "string",\n'
        '      "options": ["opt1", "opt2", "opt3", "opt4"],\n'
        '      "correctIndex": 0,\n'
        '      "topic": "string",\n'
        '      "explanation": "string"\n'
        "    }\n"
        "  ]\n"
        "}\n"
    )


def mock_interview_evaluate_prompt(req: MockInterviewEvaluateRequest) -> str:
    transcript = "\n\n".join(
        f"Q{i + 1}: {a.question}\nA{i + 1}: {a.answer}"
        for i, a in enumerate(req.answers)
    )
    return (
        f"You are an interviewer evaluating a mock interview for a {req.role} developer.\n\n"
        f"Interview transcript:\n{transcript}\n\n"
        "Evaluate the candidate overall.\n\n"
        "Respond ONLY in strict JSON like this:\n"
        "{\n"
        '  "score": 0,\n'
        '  "strengths": ["string"],\n'
        '  "weakAreas": ["string"],\n'
        '  "feedback": "overall feedback paragraph"\n'
        "}\n"
        "score is a number from 0 to 10.\n"
    )

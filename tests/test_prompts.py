from services.interview_coach.app.prompts import (
    QUIZ_TOPIC_SIZE,
    evaluate_prompt,
    explain_prompt,
    explain_wrong_prompt,
    followup_prompt,
    mcq_question_prompt,
    mock_interview_evaluate_prompt,
    mock_interview_start_prompt,
    question_prompt,
    quiz_topic_prompt,
)
from shared.models import (
    EvaluateRequest,
    ExplainRequest,
    ExplainWrongRequest,
    FollowUpRequest,
    MockAnswer,
    MockInterviewEvaluateRequest,
    MockInterviewStartRequest,
    QuestionRequest,
    QuizTopicRequest,
)


def test_evaluate_prompt_interpolates_fields() -> None:
    p = evaluate_prompt(
        EvaluateRequest(role="Python", question="What is GIL?", user_answer="A lock.")
    )
    assert "interview coach for a Python developer" in p
    assert "Question:\nWhat is GIL?" in p
    assert "User Answer:\nA lock." in p
    assert '"improvedAnswer"' in p


def test_topic_clause_only_when_topic_given() -> None:
    with_topic = QuestionRequest(role="Go", difficulty="hard", topic="Channels")
    without = QuestionRequest(role="Go", difficulty="hard")
    for render in (question_prompt, mcq_question_prompt):
        assert "strictly from the topic: Channels" in render(with_topic)
        assert "strictly from the topic" not in render(without)
        assert "ONE hard level" in render(without)


def test_empty_topic_is_treated_as_missing() -> None:
    p = question_prompt(QuestionRequest(role="Go", difficulty="easy", topic=""))
    assert "strictly from the topic" not in p


def test_mcq_prompt_asks_for_option_text() -> None:
    p = mcq_question_prompt(QuestionRequest(role="Java", difficulty="easy"))
    assert "Exactly 4 options" in p
    assert "Do NOT return A/B/C/D" in p
    assert '"correctAnswer"' in p


def test_quiz_topic_prompt_requests_five_items() -> None:
    p = quiz_topic_prompt(QuizTopicRequest(topic="Docker", role="DevOps"))
    assert QUIZ_TOPIC_SIZE == 5
    assert f"Exactly {QUIZ_TOPIC_SIZE} questions" in p
    assert '"Docker"' in p


def test_explain_prompt_is_plain_text() -> None:
    p = explain_prompt(ExplainRequest(topic="Event loop", role="Node"))
    assert 'Explain the topic "Event loop" for a Node developer.' in p
    assert "plain text" in p


def test_explain_wrong_lists_options_and_resolves_indices() -> None:
    p = explain_wrong_prompt(
        ExplainWrongRequest(
            question="2 + 2?",
            options=["3", "4", "5", "22"],
            correct_answer=1,
            user_answer="22",
            role="math",
        )
    )
    assert "A. 3\nB. 4\nC. 5\nD. 22" in p
    assert "Correct answer: 4" in p
    assert "Candidate's answer: 22" in p


def test_explain_wrong_out_of_range_index_is_used_as_text() -> None:
    p = explain_wrong_prompt(
        ExplainWrongRequest(
            question="Q",
            options=["a", "b"],
            correct_answer=0,
            user_answer=7,
            role="r",
        )
    )
    assert "Candidate's answer: 7" in p


def test_followup_prompt_contains_conversation() -> None:
    p = followup_prompt(
        FollowUpRequest(
            question="What is CAP?",
            context="We discussed partitions.",
            user_query="Is Cassandra AP?",
            role="backend",
        )
    )
    assert "What is CAP?" in p
    assert "We discussed partitions." in p
    assert "Is Cassandra AP?" in p


def test_mock_prompts() -> None:
    start = mock_interview_start_prompt(
        MockInterviewStartRequest(role="SRE", difficulty="easy", count=4)
    )
    assert "Generate 4 easy level" in start
    assert '"explanation"' in start

    evaluate = mock_interview_evaluate_prompt(
        MockInterviewEvaluateRequest(
            role="SRE",
            answers=[
                MockAnswer(question="What is an SLO?", answer="A target."),
                MockAnswer(question="What is toil?", answer="Manual work."),
            ],
        )
    )
    assert "Q1: What is an SLO?\nA1: A target." in evaluate
    assert "Q2: What is toil?\nA2: Manual work." in evaluate
    assert '"weakAreas"' in evaluate

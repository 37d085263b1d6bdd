"""Answer review for a completed quiz.

Pairs each question's answer key and explanation with what the
participant chose, and summarises the score per section as percentages.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from src.quiz.schemas import Question, QuizResult, Section


class QuestionReview(BaseModel):
    """One question as shown in the results review."""

    model_config = ConfigDict(frozen=True)

    question_id: int
    section: Section
    correct_answer: str
    explanation: str | None = None
    given_answer: str | None = Field(
        default=None, description="Participant's answer, None if unanswered"
    )
    is_correct: bool


class SectionSummary(BaseModel):
    """Correct count and percentage for one section."""

    model_config = ConfigDict(frozen=True)

    section: Section
    correct: int
    total: int
    percentage: int = Field(description="Rounded to a whole percent")


class ResultReview(BaseModel):
    """Full review of one result."""

    model_config = ConfigDict(frozen=True)

    user_name: str
    total_score: int
    percentage: int
    time_elapsed_seconds: int
    sections: tuple[SectionSummary, ...]
    questions: tuple[QuestionReview, ...]


def _percent(correct: int, total: int) -> int:
    return round(correct * 100 / total) if total else 0


def build_result_review(
    questions: Iterable[Question], result: QuizResult
) -> ResultReview:
    """Build the answer review for a result.

    Answers are matched by question id, like scoring.

    Args:
        questions: Question set with answer keys and explanations
        result: Completed quiz result

    Returns:
        ResultReview with questions in id order
    """
    given = {answer.question_id: answer.value for answer in result.answers}

    items = []
    for question in sorted(questions, key=lambda q: q.id):
        value = given.get(question.id)
        items.append(
            QuestionReview(
                question_id=question.id,
                section=question.section,
                correct_answer=question.correct_answer,
                explanation=question.explanation,
                given_answer=value,
                is_correct=value == question.correct_answer,
            )
        )

    sections = []
    for section in Section:
        in_section = [item for item in items if item.section is section]
        correct = sum(1 for item in in_section if item.is_correct)
        sections.append(
            SectionSummary(
                section=section,
                correct=correct,
                total=len(in_section),
                percentage=_percent(correct, len(in_section)),
            )
        )

    return ResultReview(
        user_name=result.user_name,
        total_score=result.total_score,
        percentage=_percent(result.total_score, len(items)),
        time_elapsed_seconds=result.time_elapsed_seconds,
        sections=tuple(sections),
        questions=tuple(items),
    )

"""Score calculation for submitted answers."""

from collections.abc import Iterable

from src.quiz.schemas import Answer, Question, ScoreBreakdown, Section


def score_answers(
    questions: Iterable[Question],
    answers: Iterable[Answer],
) -> ScoreBreakdown:
    """Score answers against the answer key.

    Answers are looked up by question id, so they may be sparse or out of
    order. A missing answer or a wrong one scores zero.

    Args:
        questions: Question set with answer keys
        answers: Participant answers

    Returns:
        ScoreBreakdown with per-section and total scores
    """
    by_id = {answer.question_id: answer.value for answer in answers}

    section_scores = {Section.STRUCTURE: 0, Section.WRITTEN_EXPRESSION: 0}
    for question in questions:
        if by_id.get(question.id) == question.correct_answer:
            section_scores[question.section] += 1

    structure = section_scores[Section.STRUCTURE]
    written = section_scores[Section.WRITTEN_EXPRESSION]
    return ScoreBreakdown(
        structure_score=structure,
        written_score=written,
        total_score=structure + written,
    )

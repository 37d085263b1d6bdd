"""Answer key loading and question bank construction."""

import json
from pathlib import Path

from src.quiz.schemas import QUESTION_COUNT, Question, Section


def build_question_bank(answer_key: dict[int, str | dict]) -> tuple[Question, ...]:
    """Build the full question set from an answer key.

    Each value is either the correct answer or a mapping with
    ``answer`` and optional ``explanation``.

    Args:
        answer_key: Question id -> answer (or answer mapping)

    Returns:
        Questions ordered by id

    Raises:
        ValueError: If ids are not exactly 1..30
    """
    ids = {int(k) for k in answer_key}
    expected = set(range(1, QUESTION_COUNT + 1))
    if ids != expected:
        missing = sorted(expected - ids)
        extra = sorted(ids - expected)
        raise ValueError(
            f"Answer key must cover questions 1-{QUESTION_COUNT}; "
            f"missing={missing} unexpected={extra}"
        )

    questions = []
    for raw_id, value in answer_key.items():
        question_id = int(raw_id)
        if isinstance(value, dict):
            answer = value["answer"]
            explanation = value.get("explanation")
        else:
            answer, explanation = value, None
        questions.append(
            Question(
                id=question_id,
                section=Section.for_question(question_id),
                correct_answer=str(answer),
                explanation=explanation,
            )
        )
    return tuple(sorted(questions, key=lambda q: q.id))


def load_answer_key(path: str | Path) -> tuple[Question, ...]:
    """Load questions from a JSON answer key file.

    Args:
        path: File containing ``{"1": "B", "2": {"answer": "A", ...}, ...}``

    Returns:
        Questions ordered by id
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Answer key file must contain a JSON object")
    return build_question_bank(data)

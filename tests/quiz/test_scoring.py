"""Tests for score calculation."""

import pytest

from src.quiz.schemas import Answer, Question
from src.quiz.scoring import score_answers


def _correct(question: Question) -> Answer:
    return Answer(question_id=question.id, value=question.correct_answer)


class TestScoreAnswers:
    """Tests for score_answers."""

    def test_all_correct(self, questions: tuple[Question, ...]):
        """Perfect answers score 15 + 15."""
        scores = score_answers(questions, [_correct(q) for q in questions])

        assert scores.structure_score == 15
        assert scores.written_score == 15
        assert scores.total_score == 30

    def test_no_answers(self, questions: tuple[Question, ...]):
        """Missing answers score zero."""
        scores = score_answers(questions, [])

        assert scores.total_score == 0

    def test_sections_scored_separately(self, questions: tuple[Question, ...]):
        """Structure and Written Expression are split by question id."""
        answers = [_correct(q) for q in questions if q.id in (1, 2, 16)]

        scores = score_answers(questions, answers)

        assert scores.structure_score == 2
        assert scores.written_score == 1
        assert scores.total_score == 3

    def test_lookup_by_id_not_position(self, questions: tuple[Question, ...]):
        """Sparse, shuffled answers are matched by question id."""
        answers = [_correct(q) for q in reversed(questions) if q.id % 3 == 0]

        scores = score_answers(questions, answers)

        assert scores.total_score == 10
        assert scores.structure_score == 5
        assert scores.written_score == 5

    def test_wrong_and_cleared_answers_score_zero(
        self, questions: tuple[Question, ...]
    ):
        """Wrong values and cleared (None) answers contribute nothing."""
        wrong = "Z"
        answers = [
            Answer(question_id=1, value=wrong),
            Answer(question_id=2, value=None),
            _correct(questions[2]),
        ]

        scores = score_answers(questions, answers)

        assert scores.total_score == 1

    @pytest.mark.parametrize("stride", [1, 2, 5, 7])
    def test_sum_invariant(self, questions: tuple[Question, ...], stride: int):
        """Section scores always add up to the total and stay in range."""
        answers = [_correct(q) for q in questions[::stride]]

        scores = score_answers(questions, answers)

        assert scores.structure_score + scores.written_score == scores.total_score
        assert 0 <= scores.structure_score <= 15
        assert 0 <= scores.written_score <= 15

"""Timed quiz sessions.

This module provides:
- QuizSession: start -> answer -> submit/expire state machine
- score_answers: section and total scoring by question id
- Tick schedulers: APScheduler-backed and manual (virtual clock)
- Question bank loading from a JSON answer key
- Answer review with explanations and section percentages
"""

from src.quiz.question_bank import build_question_bank, load_answer_key
from src.quiz.review import (
    QuestionReview,
    ResultReview,
    SectionSummary,
    build_result_review,
)
from src.quiz.schemas import (
    Answer,
    Question,
    QuizResult,
    ScoreBreakdown,
    Section,
    SessionPhase,
    SessionSnapshot,
    StoredResult,
)
from src.quiz.scoring import score_answers
from src.quiz.session import QuizSession, QuizValidationError
from src.quiz.timer import (
    APSchedulerTickScheduler,
    ManualTickScheduler,
    TickScheduler,
    format_clock,
)

__all__ = [
    "APSchedulerTickScheduler",
    "Answer",
    "ManualTickScheduler",
    "Question",
    "QuizResult",
    "QuizSession",
    "QuizValidationError",
    "QuestionReview",
    "ResultReview",
    "ScoreBreakdown",
    "Section",
    "SessionPhase",
    "SectionSummary",
    "SessionSnapshot",
    "StoredResult",
    "TickScheduler",
    "build_question_bank",
    "build_result_review",
    "format_clock",
    "load_answer_key",
    "score_answers",
]

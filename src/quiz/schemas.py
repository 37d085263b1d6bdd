"""Quiz domain schemas.

Defines questions, answers, scores, results and session snapshots.
"""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

QUESTION_COUNT = 30
SECTION_SIZE = 15


class Section(str, Enum):
    """Quiz section a question belongs to."""

    STRUCTURE = "Structure"
    WRITTEN_EXPRESSION = "Written Expression"

    @classmethod
    def for_question(cls, question_id: int) -> "Section":
        """Questions 1-15 are Structure, 16-30 Written Expression."""
        if not 1 <= question_id <= QUESTION_COUNT:
            raise ValueError(f"Question id out of range: {question_id}")
        return cls.STRUCTURE if question_id <= SECTION_SIZE else cls.WRITTEN_EXPRESSION


class Question(BaseModel):
    """Multiple-choice question with its answer key."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1, le=QUESTION_COUNT, description="Question number")
    section: Section = Field(description="Section the question belongs to")
    correct_answer: str = Field(description="Answer key value")
    explanation: str | None = Field(
        default=None, description="Shown when reviewing results"
    )


class Answer(BaseModel):
    """Participant's answer to one question. value None means cleared."""

    model_config = ConfigDict(frozen=True)

    question_id: int = Field(description="Question this answers")
    value: str | None = Field(default=None, description="Selected option")


class ScoreBreakdown(BaseModel):
    """Section and total scores."""

    model_config = ConfigDict(frozen=True)

    structure_score: int = Field(ge=0, le=SECTION_SIZE)
    written_score: int = Field(ge=0, le=SECTION_SIZE)
    total_score: int = Field(ge=0, le=QUESTION_COUNT)

    @model_validator(mode="after")
    def _check_total(self) -> "ScoreBreakdown":
        if self.structure_score + self.written_score != self.total_score:
            raise ValueError("total_score must equal the sum of section scores")
        return self


class QuizResult(BaseModel):
    """Outcome of one completed session. Built once at submission."""

    model_config = ConfigDict(frozen=True)

    user_name: str = Field(description="Name the participant typed")
    total_score: int = Field(ge=0, le=QUESTION_COUNT)
    structure_score: int = Field(ge=0, le=SECTION_SIZE)
    written_score: int = Field(ge=0, le=SECTION_SIZE)
    time_elapsed_seconds: int = Field(ge=0, description="Seconds used")
    answers: tuple[Answer, ...] = Field(
        default=(), description="Answers ordered by question id"
    )

    @model_validator(mode="after")
    def _check_total(self) -> "QuizResult":
        if self.structure_score + self.written_score != self.total_score:
            raise ValueError("total_score must equal the sum of section scores")
        return self


class StoredResult(QuizResult):
    """QuizResult as returned by a result store."""

    id: int | None = Field(default=None, description="Store identifier")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the result was stored",
    )


class SessionPhase(str, Enum):
    """Lifecycle phase of a quiz session."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SessionSnapshot(BaseModel):
    """Read-only view of a session's state."""

    model_config = ConfigDict(frozen=True)

    phase: SessionPhase
    user_name: str | None = None
    current_question_id: int = 1
    answers: tuple[Answer, ...] = ()
    time_remaining_seconds: int
    answered_count: int = 0
    unanswered_count: int = 0
    warnings_raised: tuple[int, ...] = ()
    result: QuizResult | None = None
    persisted: bool = False
    persistence_error: str | None = None

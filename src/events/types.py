"""Typed event definitions for quiz session events.

These events represent things that happen during a session:
- QuizStarted: A participant started the quiz
- TimeWarningRaised: Remaining time crossed a warning threshold
- QuizSubmitted: The session completed and a result was computed
- ResultPersisted: The result store accepted the result
- ResultPersistFailed: The result store rejected the result
- SessionReset: The session was discarded for a retake
"""

from pydantic import Field

from src.events.base import Event


class QuizStarted(Event):
    """Emitted when a session moves to in-progress."""

    user_name: str = Field(description="Name the participant typed")
    duration_seconds: int = Field(description="Session length")


class TimeWarningRaised(Event):
    """Emitted once per threshold when remaining time reaches it."""

    remaining_seconds: int = Field(description="Threshold that was reached")

    @property
    def message(self) -> str:
        minutes = self.remaining_seconds // 60
        if minutes and self.remaining_seconds % 60 == 0:
            unit = "minute" if minutes == 1 else "minutes"
            return f"{minutes} {unit} remaining!"
        return f"{self.remaining_seconds} seconds remaining!"


class QuizSubmitted(Event):
    """Emitted when a session completes, by user action or expiry."""

    user_name: str = Field(description="Name the participant typed")
    total_score: int = Field(description="Total score")
    structure_score: int = Field(description="Structure section score")
    written_score: int = Field(description="Written Expression section score")
    time_elapsed_seconds: int = Field(description="Seconds used")
    expired: bool = Field(default=False, description="True if the timer ran out")


class ResultPersisted(Event):
    """Emitted when the result store accepted a result."""

    user_name: str = Field(description="Name the participant typed")
    result_id: int | None = Field(default=None, description="Store identifier")


class ResultPersistFailed(Event):
    """Emitted when storing a result failed. The session stays completed."""

    user_name: str = Field(description="Name the participant typed")
    reason: str = Field(description="Failure reason from the store")


class SessionReset(Event):
    """Emitted when a session is discarded and returns to not-started."""

"""Base Event class for quiz domain events."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """Base class for all domain events.

    Events are immutable notifications of things that happened to a quiz
    session. They are delivered in-process through the EventBus and are
    not part of session state.

    Attributes:
        event_id: Unique identifier for this event instance
        timestamp: When the event occurred
        session_id: ID of the session this event relates to
        metadata: Additional context about the event
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
    )

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the event occurred",
    )
    session_id: UUID | None = Field(
        default=None,
        description="ID of the related quiz session",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event context",
    )

    @property
    def event_type(self) -> str:
        """Return the event type name (class name)."""
        return self.__class__.__name__

    def to_log_dict(self) -> dict[str, Any]:
        """Flatten the event for structured logging."""
        return {
            "event_type": self.event_type,
            "session_id": str(self.session_id) if self.session_id else None,
            **self.model_dump(
                mode="json",
                exclude={"event_id", "timestamp", "session_id", "metadata"},
            ),
        }

"""Event infrastructure for quiz sessions.

Provides:
- Event: Base class for all domain events
- EventBus: In-process pub/sub for event routing
"""

from src.events.base import Event
from src.events.bus import EventBus
from src.events.types import (
    QuizStarted,
    QuizSubmitted,
    ResultPersisted,
    ResultPersistFailed,
    SessionReset,
    TimeWarningRaised,
)

__all__ = [
    # Base
    "Event",
    # Infrastructure
    "EventBus",
    # Event types
    "QuizStarted",
    "TimeWarningRaised",
    "QuizSubmitted",
    "ResultPersisted",
    "ResultPersistFailed",
    "SessionReset",
]

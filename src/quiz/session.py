"""Quiz session state machine.

Lifecycle:
    NOT_STARTED --start--> IN_PROGRESS --submit / timer expiry--> COMPLETED
    any phase --reset--> NOT_STARTED

A session owns its state exclusively. All mutations happen on one event
loop and complete before the first await of the operation, so ticks and
user actions never interleave inside a transition. The result is handed
to the result sink only after the session is already completed; a sink
failure is recorded and reported but never rolls the session back.
"""

from collections.abc import Sequence
from uuid import UUID, uuid4

import structlog

from src.config import settings
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
from src.quiz.schemas import (
    Answer,
    Question,
    QuizResult,
    SessionPhase,
    SessionSnapshot,
    StoredResult,
)
from src.quiz.scoring import score_answers
from src.quiz.timer import TickHandle, TickScheduler
from src.repositories.results_repo import ResultSink, ResultSinkError

logger = structlog.get_logger()


class QuizValidationError(ValueError):
    """Raised when an action is rejected before touching session state."""


class QuizSession:
    """One participant's quiz attempt, driven by ticks and user actions."""

    def __init__(
        self,
        questions: Sequence[Question],
        scheduler: TickScheduler,
        result_sink: ResultSink,
        event_bus: EventBus | None = None,
        duration_seconds: int | None = None,
        tick_interval_seconds: int | None = None,
        warning_thresholds: Sequence[int] | None = None,
    ):
        """Initialize a not-started session.

        Args:
            questions: Question set with answer keys
            scheduler: Source of countdown ticks
            result_sink: Store that receives the completed result
            event_bus: Optional bus for warnings and submission events
            duration_seconds: Session length. Defaults to settings.
            tick_interval_seconds: Seconds between ticks. Defaults to settings.
            warning_thresholds: Remaining-time warning points. Defaults to
                settings.
        """
        self._questions = tuple(sorted(questions, key=lambda q: q.id))
        self._question_ids = [q.id for q in self._questions]
        self._scheduler = scheduler
        self._sink = result_sink
        self._bus = event_bus
        self._duration = duration_seconds or settings.session_duration_seconds
        self._interval = tick_interval_seconds or settings.tick_interval_seconds
        thresholds = (
            settings.warning_thresholds_seconds
            if warning_thresholds is None
            else warning_thresholds
        )
        self._thresholds = sorted(
            {t for t in thresholds if 0 < t < self._duration}, reverse=True
        )
        self._init_state()

    def _init_state(self) -> None:
        self.id: UUID = uuid4()
        self._phase = SessionPhase.NOT_STARTED
        self._user_name: str | None = None
        self._answers: dict[int, Answer] = {}
        self._current_question_id = self._question_ids[0] if self._question_ids else 1
        self._time_remaining = self._duration
        self._warnings_raised: list[int] = []
        self._result: QuizResult | None = None
        self._stored: StoredResult | None = None
        self._persistence_error: str | None = None
        self._persisting = False
        self._tick_handle: TickHandle | None = None

    # -- read-only views -------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def duration_seconds(self) -> int:
        return self._duration

    @property
    def time_remaining(self) -> int:
        return self._time_remaining

    @property
    def result(self) -> QuizResult | None:
        return self._result

    @property
    def stored_result(self) -> StoredResult | None:
        return self._stored

    @property
    def persistence_error(self) -> str | None:
        return self._persistence_error

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def snapshot(self) -> SessionSnapshot:
        """Return an immutable copy of the current state."""
        answers = tuple(self._answers[qid] for qid in sorted(self._answers))
        answered = sum(1 for a in answers if a.value is not None)
        return SessionSnapshot(
            phase=self._phase,
            user_name=self._user_name,
            current_question_id=self._current_question_id,
            answers=answers,
            time_remaining_seconds=self._time_remaining,
            answered_count=answered,
            unanswered_count=len(self._questions) - answered,
            warnings_raised=tuple(self._warnings_raised),
            result=self._result,
            persisted=self._stored is not None,
            persistence_error=self._persistence_error,
        )

    # -- transitions -----------------------------------------------------

    async def start(self, user_name: str) -> None:
        """Begin the quiz for a participant.

        Raises:
            QuizValidationError: If the name is blank or the session has
                already been started
        """
        name = (user_name or "").strip()
        if not name:
            raise QuizValidationError("User name is required to start the quiz")
        if self._phase is not SessionPhase.NOT_STARTED:
            raise QuizValidationError(
                f"Cannot start a session that is {self._phase.value}"
            )

        self._user_name = name
        self._answers.clear()
        self._time_remaining = self._duration
        self._phase = SessionPhase.IN_PROGRESS
        self._tick_handle = self._scheduler.schedule_tick(self._interval, self.tick)

        logger.info("Quiz started", session_id=str(self.id), user_name=name)
        await self._publish(
            QuizStarted(
                session_id=self.id,
                user_name=name,
                duration_seconds=self._duration,
            )
        )

    def record_answer(self, question_id: int, value: str | None) -> bool:
        """Upsert the answer for a question.

        Returns:
            True if recorded, False if the session is not in progress

        Raises:
            QuizValidationError: If the question id is unknown
        """
        if self._phase is not SessionPhase.IN_PROGRESS:
            logger.info(
                "Answer ignored",
                session_id=str(self.id),
                phase=self._phase.value,
                question_id=question_id,
            )
            return False
        if question_id not in self._question_ids:
            raise QuizValidationError(f"Unknown question id: {question_id}")

        self._answers[question_id] = Answer(question_id=question_id, value=value)
        return True

    def go_to_question(self, question_id: int) -> int:
        """Move the current-question pointer.

        Raises:
            QuizValidationError: If the question id is unknown
        """
        if question_id not in self._question_ids:
            raise QuizValidationError(f"Unknown question id: {question_id}")
        if self._phase is SessionPhase.IN_PROGRESS:
            self._current_question_id = question_id
        return self._current_question_id

    def next_question(self) -> int:
        index = self._question_ids.index(self._current_question_id)
        if index < len(self._question_ids) - 1:
            return self.go_to_question(self._question_ids[index + 1])
        return self._current_question_id

    def previous_question(self) -> int:
        index = self._question_ids.index(self._current_question_id)
        if index > 0:
            return self.go_to_question(self._question_ids[index - 1])
        return self._current_question_id

    async def tick(self) -> None:
        """Handle one countdown tick."""
        await self.advance(1)

    async def advance(self, seconds: int) -> None:
        """Apply elapsed seconds to the countdown.

        Used directly after a suspension to catch up on skipped ticks.
        Remaining time never goes below zero; reaching zero submits.
        """
        if self._phase is not SessionPhase.IN_PROGRESS or seconds <= 0:
            return

        previous = self._time_remaining
        self._time_remaining = max(previous - seconds, 0)

        if self._time_remaining == 0:
            await self._complete(expired=True)
            return

        for threshold in self._thresholds:
            if self._time_remaining <= threshold < previous:
                await self._raise_warning(threshold)

    async def submit(self) -> QuizResult:
        """Finish the quiz and store the result.

        A session that is already completed returns its existing result
        without recomputing or re-sending it.

        Raises:
            QuizValidationError: If the session has not been started
        """
        if self._result is not None:
            return self._result
        if self._phase is SessionPhase.NOT_STARTED:
            raise QuizValidationError("Cannot submit a quiz that has not started")
        return await self._complete(expired=False)

    async def retry_persist(self) -> bool:
        """Retry storing the result after a failed attempt.

        Returns:
            True if the result is stored

        Raises:
            QuizValidationError: If the session is not completed
        """
        if self._phase is not SessionPhase.COMPLETED:
            raise QuizValidationError("Only a completed session can be stored")
        if self._stored is not None:
            return True
        if self._persisting or self._result is None:
            return False
        self._persisting = True
        return await self._persist(self.id, self._result)

    async def reset(self) -> None:
        """Discard the session and return to not-started (retake)."""
        self._cancel_ticks()
        previous_id = self.id
        self._init_state()
        logger.info("Quiz session reset", previous_session_id=str(previous_id))
        await self._publish(SessionReset(session_id=self.id))

    # -- internals -------------------------------------------------------

    async def _complete(self, expired: bool) -> QuizResult:
        self._cancel_ticks()

        elapsed = min(max(self._duration - self._time_remaining, 0), self._duration)
        answers = tuple(self._answers[qid] for qid in sorted(self._answers))
        scores = score_answers(self._questions, answers)
        result = QuizResult(
            user_name=self._user_name or "",
            total_score=scores.total_score,
            structure_score=scores.structure_score,
            written_score=scores.written_score,
            time_elapsed_seconds=elapsed,
            answers=answers,
        )
        self._result = result
        self._phase = SessionPhase.COMPLETED
        self._persisting = True
        session_id = self.id

        logger.info(
            "Quiz submitted",
            session_id=str(session_id),
            user_name=result.user_name,
            total_score=result.total_score,
            time_elapsed=elapsed,
            expired=expired,
        )
        await self._publish(
            QuizSubmitted(
                session_id=session_id,
                user_name=result.user_name,
                total_score=result.total_score,
                structure_score=result.structure_score,
                written_score=result.written_score,
                time_elapsed_seconds=elapsed,
                expired=expired,
            )
        )
        await self._persist(session_id, result)
        return result

    async def _persist(self, session_id: UUID, result: QuizResult) -> bool:
        try:
            stored = await self._sink.persist(result)
        except Exception as e:
            reason = e.reason if isinstance(e, ResultSinkError) else str(e)
            if self.id != session_id:
                return False
            self._persisting = False
            self._persistence_error = reason
            logger.warning(
                "Result not stored", session_id=str(session_id), reason=reason
            )
            await self._publish(
                ResultPersistFailed(
                    session_id=session_id, user_name=result.user_name, reason=reason
                )
            )
            return False

        # A reset while the store was working discards this outcome
        if self.id != session_id:
            return False
        self._persisting = False
        self._stored = stored
        self._persistence_error = None
        logger.info("Result stored", session_id=str(session_id), result_id=stored.id)
        await self._publish(
            ResultPersisted(
                session_id=session_id, user_name=result.user_name, result_id=stored.id
            )
        )
        return True

    async def _raise_warning(self, threshold: int) -> None:
        if threshold in self._warnings_raised:
            return
        self._warnings_raised.append(threshold)
        event = TimeWarningRaised(session_id=self.id, remaining_seconds=threshold)
        logger.warning(event.message, session_id=str(self.id))
        await self._publish(event)

    def _cancel_ticks(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None

    async def _publish(self, event: Event) -> None:
        if self._bus is not None:
            await self._bus.publish(event)

"""Countdown tick scheduling.

The quiz session never reads the wall clock. It asks a TickScheduler
to call it back every interval and cancels the returned handle when the
session leaves the in-progress phase.

Implementations:
- APSchedulerTickScheduler: APScheduler interval job on the event loop
- ManualTickScheduler: virtual clock stepped explicitly (tests, replays)
"""

from collections.abc import Awaitable, Callable
from datetime import UTC
from itertools import count
from typing import Protocol

import structlog
from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = structlog.get_logger()

TickCallback = Callable[[], Awaitable[None]]


class TickHandle(Protocol):
    """Cancellable registration returned by a scheduler."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    """Something that can call an async callback periodically."""

    def schedule_tick(
        self, interval_seconds: int, callback: TickCallback
    ) -> TickHandle: ...


def format_clock(seconds: int) -> str:
    """Format remaining seconds as m:ss (e.g. 29:59)."""
    seconds = max(seconds, 0)
    return f"{seconds // 60}:{seconds % 60:02d}"


class _ApschedulerHandle:
    def __init__(self, job: Job):
        self._job = job
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def job_id(self) -> str:
        return self._job.id

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        try:
            self._job.remove()
        except JobLookupError:
            # Already gone, e.g. scheduler shut down first
            logger.debug("Tick job already removed", job_id=self._job.id)


class APSchedulerTickScheduler:
    """Tick scheduler backed by an APScheduler AsyncIOScheduler.

    Each registration becomes an interval job with max_instances=1, so a
    slow callback never overlaps with the next tick.
    """

    def __init__(self, scheduler: AsyncIOScheduler | None = None):
        """Initialize with an optional existing scheduler.

        Args:
            scheduler: Scheduler to add jobs to. A private one is created
                and started lazily if omitted.
        """
        self._scheduler = scheduler or AsyncIOScheduler(timezone=UTC)
        self._ids = count(1)

    @property
    def scheduler(self) -> AsyncIOScheduler:
        return self._scheduler

    def schedule_tick(
        self, interval_seconds: int, callback: TickCallback
    ) -> _ApschedulerHandle:
        if not self._scheduler.running:
            self._scheduler.start()
        job = self._scheduler.add_job(
            callback,
            "interval",
            seconds=interval_seconds,
            id=f"quiz_tick_{next(self._ids)}",
            max_instances=1,
            coalesce=False,
        )
        logger.debug("Scheduled quiz tick", job_id=job.id, interval=interval_seconds)
        return _ApschedulerHandle(job)

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)


class _ManualHandle:
    def __init__(self, interval_seconds: int, callback: TickCallback, due: int):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.next_due = due
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualTickScheduler:
    """Virtual-clock scheduler. Nothing fires until advance() is awaited."""

    def __init__(self) -> None:
        self.now = 0
        self._handles: list[_ManualHandle] = []

    def schedule_tick(
        self, interval_seconds: int, callback: TickCallback
    ) -> _ManualHandle:
        handle = _ManualHandle(interval_seconds, callback, self.now + interval_seconds)
        self._handles.append(handle)
        return handle

    @property
    def active_count(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled)

    async def advance(self, seconds: int = 1) -> None:
        """Move the virtual clock forward, firing due callbacks in order."""
        for _ in range(seconds):
            self.now += 1
            for handle in list(self._handles):
                if handle.cancelled or handle.next_due > self.now:
                    continue
                handle.next_due += handle.interval_seconds
                await handle.callback()
            self._handles = [h for h in self._handles if not h.cancelled]

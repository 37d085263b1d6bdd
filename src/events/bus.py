"""Async event bus for in-process pub/sub.

The quiz session publishes events (time warnings, submission outcomes);
the presentation layer and loggers subscribe to the ones they care about.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from src.events.base import Event

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Event)
EventHandler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]


class EventBus:
    """Simple async event bus for in-process pub/sub.

    Features:
    - Type-safe subscriptions
    - Async handler support
    - Error isolation (one handler failure doesn't affect others)
    """

    def __init__(self) -> None:
        self._subscribers: dict[type[Event], list[EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[T],
        handler: Callable[[T], None] | Callable[[T], Awaitable[None]],
    ) -> None:
        """Subscribe a handler to an event type.

        Args:
            event_type: The event class to subscribe to
            handler: Function to call when event is published
        """
        self._subscribers.setdefault(event_type, []).append(handler)
        logger.debug(f"Subscribed handler to {event_type.__name__}")

    def unsubscribe(
        self,
        event_type: type[T],
        handler: EventHandler,
    ) -> None:
        """Unsubscribe a handler from an event type."""
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(f"Unsubscribed handler from {event_type.__name__}")

    async def publish(self, event: Event) -> None:
        """Publish an event to all subscribers.

        Handler errors are logged and never propagate to the publisher.

        Args:
            event: The event to publish
        """
        handlers = self._subscribers.get(type(event), [])

        logger.debug(f"Publishing {event.event_type} to {len(handlers)} handler(s)")

        tasks = []
        for handler in handlers:
            if asyncio.iscoroutinefunction(handler):
                tasks.append(self._run_async_handler(handler, event))
            else:
                tasks.append(self._run_sync_handler(handler, event))

        if tasks:
            results = await asyncio.gather(*tasks, return_exceptions=True)
            for result in results:
                if isinstance(result, Exception):
                    logger.error(f"Handler error for {event.event_type}: {result}")

    async def _run_async_handler(
        self,
        handler: Callable[[Event], Awaitable[None]],
        event: Event,
    ) -> None:
        """Run an async handler safely."""
        try:
            await handler(event)
        except Exception as e:
            logger.error(f"Async handler error: {e}")
            raise

    async def _run_sync_handler(
        self,
        handler: Callable[[Event], None],
        event: Event,
    ) -> None:
        """Run a sync handler in thread pool."""
        try:
            await asyncio.to_thread(handler, event)
        except Exception as e:
            logger.error(f"Sync handler error: {e}")
            raise

    def subscriber_count(self, event_type: type[Event]) -> int:
        """Get number of subscribers for an event type."""
        return len(self._subscribers.get(event_type, []))

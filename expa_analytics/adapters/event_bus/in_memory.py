"""In-memory event bus implementation.

Fans request events out to subscribers in-process. Subscribers run
concurrently on the caller's event loop.
"""

import asyncio
import fnmatch
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from expa_analytics.core.protocols.event_bus import DomainEvent, EventHandler, EventSubscriber

logger = logging.getLogger(__name__)


class InMemoryEventBus:
    """In-memory event bus with pattern-based subscriptions.

    Implements the EventBus protocol. Events are delivered to all
    matching subscribers asynchronously.

    Usage:
        bus = InMemoryEventBus()
        bus.subscribe("request.*", metrics_handler)
        bus.subscribe("request.failed", alert_handler)
        await bus.publish(RequestLifecycleEvent.sent(...))
    """

    def __init__(self) -> None:
        """Initialize the event bus."""
        self._subscribers: list[tuple[str, "EventHandler"]] = []

    def subscribe(self, event_pattern: str, handler: "EventHandler") -> None:
        """Register a handler for events matching the pattern.

        Args:
            event_pattern: Glob pattern (e.g., 'request.*', 'request.failed').
            handler: Async function to call when matching events are published.
        """
        self._subscribers.append((event_pattern, handler))
        logger.debug(f"EventBus: subscribed handler to '{event_pattern}'")

    def register(self, subscriber: "EventSubscriber") -> None:
        """Subscribe ``subscriber.handle`` to each of its EVENT_PATTERNS."""
        for pattern in subscriber.EVENT_PATTERNS:
            self.subscribe(pattern, subscriber.handle)

    async def publish(self, event: "DomainEvent") -> None:
        """Publish an event to all matching subscribers.

        Subscribers are called concurrently. Failures in one subscriber
        don't affect others and are never raised to the publisher.

        Args:
            event: The domain event to publish.
        """
        event_type = event.event_type
        matching_handlers = [
            handler
            for pattern, handler in self._subscribers
            if fnmatch.fnmatch(event_type, pattern)
        ]

        if not matching_handlers:
            logger.warning(f"EventBus: no subscribers for '{event_type}'")
            return

        logger.debug(f"EventBus: publishing '{event_type}' to {len(matching_handlers)} subscribers")

        results = await asyncio.gather(
            *[handler(event) for handler in matching_handlers],
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, Exception):
                logger.error(
                    f"EventBus: subscriber failed for '{event_type}': {result}",
                    exc_info=result,
                )

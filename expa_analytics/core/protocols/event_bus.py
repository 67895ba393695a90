"""EventBus protocol for domain event fan-out.

The event bus decouples integrations from the code that observes their
requests. Instead of posting named notifications on a global bus,
integrations publish typed events and subscribers handle them.

Usage:
    # Integration publishes
    await event_bus.publish(RequestLifecycleEvent.sent(...))

    # Subscribers react (registered at startup)
    event_bus.subscribe("request.*", metrics_subscriber.handle)
    event_bus.subscribe("request.failed", alert_handler)
"""

from datetime import datetime
from typing import Awaitable, Callable, ClassVar, List, Protocol, runtime_checkable


@runtime_checkable
class DomainEvent(Protocol):
    """Base protocol for all domain events.

    Concrete events are frozen models that carry domain-specific data.
    The bus only cares about these three fields for routing and metadata.
    Subscribers type-narrow to the concrete event class they expect.
    """

    @property
    def event_type(self) -> str:
        """Dot-separated event identifier (e.g., 'request.sent').

        Convention: {domain}.{action}, used for pattern matching.
        """
        ...

    @property
    def timestamp(self) -> datetime:
        """When the event occurred (UTC)."""
        ...

    @property
    def integration(self) -> str:
        """Name of the integration that emitted the event."""
        ...


# Type alias for event handlers (async callables that receive a DomainEvent)
EventHandler = Callable[[DomainEvent], Awaitable[None]]


@runtime_checkable
class EventBus(Protocol):
    """Protocol for publishing domain events to multiple subscribers.

    The bus matches events to subscribers by glob pattern on event_type.
    Failures in one subscriber don't affect others.
    """

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to all matching subscribers.

        Args:
            event: The domain event to publish.
        """
        ...

    def subscribe(self, event_pattern: str, handler: EventHandler) -> None:
        """Register a handler for events matching the pattern.

        Args:
            event_pattern: Glob pattern to match (e.g., 'request.*', 'request.failed').
            handler: Async callable invoked when a matching event is published.
        """
        ...


class EventSubscriber(Protocol):
    """A subscriber that declares the patterns it wants and one handler."""

    EVENT_PATTERNS: ClassVar[List[str]]

    async def handle(self, event: DomainEvent) -> None:
        """Handle one matching event. Must not raise."""
        ...

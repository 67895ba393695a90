"""Fake event bus for testing.

Records request lifecycle events so tests can assert on their order and
pairing without wiring real subscribers.
"""

from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from expa_analytics.core.protocols.event_bus import DomainEvent, EventHandler, EventSubscriber


class FakeEventBus:
    """Recording implementation of EventBus.

    Subscriptions are accepted and ignored; every published event is kept
    in ``events`` in publish order.

    Usage:
        bus = FakeEventBus()
        integration = ExpaIntegration(settings, bus)
        await integration.flush()

        assert bus.event_types() == ["request.sent", "request.succeeded"]
    """

    def __init__(self) -> None:
        self.events: list["DomainEvent"] = []

    def subscribe(self, event_pattern: str, handler: "EventHandler") -> None:
        pass

    def register(self, subscriber: "EventSubscriber") -> None:
        pass

    async def publish(self, event: "DomainEvent") -> None:
        self.events.append(event)

    # Test helpers

    def event_types(self) -> list[str]:
        """Return the event_type of every recorded event, in publish order."""
        return [str(e.event_type.value) for e in self.events]

    def get_event(self, event_type: str) -> "DomainEvent":
        """Return the first event of ``event_type``, failing the test if none was published."""
        for event in self.events:
            if event.event_type == event_type:
                return event
        raise AssertionError(f"No '{event_type}' event was published; got {self.event_types()}")

    def for_request(self, request_id: UUID) -> list[str]:
        """Event types published for one delivery request, in order."""
        return [
            str(e.event_type.value)
            for e in self.events
            if getattr(e, "request_id", None) == request_id
        ]

    def assert_not_published(self, event_type: str) -> None:
        if any(e.event_type == event_type for e in self.events):
            raise AssertionError(f"'{event_type}' was published but should not have been")

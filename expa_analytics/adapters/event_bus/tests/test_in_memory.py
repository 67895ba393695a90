"""Tests for InMemoryEventBus."""

from uuid import uuid4

import pytest

from expa_analytics.adapters.event_bus.in_memory import InMemoryEventBus
from expa_analytics.core.events.request import RequestLifecycleEvent


def _sent() -> RequestLifecycleEvent:
    return RequestLifecycleEvent.sent("Expa", uuid4(), "https://api.example.com", 3)


def _failed() -> RequestLifecycleEvent:
    return RequestLifecycleEvent.failed(
        "Expa", uuid4(), "https://api.example.com", 3, error="boom", status_code=500
    )


class TestInMemoryEventBus:
    @pytest.mark.asyncio
    async def test_glob_pattern_matches(self):
        bus = InMemoryEventBus()
        received = []

        async def handler(event):
            received.append(event.event_type.value)

        bus.subscribe("request.*", handler)
        await bus.publish(_sent())
        await bus.publish(_failed())

        assert received == ["request.sent", "request.failed"]

    @pytest.mark.asyncio
    async def test_exact_pattern_filters(self):
        bus = InMemoryEventBus()
        received = []

        async def handler(event):
            received.append(event)

        bus.subscribe("request.failed", handler)
        await bus.publish(_sent())

        assert received == []

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_affect_others(self):
        bus = InMemoryEventBus()
        received = []

        async def broken(event):
            raise RuntimeError("subscriber crashed")

        async def healthy(event):
            received.append(event)

        bus.subscribe("request.*", broken)
        bus.subscribe("request.*", healthy)

        await bus.publish(_sent())

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self):
        bus = InMemoryEventBus()
        await bus.publish(_sent())

    @pytest.mark.asyncio
    async def test_register_uses_event_patterns(self):
        bus = InMemoryEventBus()

        class Recorder:
            EVENT_PATTERNS = ["request.sent", "request.succeeded"]

            def __init__(self):
                self.seen = []

            async def handle(self, event):
                self.seen.append(event.event_type.value)

        recorder = Recorder()
        bus.register(recorder)
        await bus.publish(_sent())
        await bus.publish(_failed())

        assert recorder.seen == ["request.sent"]


def test_request_events_are_frozen():
    event = _sent()
    with pytest.raises(Exception):
        event.batch_size = 10

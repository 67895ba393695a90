"""Event bus adapter.

Implements the EventBus protocol with in-memory fan-out to subscribers.
"""

from expa_analytics.adapters.event_bus.fake import FakeEventBus
from expa_analytics.adapters.event_bus.in_memory import InMemoryEventBus

__all__ = ["InMemoryEventBus", "FakeEventBus"]

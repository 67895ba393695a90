"""Domain events for the event bus."""

from expa_analytics.core.events.base import DomainEvent
from expa_analytics.core.events.enums import EventType, RequestEventType
from expa_analytics.core.events.request import RequestLifecycleEvent

__all__ = [
    "DomainEvent",
    "EventType",
    "RequestEventType",
    "RequestLifecycleEvent",
]

"""Core protocols for dependency injection."""

from expa_analytics.core.protocols.event_bus import (
    DomainEvent,
    EventBus,
    EventHandler,
    EventSubscriber,
)
from expa_analytics.core.protocols.integration import AnalyticsIntegration
from expa_analytics.core.protocols.metrics import RequestMetrics

__all__ = [
    "AnalyticsIntegration",
    "DomainEvent",
    "EventBus",
    "EventHandler",
    "EventSubscriber",
    "RequestMetrics",
]

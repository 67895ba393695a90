"""Dependency Injection Container.

The container is a simple immutable dataclass that holds protocol implementations.
It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Fail fast: all construction at startup
- Type safety: fields are protocol types
- Testing: construct directly with fakes
"""

from dataclasses import dataclass

from expa_analytics.core.analytics import Analytics
from expa_analytics.core.protocols import EventBus, RequestMetrics


@dataclass(frozen=True)
class Container:
    """Immutable container holding the wired analytics object graph.

    Usage:
        # Production: build from settings
        container = create_container(settings)
        container.analytics.track("Signed Up")
        await container.analytics.flush()

        # Testing: construct directly with fakes
        test_container = Container(
            event_bus=FakeEventBus(),
            analytics=Analytics([FakeIntegration()]),
            request_metrics=FakeRequestMetrics(),
        )
    """

    # Event bus carrying the request lifecycle events
    event_bus: EventBus

    # Dispatcher over every configured integration
    analytics: Analytics

    # Request outcome counters, fed from the event bus
    request_metrics: RequestMetrics

"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container with environment-appropriate implementations.
"""

from typing import Optional

import httpx
from prometheus_client import CollectorRegistry

from expa_analytics.adapters.event_bus.in_memory import InMemoryEventBus
from expa_analytics.adapters.integrations.expa import ExpaIntegration
from expa_analytics.adapters.integrations.posthog import PostHogIntegration
from expa_analytics.adapters.metrics import PrometheusRequestMetrics, RequestMetricsSubscriber
from expa_analytics.core.analytics import Analytics
from expa_analytics.core.config import Settings
from expa_analytics.core.container.container import Container
from expa_analytics.core.logging import logger
from expa_analytics.core.protocols import EventBus, RequestMetrics


def create_container(
    settings: Settings,
    http_client: Optional[httpx.AsyncClient] = None,
    registry: Optional[CollectorRegistry] = None,
) -> Container:
    """Build container with environment-appropriate implementations.

    Args:
        settings: Application settings.
        http_client: Optional shared HTTP client for the Expa integration.
        registry: Optional Prometheus registry for request metrics.

    Returns:
        Fully constructed Container. Integrations are registered but not
        started; call ``container.analytics.start(...)``.
    """
    request_metrics = PrometheusRequestMetrics(registry=registry)
    event_bus = _create_event_bus(request_metrics)
    analytics = _create_analytics(settings, event_bus, http_client)

    logger.info(
        "Analytics container built with integrations: %s",
        [i.name for i in analytics.integrations],
    )
    return Container(
        event_bus=event_bus,
        analytics=analytics,
        request_metrics=request_metrics,
    )


def _create_event_bus(request_metrics: RequestMetrics) -> EventBus:
    """Create event bus with the metrics subscriber wired up."""
    bus = InMemoryEventBus()
    bus.register(RequestMetricsSubscriber(request_metrics))
    return bus


def _create_analytics(
    settings: Settings,
    event_bus: EventBus,
    http_client: Optional[httpx.AsyncClient],
) -> Analytics:
    """Register the integrations enabled by settings.

    ANALYTICS_ENABLED=false yields a dispatcher with no integrations.
    """
    analytics = Analytics()
    if not settings.ANALYTICS_ENABLED:
        logger.info("Analytics disabled by settings")
        return analytics

    if settings.EXPA_ENABLED:
        analytics.add_integration(ExpaIntegration(settings, event_bus, client=http_client))
    if settings.posthog_enabled:
        analytics.add_integration(PostHogIntegration(settings))
    return analytics

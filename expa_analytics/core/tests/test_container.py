"""Tests for the container factory."""

import httpx
import pytest
from prometheus_client import CollectorRegistry

from expa_analytics.adapters.integrations.expa import ExpaIntegration
from expa_analytics.core.config import Settings
from expa_analytics.core.container import create_container


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))


def test_expa_registered_by_default():
    container = create_container(Settings(), http_client=_client())
    names = [i.name for i in container.analytics.integrations]
    assert names == ["Expa"]


def test_analytics_disabled_registers_nothing():
    container = create_container(Settings(ANALYTICS_ENABLED=False), http_client=_client())
    assert container.analytics.integrations == []


def test_posthog_registered_when_configured():
    settings = Settings(ENVIRONMENT="prd", POSTHOG_API_KEY="phc_test")
    container = create_container(settings, http_client=_client())
    names = [i.name for i in container.analytics.integrations]
    assert names == ["Expa", "PostHog"]


@pytest.mark.asyncio
async def test_request_events_reach_metrics():
    registry = CollectorRegistry()
    container = create_container(Settings(), http_client=_client(), registry=registry)
    container.analytics.start()

    expa = container.analytics.get("Expa")
    assert isinstance(expa, ExpaIntegration)
    container.analytics.track("Signed Up")
    await container.analytics.flush()

    sent = registry.get_sample_value(
        "expa_analytics_requests_total", {"integration": "Expa", "outcome": "sent"}
    )
    succeeded = registry.get_sample_value(
        "expa_analytics_requests_total", {"integration": "Expa", "outcome": "succeeded"}
    )
    delivered = registry.get_sample_value(
        "expa_analytics_messages_delivered_total", {"integration": "Expa"}
    )
    assert (sent, succeeded, delivered) == (1.0, 1.0, 1.0)

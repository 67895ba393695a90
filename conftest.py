"""Root conftest for pytest configuration and shared fixtures.

Loaded before the colocated test packages under expa_analytics/.
"""

import os

import pytest

pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any expa_analytics module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("EXPA_API_URL", "https://api.example.com")
os.environ.setdefault("POSTHOG_API_KEY", "")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_event_bus():
    """Fake EventBus that records published events."""
    from expa_analytics.adapters.event_bus.fake import FakeEventBus

    return FakeEventBus()


@pytest.fixture
def fake_request_metrics():
    """Fake RequestMetrics that records observations."""
    from expa_analytics.adapters.metrics.requests import FakeRequestMetrics

    return FakeRequestMetrics()


@pytest.fixture
def fake_integration():
    """Fake integration that records every call."""
    from expa_analytics.adapters.integrations.fake import FakeIntegration

    return FakeIntegration()


@pytest.fixture
def settings():
    """Fresh settings built from the test environment."""
    from expa_analytics.core.config import Settings

    return Settings()

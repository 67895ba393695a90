"""Tests for PostHogIntegration."""

from unittest.mock import MagicMock, patch

import pytest

from expa_analytics.adapters.integrations.posthog import PostHogIntegration
from expa_analytics.core.config import Settings

MODULE = "expa_analytics.adapters.integrations.posthog.posthog"


def _enabled_settings() -> Settings:
    return Settings(ENVIRONMENT="prd", POSTHOG_API_KEY="phc_test", ANALYTICS_ENABLED=True)


@pytest.fixture
def sdk():
    with patch(MODULE) as mock_sdk:
        yield mock_sdk


class TestPostHogIntegration:
    def test_disabled_without_api_key(self, sdk):
        integration = PostHogIntegration(Settings(ENVIRONMENT="prd", POSTHOG_API_KEY=""))
        assert integration.validate() is False

        integration.track("Signed Up")
        sdk.capture.assert_not_called()

    def test_disabled_in_local_environment(self, sdk):
        integration = PostHogIntegration(Settings(ENVIRONMENT="local", POSTHOG_API_KEY="phc_test"))
        assert integration.validate() is False

    def test_track_enriches_with_environment(self, sdk):
        integration = PostHogIntegration(_enabled_settings())
        integration.anonymous_id = "anon-1"

        integration.track("Signed Up", {"plan": "pro"})

        kwargs = sdk.capture.call_args.kwargs
        assert kwargs["distinct_id"] == "anon-1"
        assert kwargs["event"] == "Signed Up"
        assert kwargs["properties"] == {"environment": "prd", "plan": "pro"}

    def test_identify_switches_distinct_id(self, sdk):
        integration = PostHogIntegration(_enabled_settings())
        integration.anonymous_id = "anon-1"

        integration.identify("user-1", {"email": "a@example.com"})

        kwargs = sdk.capture.call_args.kwargs
        assert kwargs["distinct_id"] == "user-1"
        assert kwargs["event"] == "$identify"
        assert kwargs["properties"]["$set"] == {"email": "a@example.com"}
        assert kwargs["properties"]["$anon_distinct_id"] == "anon-1"

    def test_alias_links_previous_id(self, sdk):
        integration = PostHogIntegration(_enabled_settings())
        integration.anonymous_id = "anon-1"

        integration.alias("user-2")

        kwargs = sdk.capture.call_args.kwargs
        assert kwargs["event"] == "$create_alias"
        assert kwargs["properties"]["distinct_id"] == "anon-1"
        assert kwargs["properties"]["alias"] == "user-2"
        assert integration.user_id == "user-2"

    def test_screen_captures_screen_event(self, sdk):
        integration = PostHogIntegration(_enabled_settings())
        integration.user_id = "user-1"

        integration.screen("Checkout", {"step": 2})

        kwargs = sdk.capture.call_args.kwargs
        assert kwargs["distinct_id"] == "user-1"
        assert kwargs["event"] == "$screen"
        assert kwargs["properties"] == {
            "environment": "prd",
            "$screen_name": "Checkout",
            "step": 2,
        }

    def test_group_identifies_company(self, sdk):
        integration = PostHogIntegration(_enabled_settings())
        integration.user_id = "user-1"

        integration.group("acme", {"seats": 40})

        kwargs = sdk.capture.call_args.kwargs
        assert kwargs["event"] == "$groupidentify"
        assert kwargs["groups"] == {"company": "acme"}
        assert kwargs["properties"]["$group_type"] == "company"
        assert kwargs["properties"]["$group_key"] == "acme"
        assert kwargs["properties"]["$group_set"] == {"seats": 40}

    def test_sdk_errors_are_not_raised(self, sdk):
        sdk.capture.side_effect = RuntimeError("network down")
        integration = PostHogIntegration(_enabled_settings())

        integration.track("Signed Up")

    @pytest.mark.asyncio
    async def test_flush_calls_sdk(self, sdk):
        sdk.flush = MagicMock()
        integration = PostHogIntegration(_enabled_settings())

        await integration.flush()

        sdk.flush.assert_called_once_with()

"""Analytics integrations."""

from expa_analytics.adapters.integrations._base import BaseIntegration
from expa_analytics.adapters.integrations.expa import ExpaIntegration
from expa_analytics.adapters.integrations.fake import FakeIntegration
from expa_analytics.adapters.integrations.posthog import PostHogIntegration

__all__ = [
    "BaseIntegration",
    "ExpaIntegration",
    "FakeIntegration",
    "PostHogIntegration",
]

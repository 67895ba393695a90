"""PostHog analytics integration."""

import asyncio
from typing import Any, Dict, Optional
from uuid import uuid4

import posthog

from expa_analytics.adapters.integrations._base import BaseIntegration
from expa_analytics.core.config import Settings


class PostHogIntegration(BaseIntegration):
    """Forwards analytics calls to the PostHog SDK.

    Every call goes through ``posthog.capture`` using PostHog's reserved
    event names for identify, group and alias, so the integration works
    across SDK versions. Events are enriched with the deployment
    environment. SDK errors are logged, never raised.
    """

    name = "PostHog"

    def __init__(self, settings: Settings) -> None:
        """Configure PostHog SDK from application settings."""
        super().__init__()
        self._sdk_enabled = settings.posthog_enabled
        self._environment = settings.ENVIRONMENT.value
        self.anonymous_id: str = str(uuid4())
        self.user_id: Optional[str] = None

        if self._sdk_enabled:
            posthog.api_key = settings.POSTHOG_API_KEY
            posthog.host = settings.POSTHOG_HOST
            self.logger.info("PostHog integration initialized (env=%s)", self._environment)
        else:
            self.logger.info("PostHog integration disabled (env=%s)", self._environment)

    @property
    def distinct_id(self) -> str:
        """User id if set, else anonymous id."""
        return self.user_id or self.anonymous_id

    def validate(self) -> bool:
        """Valid only when the SDK was configured."""
        self.valid = self._sdk_enabled
        return self.valid

    def _base_properties(self) -> Dict[str, Any]:
        return {"environment": self._environment}

    def _capture(
        self,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
        groups: Optional[Dict[str, str]] = None,
    ) -> None:
        if not self._sdk_enabled:
            return
        try:
            posthog.capture(
                distinct_id=self.distinct_id,
                event=event,
                properties={**self._base_properties(), **(properties or {})},
                groups=groups or {},
            )
        except Exception as e:
            self.logger.error("Failed to send PostHog event '%s': %s", event, e)

    def identify(self, user_id: Optional[str], traits: Optional[Dict[str, Any]] = None) -> None:
        """Send ``$identify`` with the traits as person properties."""
        if user_id:
            self.user_id = user_id
        self._capture(
            "$identify",
            {"$set": traits or {}, "$anon_distinct_id": self.anonymous_id},
        )

    def track(self, event: str, properties: Optional[Dict[str, Any]] = None) -> None:
        self._capture(event, properties)

    def screen(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        self._capture("$screen", {"$screen_name": name, **(properties or {})})

    def group(self, group_id: str, traits: Optional[Dict[str, Any]] = None) -> None:
        self._capture(
            "$groupidentify",
            {"$group_type": "company", "$group_key": group_id, "$group_set": traits or {}},
            groups={"company": group_id},
        )

    def alias(self, new_id: str) -> None:
        previous_id = self.distinct_id
        self.user_id = new_id
        self._capture("$create_alias", {"distinct_id": previous_id, "alias": new_id})

    def reset(self) -> None:
        self.user_id = None
        self.anonymous_id = str(uuid4())

    async def flush(self) -> None:
        """Flush the SDK's background queue without blocking the event loop."""
        if not self._sdk_enabled:
            return
        try:
            await asyncio.to_thread(posthog.flush)
        except Exception as e:
            self.logger.error("Failed to flush PostHog queue: %s", e)

"""Host analytics dispatcher.

Owns the set of named integrations and fans every analytics call out to
the ones that are enabled. A failure inside one integration is logged and
never reaches the caller or the other integrations.

Usage:
    analytics = Analytics([ExpaIntegration(settings, bus), PostHogIntegration(settings)])
    analytics.start({"Expa": {"apiUrl": "https://api.example.com"}})

    analytics.identify("user-42", {"plan": "pro"})
    analytics.track("Signed Up", integrations={"PostHog": False})
    await analytics.flush()
"""

import asyncio
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from expa_analytics.core.exceptions import IntegrationNotFoundException
from expa_analytics.core.logging import logger
from expa_analytics.core.protocols.integration import AnalyticsIntegration

analytics_logger = logger.with_prefix("Analytics: ").with_context(component="dispatcher")

_ALL = "All"


class Analytics:
    """Dispatcher that forwards calls to every enabled integration.

    The ``integrations`` argument accepted by each call maps integration
    names to booleans for that call only. The special key ``"All"`` sets
    the default for names that are not listed (True when absent).
    """

    def __init__(self, integrations: Optional[Iterable[AnalyticsIntegration]] = None) -> None:
        """Register the given integrations (order is preserved)."""
        self._integrations: Dict[str, AnalyticsIntegration] = {}
        for integration in integrations or ():
            self.add_integration(integration)

    @property
    def integrations(self) -> List[AnalyticsIntegration]:
        """Registered integrations, in registration order."""
        return list(self._integrations.values())

    def add_integration(self, integration: AnalyticsIntegration) -> None:
        """Register an integration under its name, replacing any previous one."""
        if integration.name in self._integrations:
            analytics_logger.warning("Replacing integration '%s'", integration.name)
        self._integrations[integration.name] = integration

    def get(self, name: str) -> AnalyticsIntegration:
        """Return the integration registered under ``name``."""
        try:
            return self._integrations[name]
        except KeyError:
            raise IntegrationNotFoundException(name) from None

    def start(self, settings: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        """Apply per-integration settings, validate, and start each integration.

        Args:
            settings: Provider settings keyed by integration name.

        Integrations that fail validation are left disabled and skipped
        by every later call.
        """
        settings = settings or {}
        for integration in self._integrations.values():
            integration.update_settings(settings.get(integration.name, {}))
            if integration.validate():
                integration.start()
            else:
                analytics_logger.warning(
                    "Integration '%s' failed validation and stays disabled", integration.name
                )

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def identify(
        self,
        user_id: Optional[str],
        traits: Optional[Dict[str, Any]] = None,
        integrations: Optional[Dict[str, bool]] = None,
    ) -> None:
        self._dispatch("identify", lambda i: i.identify(user_id, traits), integrations)

    def track(
        self,
        event: str,
        properties: Optional[Dict[str, Any]] = None,
        integrations: Optional[Dict[str, bool]] = None,
    ) -> None:
        self._dispatch("track", lambda i: i.track(event, properties), integrations)

    def screen(
        self,
        name: str,
        properties: Optional[Dict[str, Any]] = None,
        integrations: Optional[Dict[str, bool]] = None,
    ) -> None:
        self._dispatch("screen", lambda i: i.screen(name, properties), integrations)

    def group(
        self,
        group_id: str,
        traits: Optional[Dict[str, Any]] = None,
        integrations: Optional[Dict[str, bool]] = None,
    ) -> None:
        self._dispatch("group", lambda i: i.group(group_id, traits), integrations)

    def alias(self, new_id: str, integrations: Optional[Dict[str, bool]] = None) -> None:
        self._dispatch("alias", lambda i: i.alias(new_id), integrations)

    def reset(self) -> None:
        self._dispatch("reset", lambda i: i.reset(), None)

    async def flush(self) -> None:
        """Flush every enabled integration concurrently.

        A failing integration is logged; the others still flush.
        """
        targets = [i for i in self._integrations.values() if i.enabled]
        results = await asyncio.gather(*[i.flush() for i in targets], return_exceptions=True)
        for integration, result in zip(targets, results):
            if isinstance(result, Exception):
                analytics_logger.error(
                    "flush failed for '%s': %s", integration.name, result, exc_info=result
                )

    async def shutdown(self) -> None:
        """Flush pending messages, then release integration resources."""
        await self.flush()
        for integration in self._integrations.values():
            try:
                await integration.aclose()
            except Exception as e:
                analytics_logger.error("close failed for '%s': %s", integration.name, e)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _allowed(name: str, integrations: Optional[Dict[str, bool]]) -> bool:
        if not integrations:
            return True
        if name in integrations:
            return bool(integrations[name])
        return bool(integrations.get(_ALL, True))

    def _dispatch(
        self,
        method: str,
        call: Callable[[AnalyticsIntegration], None],
        integrations: Optional[Dict[str, bool]],
    ) -> None:
        for integration in self._integrations.values():
            if not integration.enabled or not self._allowed(integration.name, integrations):
                continue
            try:
                call(integration)
            except Exception as e:
                analytics_logger.error(
                    "%s failed for '%s': %s", method, integration.name, e, exc_info=True
                )

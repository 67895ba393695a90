"""Protocol for analytics integrations.

Every integration (Expa, PostHog, test fakes) exposes the same lifecycle so
the ``Analytics`` dispatcher can fan calls out without knowing which
backend sits behind each one.
"""

from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class AnalyticsIntegration(Protocol):
    """Fire-and-forget analytics integration.

    Adapter boundary between the host dispatcher and one analytics
    provider. Enqueueing calls are synchronous; ``flush`` is the only
    call that may touch the network.
    """

    name: str

    @property
    def enabled(self) -> bool:
        """True once the integration validated its settings and started."""
        ...

    def update_settings(self, settings: Mapping[str, Any]) -> None:
        """Apply provider settings (e.g. an endpoint override)."""
        ...

    def validate(self) -> bool:
        """Return whether the integration has what it needs to deliver."""
        ...

    def start(self) -> None:
        """Mark the integration ready to receive calls."""
        ...

    def identify(self, user_id: Optional[str], traits: Optional[Dict[str, Any]] = None) -> None:
        """Attach the given user id and traits to the current visitor."""
        ...

    def track(self, event: str, properties: Optional[Dict[str, Any]] = None) -> None:
        """Record a single named event."""
        ...

    def screen(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        """Record a screen view."""
        ...

    def group(self, group_id: str, traits: Optional[Dict[str, Any]] = None) -> None:
        """Associate the current user with a group."""
        ...

    def alias(self, new_id: str) -> None:
        """Link the current identity to ``new_id``."""
        ...

    def reset(self) -> None:
        """Forget the current identity."""
        ...

    async def flush(self) -> None:
        """Deliver anything buffered now.

        Implementations must be safe to call in fire-and-forget style:
        delivery errors are logged (and broadcast), never raised.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources owned by the integration."""
        ...

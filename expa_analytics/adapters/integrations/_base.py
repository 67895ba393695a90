"""Base integration class."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Mapping, Optional

from expa_analytics.core.logging import ContextualLogger
from expa_analytics.core.logging import logger as default_logger


class BaseIntegration(ABC):
    """Common base for every analytics integration.

    Holds the provider settings and the validate/start lifecycle. Only
    ``identify`` and ``track`` are mandatory; the remaining calls default
    to no-ops so providers that have no equivalent can ignore them.
    """

    name: ClassVar[str] = ""

    def __init__(self) -> None:
        """Initialize lifecycle state."""
        self.settings: Dict[str, Any] = {}
        self.valid = False
        self.started = False
        self._logger: Optional[ContextualLogger] = None

    @property
    def logger(self) -> ContextualLogger:
        """Logger tagged with this integration's name."""
        if self._logger is None:
            self._logger = default_logger.with_context(integration=self.name)
        return self._logger

    @property
    def enabled(self) -> bool:
        """True once the integration validated its settings and started."""
        return self.valid and self.started

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def update_settings(self, settings: Mapping[str, Any]) -> None:
        """Store provider settings. Subclasses read the keys they understand."""
        self.settings = dict(settings)

    def validate(self) -> bool:
        """Check the settings and remember the result."""
        self.valid = True
        return self.valid

    def start(self) -> None:
        """Mark the integration started. Does nothing unless it validated."""
        if not self.valid:
            self.logger.warning("Not starting %s: settings did not validate", self.name)
            return
        self.started = True
        self.logger.debug("Started %s", self.name)

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    @abstractmethod
    def identify(self, user_id: Optional[str], traits: Optional[Dict[str, Any]] = None) -> None:
        """Attach the given user id and traits to the current visitor."""
        pass

    @abstractmethod
    def track(self, event: str, properties: Optional[Dict[str, Any]] = None) -> None:
        """Record a single named event."""
        pass

    def screen(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        pass

    def group(self, group_id: str, traits: Optional[Dict[str, Any]] = None) -> None:
        pass

    def alias(self, new_id: str) -> None:
        pass

    def reset(self) -> None:
        pass

    async def flush(self) -> None:
        pass

    async def aclose(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} enabled={self.enabled}>"

"""Logging for the analytics package.

Every log line can carry a set of dimensions (integration name, request id,
...). ``ContextualLogger`` keeps those dimensions and renders them after the
message so they survive plain-text log shipping.

Usage:
    from expa_analytics.core.logging import logger

    request_logger = logger.with_context(integration="Expa", request_id=str(rid))
    request_logger.info("Batch delivered")
"""

import logging
import sys
from typing import Any, MutableMapping, Optional

from expa_analytics.core.config import settings

_ROOT_LOGGER_NAME = "expa_analytics"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that appends its dimensions to every message."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Wrap ``logger`` with a fixed set of dimensions and an optional prefix."""
        super().__init__(logger, {})
        self.dimensions: dict[str, Any] = dict(dimensions or {})
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("dimensions", self.dimensions)
        kwargs["extra"] = extra
        return f"{self.prefix}{msg}", kwargs

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with ``dimensions`` merged into the current ones."""
        return ContextualLogger(self.logger, {**self.dimensions, **dimensions}, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.dimensions, prefix)


class _DimensionFormatter(logging.Formatter):
    """Appends ``key=value`` dimensions to the formatted record."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        dimensions = getattr(record, "dimensions", None)
        if not dimensions:
            return base
        rendered = " ".join(f"{k}={v}" for k, v in sorted(dimensions.items()))
        return f"{base} [{rendered}]"


class LoggerConfigurator:
    """Builds configured loggers for the package."""

    _configured = False

    @classmethod
    def _configure_root(cls) -> None:
        if cls._configured:
            return
        root = logging.getLogger(_ROOT_LOGGER_NAME)
        root.setLevel(settings.LOG_LEVEL)
        handler = logging.StreamHandler(sys.stdout)
        if settings.LOCAL_DEVELOPMENT:
            handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        else:
            handler.setFormatter(
                _DimensionFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
            )
        root.addHandler(handler)
        cls._configured = True

    @classmethod
    def configure_logger(
        cls,
        name: str,
        dimensions: Optional[dict[str, Any]] = None,
    ) -> ContextualLogger:
        """Return a ContextualLogger for ``name`` carrying ``dimensions``.

        Args:
            name: Dotted logger name, normally under ``expa_analytics``.
            dimensions: Key/value pairs attached to every record.
        """
        cls._configure_root()
        return ContextualLogger(logging.getLogger(name), dimensions)


logger = LoggerConfigurator.configure_logger(_ROOT_LOGGER_NAME)

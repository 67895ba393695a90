"""Event bus subscriber that turns request events into metrics."""

import logging
from typing import List

from expa_analytics.core.events.enums import RequestEventType
from expa_analytics.core.events.request import RequestLifecycleEvent
from expa_analytics.core.protocols.event_bus import DomainEvent, EventSubscriber
from expa_analytics.core.protocols.metrics import RequestMetrics

logger = logging.getLogger(__name__)


class RequestMetricsSubscriber(EventSubscriber):
    """Counts every request outcome and the messages delivered on success."""

    EVENT_PATTERNS: List[str] = ["request.*"]

    _OUTCOMES: dict[RequestEventType, str] = {
        RequestEventType.SENT: "sent",
        RequestEventType.SUCCEEDED: "succeeded",
        RequestEventType.FAILED: "failed",
    }

    def __init__(self, metrics: RequestMetrics) -> None:
        """Initialize with the metrics sink."""
        self._metrics = metrics

    async def handle(self, event: DomainEvent) -> None:
        """Record a request lifecycle event."""
        if not isinstance(event, RequestLifecycleEvent):
            return
        try:
            self._metrics.observe_request(event.integration, self._OUTCOMES[event.event_type])
            if event.event_type == RequestEventType.SUCCEEDED:
                self._metrics.observe_delivered(event.integration, event.batch_size)
        except Exception as e:
            logger.error(
                "RequestMetricsSubscriber failed for '%s': %s",
                event.event_type.value,
                e,
                exc_info=True,
            )

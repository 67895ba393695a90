"""Request metrics adapters (Prometheus + Fake).

Prometheus implementation creates a dedicated CollectorRegistry so
integration metrics are isolated from the default global registry.
"""

from dataclasses import dataclass

from prometheus_client import CollectorRegistry, Counter, generate_latest

from expa_analytics.core.protocols.metrics import RequestMetrics


class PrometheusRequestMetrics(RequestMetrics):
    """Prometheus-backed request metrics collection."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or CollectorRegistry()

        self._requests_total = Counter(
            "expa_analytics_requests_total",
            "Integration batch requests by outcome",
            ["integration", "outcome"],
            registry=self._registry,
        )

        self._messages_delivered = Counter(
            "expa_analytics_messages_delivered_total",
            "Messages accepted by integration endpoints",
            ["integration"],
            registry=self._registry,
        )

    def observe_request(self, integration: str, outcome: str) -> None:
        self._requests_total.labels(integration=integration, outcome=outcome).inc()

    def observe_delivered(self, integration: str, message_count: int) -> None:
        self._messages_delivered.labels(integration=integration).inc(message_count)

    def render(self) -> bytes:
        """Serialize the registry in Prometheus text exposition format."""
        return generate_latest(self._registry)


@dataclass
class RequestRecord:
    """Single recorded request observation."""

    integration: str
    outcome: str


class FakeRequestMetrics:
    """In-memory test double for RequestMetrics."""

    def __init__(self) -> None:
        self.requests: list[RequestRecord] = []
        self.delivered: dict[str, int] = {}

    def observe_request(self, integration: str, outcome: str) -> None:
        self.requests.append(RequestRecord(integration=integration, outcome=outcome))

    def observe_delivered(self, integration: str, message_count: int) -> None:
        self.delivered[integration] = self.delivered.get(integration, 0) + message_count

    def outcomes(self) -> list[str]:
        """Return recorded outcomes in order."""
        return [r.outcome for r in self.requests]

"""Metrics adapters."""

from expa_analytics.adapters.metrics.requests import (
    FakeRequestMetrics,
    PrometheusRequestMetrics,
)
from expa_analytics.adapters.metrics.subscriber import RequestMetricsSubscriber

__all__ = [
    "FakeRequestMetrics",
    "PrometheusRequestMetrics",
    "RequestMetricsSubscriber",
]

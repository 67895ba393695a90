"""Metrics protocols for dependency injection."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestMetrics(Protocol):
    """Protocol for integration request metrics."""

    def observe_request(self, integration: str, outcome: str) -> None:
        """Count one request with the given outcome ('sent', 'succeeded', 'failed')."""
        ...

    def observe_delivered(self, integration: str, message_count: int) -> None:
        """Count messages accepted by an integration endpoint."""
        ...

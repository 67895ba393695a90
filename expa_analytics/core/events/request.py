"""Request lifecycle events.

Published by integrations around each batch delivery and consumed by
metrics, logging, and any host code that wants to observe deliveries.
"""

from typing import Optional
from uuid import UUID

from expa_analytics.core.events.base import DomainEvent
from expa_analytics.core.events.enums import RequestEventType


class RequestLifecycleEvent(DomainEvent):
    """Event published while a batch request is in flight.

    Published when a request is:
    - SENT: The batch has been handed to the transport
    - SUCCEEDED: The endpoint answered with a 2xx status
    - FAILED: The transport errored or the endpoint answered non-2xx
    """

    event_type: RequestEventType

    request_id: UUID
    api_url: str
    batch_size: int

    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def sent(
        cls,
        integration: str,
        request_id: UUID,
        api_url: str,
        batch_size: int,
    ) -> "RequestLifecycleEvent":
        """Create a SENT event (request issued)."""
        return cls(
            event_type=RequestEventType.SENT,
            integration=integration,
            request_id=request_id,
            api_url=api_url,
            batch_size=batch_size,
        )

    @classmethod
    def succeeded(
        cls,
        integration: str,
        request_id: UUID,
        api_url: str,
        batch_size: int,
        status_code: int,
    ) -> "RequestLifecycleEvent":
        """Create a SUCCEEDED event (2xx response)."""
        return cls(
            event_type=RequestEventType.SUCCEEDED,
            integration=integration,
            request_id=request_id,
            api_url=api_url,
            batch_size=batch_size,
            status_code=status_code,
        )

    @classmethod
    def failed(
        cls,
        integration: str,
        request_id: UUID,
        api_url: str,
        batch_size: int,
        error: str,
        status_code: Optional[int] = None,
    ) -> "RequestLifecycleEvent":
        """Create a FAILED event (transport error or non-2xx response)."""
        return cls(
            event_type=RequestEventType.FAILED,
            integration=integration,
            request_id=request_id,
            api_url=api_url,
            batch_size=batch_size,
            status_code=status_code,
            error=error,
        )

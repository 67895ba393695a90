"""Event type enums: the vocabulary of the event bus.

Every domain event must use one of these enums for its event_type field.
The union `EventType` constrains DomainEvent.event_type to known values.

When adding a new event domain:
1. Define its enum here
2. Add it to the EventType union
"""

from enum import Enum


class RequestEventType(str, Enum):
    """Request lifecycle event types broadcast by integrations.

    SENT is published when a batch request is issued ("did send request").
    Each SENT is followed by exactly one SUCCEEDED ("request did succeed")
    or FAILED ("request did fail") carrying the same request_id.
    """

    SENT = "request.sent"
    SUCCEEDED = "request.succeeded"
    FAILED = "request.failed"


# Union of all known event types.
EventType = RequestEventType

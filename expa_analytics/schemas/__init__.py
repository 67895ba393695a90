"""Wire schemas for analytics messages."""

from expa_analytics.schemas.message import (
    AliasMessage,
    BaseMessage,
    BatchPayload,
    GroupMessage,
    IdentifyMessage,
    Message,
    MessageType,
    ScreenMessage,
    TrackMessage,
)

__all__ = [
    "AliasMessage",
    "BaseMessage",
    "BatchPayload",
    "GroupMessage",
    "IdentifyMessage",
    "Message",
    "MessageType",
    "ScreenMessage",
    "TrackMessage",
]

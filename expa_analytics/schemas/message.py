"""Analytics message schemas.

Messages are stamped with the integration's identity when they are
enqueued and serialized with camelCase keys on the wire.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MessageType(str, Enum):
    """Kinds of calls an integration can receive."""

    identify = "identify"
    track = "track"
    screen = "screen"
    group = "group"
    alias = "alias"


class BaseMessage(BaseModel):
    """Fields shared by every message."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    type: MessageType
    message_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: Optional[str] = None
    anonymous_id: Optional[str] = None
    context: Dict[str, Any] = Field(default_factory=dict)
    integrations: Dict[str, bool] = Field(default_factory=dict)

    @property
    def distinct_id(self) -> Optional[str]:
        """Identifier the message is attributed to: user id first, then anonymous id."""
        return self.user_id or self.anonymous_id

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the JSON-ready camelCase dict sent in a batch."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class IdentifyMessage(BaseMessage):
    """Ties the current visitor to a user id and traits."""

    type: Literal[MessageType.identify] = MessageType.identify
    traits: Dict[str, Any] = Field(default_factory=dict)


class TrackMessage(BaseMessage):
    """A single named event."""

    type: Literal[MessageType.track] = MessageType.track
    event: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class ScreenMessage(BaseMessage):
    """A screen view."""

    type: Literal[MessageType.screen] = MessageType.screen
    name: str
    properties: Dict[str, Any] = Field(default_factory=dict)


class GroupMessage(BaseMessage):
    """Associates the user with a group (account, team, ...)."""

    type: Literal[MessageType.group] = MessageType.group
    group_id: str
    traits: Dict[str, Any] = Field(default_factory=dict)


class AliasMessage(BaseMessage):
    """Links a previous identity to the new user id."""

    type: Literal[MessageType.alias] = MessageType.alias
    previous_id: Optional[str] = None


Message = Union[IdentifyMessage, TrackMessage, ScreenMessage, GroupMessage, AliasMessage]


class BatchPayload(BaseModel):
    """Body of a single delivery request. ``batch`` holds already serialized messages."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    batch: List[Dict[str, Any]]
    sent_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the JSON-ready dict posted to the endpoint."""
        return {
            "batch": list(self.batch),
            "sentAt": self.sent_at.isoformat(),
        }

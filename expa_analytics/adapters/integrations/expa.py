"""Expa analytics integration.

Buffers analytics calls in memory and delivers them as one JSON batch
when ``flush`` is called. Every delivery is bracketed by request events
on the event bus: ``request.sent`` first, then exactly one of
``request.succeeded`` / ``request.failed`` with the same request id.
"""

import asyncio
from collections import deque
from typing import Any, Deque, Dict, List, Mapping, Optional
from uuid import uuid4

import httpx
from pydantic_core import PydanticSerializationError

from expa_analytics import __version__
from expa_analytics.adapters.integrations._base import BaseIntegration
from expa_analytics.core.config import Settings
from expa_analytics.core.events.request import RequestLifecycleEvent
from expa_analytics.core.exceptions import RequestDeliveryError
from expa_analytics.core.protocols.event_bus import EventBus
from expa_analytics.schemas.message import (
    AliasMessage,
    BatchPayload,
    GroupMessage,
    IdentifyMessage,
    Message,
    ScreenMessage,
    TrackMessage,
)

_LIBRARY_CONTEXT = {"library": {"name": "expa-analytics", "version": __version__}}


def _new_anonymous_id() -> str:
    return str(uuid4())


class ExpaIntegration(BaseIntegration):
    """Integration that posts buffered messages to the Expa API.

    ``anonymous_id``, ``user_id`` and ``api_url`` are plain mutable
    attributes: whatever was set last is what the next enqueued message
    (or the next flush, for ``api_url``) uses.

    Messages enqueued while a flush is awaiting the network go into the
    next batch. Overlapping flushes are serialized.
    """

    name = "Expa"

    def __init__(
        self,
        settings: Settings,
        event_bus: EventBus,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create the integration.

        Args:
            settings: Application settings (endpoint, timeout, queue bound).
            event_bus: Bus that receives the request lifecycle events.
            client: Optional HTTP client. When omitted the integration
                creates and owns one.
        """
        super().__init__()
        self._event_bus = event_bus
        self._timeout = settings.EXPA_REQUEST_TIMEOUT_SECONDS
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._timeout)
        self._queue: Deque[Dict[str, Any]] = deque(maxlen=settings.EXPA_MAX_QUEUE_SIZE)
        self._flush_lock = asyncio.Lock()

        self.anonymous_id: str = _new_anonymous_id()
        self.user_id: Optional[str] = None
        self.api_url: str = settings.EXPA_API_URL

    @property
    def distinct_id(self) -> str:
        """Identifier events are attributed to: user id if set, else anonymous id."""
        return self.user_id or self.anonymous_id

    @property
    def queue_size(self) -> int:
        """Number of messages waiting for the next flush."""
        return len(self._queue)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def update_settings(self, settings: Mapping[str, Any]) -> None:
        """Apply remote settings. ``apiUrl`` overrides the configured endpoint."""
        super().update_settings(settings)
        api_url = self.settings.get("apiUrl")
        if api_url:
            self.api_url = str(api_url)

    def validate(self) -> bool:
        """Valid when there is an endpoint to deliver to."""
        self.valid = bool(self.api_url)
        return self.valid

    async def aclose(self) -> None:
        """Close the HTTP client if this integration created it."""
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Calls
    # ------------------------------------------------------------------

    def identify(self, user_id: Optional[str], traits: Optional[Dict[str, Any]] = None) -> None:
        """Set the user id (when given) and enqueue an identify message."""
        if user_id:
            self.user_id = user_id
        self._enqueue(IdentifyMessage(traits=traits or {}, **self._identity()))

    def track(self, event: str, properties: Optional[Dict[str, Any]] = None) -> None:
        """Enqueue a track message."""
        self._enqueue(TrackMessage(event=event, properties=properties or {}, **self._identity()))

    def screen(self, name: str, properties: Optional[Dict[str, Any]] = None) -> None:
        """Enqueue a screen message."""
        self._enqueue(ScreenMessage(name=name, properties=properties or {}, **self._identity()))

    def group(self, group_id: str, traits: Optional[Dict[str, Any]] = None) -> None:
        """Enqueue a group message."""
        self._enqueue(GroupMessage(group_id=group_id, traits=traits or {}, **self._identity()))

    def alias(self, new_id: str) -> None:
        """Alias the current distinct id to ``new_id`` and adopt it as the user id."""
        previous_id = self.distinct_id
        self.user_id = new_id
        self._enqueue(AliasMessage(previous_id=previous_id, **self._identity()))

    def reset(self) -> None:
        """Forget the user, start a new anonymous id, and discard pending messages."""
        dropped = len(self._queue)
        self.user_id = None
        self.anonymous_id = _new_anonymous_id()
        self._queue.clear()
        if dropped:
            self.logger.info("Reset discarded %d pending messages", dropped)

    async def flush(self) -> None:
        """Deliver every buffered message now as a single batch.

        Always issues one request, with an empty batch when nothing is
        pending, so ``request.sent`` and its terminal event are published
        on every call. Delivery failures are logged and published as
        ``request.failed``; they are never raised. The batch is not
        re-queued after a failure.
        """
        async with self._flush_lock:
            batch: List[Dict[str, Any]] = list(self._queue)
            self._queue.clear()
            await self._deliver(batch)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _identity(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "anonymous_id": self.anonymous_id,
            "context": dict(_LIBRARY_CONTEXT),
        }

    def _enqueue(self, message: Message) -> None:
        """Serialize ``message`` and buffer it. Unserializable messages are dropped."""
        try:
            wire = message.to_wire()
        except PydanticSerializationError as e:
            self.logger.error(
                "Dropping %s message that cannot be serialized: %s", message.type.value, e
            )
            return
        if len(self._queue) == self._queue.maxlen:
            self.logger.warning(
                "Queue full (%d messages), dropping oldest message", self._queue.maxlen
            )
        self._queue.append(wire)

    async def _deliver(self, batch: List[Dict[str, Any]]) -> None:
        request_id = uuid4()
        api_url = self.api_url
        batch_size = len(batch)
        request_logger = self.logger.with_context(request_id=str(request_id))
        payload = BatchPayload(batch=batch).to_wire()

        await self._event_bus.publish(
            RequestLifecycleEvent.sent(self.name, request_id, api_url, batch_size)
        )

        try:
            status_code = await self._post(api_url, payload)
        except asyncio.CancelledError:
            request_logger.warning("Delivery of %d messages to %s cancelled", batch_size, api_url)
            await self._event_bus.publish(
                RequestLifecycleEvent.failed(
                    self.name, request_id, api_url, batch_size, error="cancelled"
                )
            )
            raise
        except RequestDeliveryError as e:
            request_logger.error(
                "Failed to deliver %d messages to %s: %s", batch_size, api_url, e.cause
            )
            await self._event_bus.publish(
                RequestLifecycleEvent.failed(
                    self.name,
                    request_id,
                    api_url,
                    batch_size,
                    error=str(e.cause),
                    status_code=e.status_code,
                )
            )
            return

        request_logger.info("Delivered %d messages to %s (%d)", batch_size, api_url, status_code)
        await self._event_bus.publish(
            RequestLifecycleEvent.succeeded(
                self.name, request_id, api_url, batch_size, status_code=status_code
            )
        )

    async def _post(self, api_url: str, payload: Dict[str, Any]) -> int:
        """POST the payload and return the status code, or raise RequestDeliveryError."""
        try:
            response = await self._client.post(api_url, json=payload, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise RequestDeliveryError(api_url, e, status_code=e.response.status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RequestDeliveryError(api_url, e) from e
        return response.status_code

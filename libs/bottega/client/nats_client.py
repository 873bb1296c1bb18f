"""WorkshopBusClient — async wrapper around core NATS for workshop messages."""

import logging
from collections.abc import Callable, Coroutine
from typing import Any

import nats
from nats.aio.client import Client as NATSClient
from nats.aio.msg import Msg
from nats.aio.subscription import Subscription
from pydantic import ValidationError

from bottega.models.envelope import Envelope
from bottega.models.topics import to_nats_subject

logger = logging.getLogger(__name__)

EnvelopeHandler = Callable[[Envelope], Coroutine[Any, Any, None]]


class WorkshopBusClient:
    """Async NATS client carrying workshop commands and events.

    Usage:
        client = WorkshopBusClient("nats://localhost:4222")
        await client.connect()
        await client.subscribe(Topics.events("alice"), handler)
        await client.publish(Topics.commands("alice"), envelope)
        await client.close()
    """

    def __init__(self, url: str = "nats://localhost:4222") -> None:
        self._url = url
        self._nc: NATSClient | None = None
        self._subscriptions: list[Subscription] = []

    @property
    def is_connected(self) -> bool:
        return self._nc is not None and self._nc.is_connected

    async def connect(self) -> None:
        """Open the connection to NATS."""
        self._nc = await nats.connect(
            self._url,
            reconnected_cb=self._on_reconnect,
            disconnected_cb=self._on_disconnect,
            error_cb=self._on_error,
            max_reconnect_attempts=10,
            reconnect_time_wait=2,
        )
        logger.info("Connected to NATS at %s", self._url)

    async def publish(self, topic: str, envelope: Envelope) -> None:
        """Publish an envelope to a topic path."""
        if self._nc is None:
            raise RuntimeError("Not connected. Call connect() first.")

        subject = to_nats_subject(topic)
        await self._nc.publish(subject, envelope.model_dump_json(by_alias=True).encode())
        logger.debug("Published %s to %s: %s", envelope.type, subject, envelope.id)

    async def subscribe(self, topic: str, handler: EnvelopeHandler) -> None:
        """Deliver every envelope arriving on `topic` to `handler`.

        Undecodable messages are logged and dropped; handler errors are
        logged so one bad message cannot stop the subscription.
        """
        if self._nc is None:
            raise RuntimeError("Not connected. Call connect() first.")

        subject = to_nats_subject(topic)

        async def _msg_handler(msg: Msg) -> None:
            try:
                envelope = Envelope.model_validate_json(msg.data)
            except ValidationError:
                logger.warning("Dropped malformed message on %s", msg.subject)
                return
            try:
                await handler(envelope)
            except Exception:
                logger.exception("Error handling %s on %s", envelope.type, msg.subject)

        sub = await self._nc.subscribe(subject, cb=_msg_handler)
        self._subscriptions.append(sub)
        logger.info("Subscribed to %s", subject)

    async def flush(self) -> None:
        """Wait until the server has processed everything sent so far."""
        if self._nc is not None:
            await self._nc.flush()

    async def close(self) -> None:
        """Unsubscribe from all topics and disconnect."""
        for sub in self._subscriptions:
            try:
                await sub.unsubscribe()
            except Exception:
                logger.debug("Unsubscribe failed for %s", sub.subject)
        self._subscriptions.clear()

        if self._nc is not None:
            await self._nc.drain()
            self._nc = None
        logger.info("Disconnected from NATS")

    async def _on_reconnect(self, _: Any = None) -> None:
        logger.info("Reconnected to NATS at %s", self._url)

    async def _on_disconnect(self, _: Any = None) -> None:
        logger.warning("Disconnected from NATS")

    async def _on_error(self, e: Exception) -> None:
        logger.error("NATS error: %s", e)

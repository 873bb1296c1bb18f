"""WorkshopService — hosts one player session on the bus and runs its furnace."""

import asyncio
import contextlib
import logging

from pydantic import BaseModel

from bottega import (
    CommandResultEvent,
    CraftedItem,
    Envelope,
    FiringComplete,
    FiringOutcome,
    MessageType,
    Topics,
    WorkshopBusClient,
    WorkshopSession,
    create_message,
)

from services.workshop.rules import building_status, process_command

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.25  # seconds between furnace ticks


class WorkshopService:
    """Authority over one player's workshop.

    Subscribes to the session's command topic, applies each command through
    the rules module, and answers on the events topic. A background task
    ticks the furnace so firings finish whether or not any UI is attached.
    """

    SENDER = "workshop"

    def __init__(
        self,
        session_id: str,
        nats_url: str = "nats://localhost:4222",
        session: WorkshopSession | None = None,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        self._session_id = session_id
        self._bus = WorkshopBusClient(nats_url)
        self._session = session if session is not None else WorkshopSession()
        self._poll_interval = poll_interval
        self._poller: asyncio.Task[None] | None = None

    @property
    def session(self) -> WorkshopSession:
        """Expose the session for testing."""
        return self._session

    async def start(self) -> None:
        """Connect, subscribe, and start the furnace poller."""
        await self._bus.connect()
        await self._bus.subscribe(Topics.commands(self._session_id), self._on_command)
        self._poller = asyncio.create_task(self._poll_furnace())
        logger.info("Workshop service running for session '%s'", self._session_id)

    async def stop(self) -> None:
        """Clean shutdown."""
        if self._poller is not None:
            self._poller.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._poller
            self._poller = None
        await self._bus.close()
        logger.info("Workshop service stopped")

    async def _on_command(self, envelope: Envelope) -> None:
        """Apply one command and publish its result."""
        if envelope.sender == self.SENDER:
            return

        result = process_command(envelope, self._session)
        if result.ok:
            logger.info("%s from %s applied", envelope.type, envelope.sender)
        else:
            logger.warning(
                "%s from %s rejected: %s (%s)",
                envelope.type,
                envelope.sender,
                result.error,
                result.reason,
            )

        await self._publish(
            MessageType.COMMAND_RESULT,
            CommandResultEvent(
                reference_msg_id=envelope.id,
                ok=result.ok,
                error=result.error,
                reason=result.reason,
            ),
        )

        if result.ok and envelope.type == MessageType.CHECK_BUILDING:
            building_id = envelope.payload["building_id"]
            await self._publish(
                MessageType.BUILDING_STATUS, building_status(building_id, self._session)
            )

    async def _poll_furnace(self) -> None:
        """Tick the furnace until cancelled; publish each finished firing once."""
        while True:
            outcome = self._session.tick()
            if outcome is not None:
                try:
                    await self._publish_firing(outcome)
                except Exception:
                    logger.exception("Failed to publish firing of %s", outcome.recipe.output)
            await asyncio.sleep(self._poll_interval)

    async def _publish_firing(self, outcome: FiringOutcome) -> None:
        await self._publish(
            MessageType.FIRING_COMPLETE,
            FiringComplete(
                recipe=outcome.recipe.output,
                success=outcome.success,
                temperature=outcome.temperature,
                inputs=outcome.inputs,
                reward=outcome.reward,
                assignment_bonus=outcome.assignment_bonus,
                next_assignment=self._next_assignment(),
                error=outcome.error,
                educational_text=outcome.recipe.educational_text if outcome.success else None,
            ),
        )

    def _next_assignment(self) -> CraftedItem | None:
        assignment = self._session.current_assignment
        return assignment.target_item if assignment is not None else None

    async def _publish(self, msg_type: MessageType, payload: BaseModel) -> None:
        topic = Topics.events(self._session_id)
        msg = create_message(
            sender=self.SENDER,
            session_id=self._session_id,
            topic=topic,
            msg_type=msg_type,
            payload=payload,
        )
        await self._bus.publish(topic, msg)

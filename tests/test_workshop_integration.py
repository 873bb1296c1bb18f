"""Integration tests for the Workshop service. Requires NATS running."""

import asyncio
import uuid

import pytest

from bottega import (
    CraftedItem,
    Envelope,
    Material,
    MessageType,
    Topics,
    WorkshopBusClient,
    create_message,
)

from services.workshop.workshop import WorkshopService

pytestmark = pytest.mark.integration


@pytest.fixture
def session_id() -> str:
    return f"it-{uuid.uuid4().hex[:8]}"


@pytest.fixture
async def workshop(nats_url: str, session_id: str, session) -> WorkshopService:
    """Start a Workshop service on the test session, tear it down after the test."""
    service = WorkshopService(session_id, nats_url, session=session, poll_interval=0.05)
    await service.start()
    await service._bus.flush()  # Subscriptions are registered server-side
    yield service  # type: ignore[misc]
    await service.stop()


async def _collect_events(
    client: WorkshopBusClient, session_id: str
) -> tuple[list[Envelope], asyncio.Event]:
    """Subscribe to the session's events topic and collect everything."""
    events: list[Envelope] = []
    arrived = asyncio.Event()

    async def handler(env: Envelope) -> None:
        events.append(env)
        arrived.set()

    await client.subscribe(Topics.events(session_id), handler)
    await client.flush()
    return events, arrived


async def _send(
    client: WorkshopBusClient, session_id: str, msg_type: MessageType, payload: dict | None = None
) -> Envelope:
    topic = Topics.commands(session_id)
    env = create_message(
        sender="ui-01", session_id=session_id, topic=topic, msg_type=msg_type, payload=payload
    )
    await client.publish(topic, env)
    return env


async def _wait_for(events: list[Envelope], predicate, timeout: float = 5.0) -> Envelope:
    async def _poll() -> Envelope:
        while True:
            for env in events:
                if predicate(env):
                    return env
            await asyncio.sleep(0.05)

    return await asyncio.wait_for(_poll(), timeout=timeout)


class TestWorkshopIntegration:
    async def test_command_result_references_command(
        self, workshop: WorkshopService, bus_client: WorkshopBusClient, session_id: str
    ):
        events, _ = await _collect_events(bus_client, session_id)
        cmd = await _send(
            bus_client, session_id, MessageType.COLLECT_MATERIALS, {"materials": {"sand": 2}}
        )

        result = await _wait_for(
            events, lambda e: e.payload.get("reference_msg_id") == cmd.id
        )
        assert result.type == MessageType.COMMAND_RESULT
        assert result.payload["ok"] is True
        assert workshop.session.ledger.raw_count(Material.SAND) == 2

    async def test_rejected_command(
        self, workshop: WorkshopService, bus_client: WorkshopBusClient, session_id: str
    ):
        events, _ = await _collect_events(bus_client, session_id)
        cmd = await _send(bus_client, session_id, MessageType.MIX)

        result = await _wait_for(
            events, lambda e: e.payload.get("reference_msg_id") == cmd.id
        )
        assert result.payload["ok"] is False
        assert result.payload["error"] == "no_recipe_match"

    async def test_full_firing_cycle(
        self,
        workshop: WorkshopService,
        bus_client: WorkshopBusClient,
        session_id: str,
        clock,
    ):
        """collect → place ×3 → mix → start → firing_complete."""
        events, _ = await _collect_events(bus_client, session_id)

        await _send(
            bus_client,
            session_id,
            MessageType.COLLECT_MATERIALS,
            {"materials": {"limestone": 2, "water": 1}},
        )
        for material in ("limestone", "limestone", "water"):
            await _send(bus_client, session_id, MessageType.PLACE_MATERIAL, {"material": material})
        await _send(bus_client, session_id, MessageType.MIX)
        start = await _send(bus_client, session_id, MessageType.START_FIRING)
        await _wait_for(events, lambda e: e.payload.get("reference_msg_id") == start.id)

        clock.advance(3.0)
        fired = await _wait_for(events, lambda e: e.type == MessageType.FIRING_COMPLETE)

        assert fired.payload["success"] is True
        assert fired.payload["recipe"] == "lime_mortar"
        assert "assignment_bonus" in fired.payload
        assert workshop.session.ledger.crafted_count(CraftedItem.LIME_MORTAR) == 1
        # Completion is published once.
        await asyncio.sleep(0.3)
        assert sum(1 for e in events if e.type == MessageType.FIRING_COMPLETE) == 1

    async def test_check_building_publishes_status(
        self, workshop: WorkshopService, bus_client: WorkshopBusClient, session_id: str
    ):
        events, _ = await _collect_events(bus_client, session_id)
        await _send(bus_client, session_id, MessageType.CHECK_BUILDING, {"building_id": 100})

        status = await _wait_for(events, lambda e: e.type == MessageType.BUILDING_STATUS)
        assert status.payload["building_id"] == 100
        assert status.payload["can_start"] is False
        assert status.payload["missing_materials"] == {"lime_mortar": 2}

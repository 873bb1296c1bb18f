"""Integration tests for WorkshopBusClient. Requires NATS running."""

import asyncio

import pytest

from bottega import (
    Envelope,
    Material,
    MessageType,
    PlaceMaterial,
    Topics,
    WorkshopBusClient,
    create_message,
)

pytestmark = pytest.mark.integration


class TestWorkshopBusClient:
    async def test_connect_and_disconnect(self, bus_client: WorkshopBusClient):
        assert bus_client.is_connected
        await bus_client.close()
        assert not bus_client.is_connected

    async def test_publish_and_subscribe(self, bus_client: WorkshopBusClient):
        received: list[Envelope] = []
        event = asyncio.Event()

        async def handler(env: Envelope) -> None:
            received.append(env)
            event.set()

        topic = Topics.commands("client-test")
        await bus_client.subscribe(topic, handler)
        await bus_client.flush()  # Subscription is registered server-side

        env = create_message(
            sender="ui-01",
            session_id="client-test",
            topic=topic,
            msg_type=MessageType.PLACE_MATERIAL,
            payload=PlaceMaterial(material=Material.CLAY),
        )
        await bus_client.publish(topic, env)

        await asyncio.wait_for(event.wait(), timeout=5.0)
        assert received[0].sender == "ui-01"
        assert received[0].payload["material"] == "clay"

    async def test_malformed_message_is_dropped(self, bus_client: WorkshopBusClient):
        received: list[Envelope] = []
        done = asyncio.Event()

        async def handler(env: Envelope) -> None:
            received.append(env)
            done.set()

        topic = Topics.events("client-test")
        await bus_client.subscribe(topic, handler)
        await bus_client.flush()

        # Raw garbage straight onto the subject, then one valid envelope.
        await bus_client._nc.publish("workshop.client-test.events", b"not json")
        env = create_message(
            sender="workshop",
            session_id="client-test",
            topic=topic,
            msg_type=MessageType.COMMAND_RESULT,
            payload={"reference_msg_id": "abc", "ok": True},
        )
        await bus_client.publish(topic, env)

        await asyncio.wait_for(done.wait(), timeout=5.0)
        assert len(received) == 1
        assert received[0].id == env.id

    async def test_publish_without_connect_raises(self):
        client = WorkshopBusClient()
        env = create_message(
            sender="ui-01", session_id="x", topic="/workshop/x/commands", msg_type=MessageType.MIX
        )
        with pytest.raises(RuntimeError):
            await client.publish("/workshop/x/commands", env)

    async def test_flush_without_connect_is_a_noop(self):
        await WorkshopBusClient().flush()

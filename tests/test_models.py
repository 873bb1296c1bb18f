"""Tests for protocol models: topics, payloads, envelope."""

import json

import pytest
from pydantic import ValidationError

from bottega import (
    COMMAND_TYPES,
    PAYLOAD_REGISTRY,
    AddCurrency,
    BuildingStatus,
    CollectMaterials,
    CraftedItem,
    Envelope,
    FiringComplete,
    Material,
    MessageType,
    PlaceMaterial,
    RemoveMaterial,
    Science,
    Temperature,
    Topics,
    UpdateProgress,
    from_nats_subject,
    to_nats_subject,
)


class TestTopics:
    def test_commands_topic(self):
        assert Topics.commands("alice") == "/workshop/alice/commands"

    def test_events_topic(self):
        assert Topics.events("alice") == "/workshop/alice/events"

    def test_to_nats_subject(self):
        assert to_nats_subject("/workshop/alice/commands") == "workshop.alice.commands"

    def test_from_nats_subject(self):
        assert from_nats_subject("workshop.alice.events") == "/workshop/alice/events"

    def test_roundtrip(self):
        topic = Topics.commands("bob")
        assert from_nats_subject(to_nats_subject(topic)) == topic

    def test_all_sessions_wildcard(self):
        assert to_nats_subject(Topics.all_sessions()) == "workshop.>"


class TestRegistry:
    def test_every_type_has_a_payload(self):
        assert set(PAYLOAD_REGISTRY) == set(MessageType)

    def test_events_are_not_commands(self):
        assert MessageType.COMMAND_RESULT not in COMMAND_TYPES
        assert MessageType.FIRING_COMPLETE not in COMMAND_TYPES
        assert MessageType.BUILDING_STATUS not in COMMAND_TYPES
        assert MessageType.MIX in COMMAND_TYPES


class TestPlaceMaterial:
    def test_valid(self):
        assert PlaceMaterial(material="clay").material == Material.CLAY

    def test_unknown_material_rejected(self):
        with pytest.raises(ValidationError):
            PlaceMaterial(material="gold")


class TestRemoveMaterial:
    def test_negative_slot_rejected(self):
        with pytest.raises(ValidationError):
            RemoveMaterial(slot_index=-1)


class TestCollectMaterials:
    def test_valid(self):
        msg = CollectMaterials(materials={"sand": 2, "water": 1})
        assert msg.materials == {Material.SAND: 2, Material.WATER: 1}


class TestAddCurrency:
    def test_valid(self):
        msg = AddCurrency(amount=10, reason="quiz")
        assert msg.amount == 10

    def test_zero_rejected(self):
        with pytest.raises(ValidationError):
            AddCurrency(amount=0)


class TestUpdateProgress:
    def test_defaults(self):
        msg = UpdateProgress(building_id=1)
        assert msg.badge is None
        assert not msg.sketch_completed
        assert msg.bookmark_index is None

    def test_badge(self):
        assert UpdateProgress(building_id=1, badge="optics").badge == Science.OPTICS

    def test_negative_bookmark_rejected(self):
        with pytest.raises(ValidationError):
            UpdateProgress(building_id=1, bookmark_index=-1)


class TestEvents:
    def test_firing_complete(self):
        msg = FiringComplete(
            recipe=CraftedItem.LIME_MORTAR,
            success=True,
            temperature=Temperature.HIGH,
            inputs={Material.LIMESTONE: 2},
            reward=5,
        )
        dumped = msg.model_dump(mode="json")
        assert dumped["recipe"] == "lime_mortar"
        assert dumped["inputs"] == {"limestone": 2}

    def test_building_status_defaults(self):
        msg = BuildingStatus(
            building_id=1, can_start=False, requirements_met=2, total_requirements=4
        )
        assert msg.missing_sciences == []
        assert msg.cost_to_buy == 0


class TestEnvelope:
    def test_create_with_alias(self):
        env = Envelope(
            **{"from": "ui-01"},
            session_id="alice",
            topic="/workshop/alice/commands",
            type=MessageType.MIX,
        )
        assert env.sender == "ui-01"
        assert env.payload == {}

    def test_create_with_field_name(self):
        env = Envelope(
            sender="ui-01",
            session_id="alice",
            topic="/workshop/alice/commands",
            type=MessageType.MIX,
        )
        assert env.sender == "ui-01"

    def test_json_uses_from_alias(self):
        env = Envelope(
            sender="ui-01",
            session_id="alice",
            topic="/workshop/alice/commands",
            type=MessageType.MIX,
        )
        data = json.loads(env.model_dump_json(by_alias=True))
        assert data["from"] == "ui-01"
        assert "sender" not in data

    def test_json_roundtrip(self):
        env = Envelope(
            sender="ui-01",
            session_id="alice",
            topic="/workshop/alice/commands",
            type=MessageType.PLACE_MATERIAL,
            payload={"material": "clay"},
        )
        restored = Envelope.model_validate_json(env.model_dump_json(by_alias=True))
        assert restored == env

    def test_auto_id_and_timestamp(self):
        a = Envelope(sender="x", session_id="s", topic="/t", type=MessageType.MIX)
        b = Envelope(sender="x", session_id="s", topic="/t", type=MessageType.MIX)
        assert a.id != b.id
        assert a.timestamp > 0

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Envelope(sender="x", session_id="s", topic="/t", type="smelt")

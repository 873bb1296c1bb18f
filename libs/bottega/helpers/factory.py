"""Factory functions for creating and parsing messages."""

import json
from typing import Any

from pydantic import BaseModel

from bottega.models.envelope import Envelope
from bottega.models.messages import PAYLOAD_REGISTRY, MessageType


def create_message(
    *,
    sender: str,
    session_id: str,
    topic: str,
    msg_type: MessageType,
    payload: BaseModel | dict[str, Any] | None = None,
) -> Envelope:
    """Create an Envelope with a typed or dict payload.

    Args:
        sender: Who is sending (a UI client id or the service).
        session_id: The player session the message belongs to.
        topic: The topic path (e.g., `/workshop/alice/commands`).
        msg_type: The message type.
        payload: A Pydantic model instance, a plain dict, or None for empty.

    Returns:
        A fully constructed Envelope.
    """
    if isinstance(payload, BaseModel):
        payload_dict = payload.model_dump(mode="json")
    else:
        payload_dict = payload or {}

    return Envelope(
        **{"from": sender},
        session_id=session_id,
        topic=topic,
        type=msg_type,
        payload=payload_dict,
    )


def parse_message(data: str | bytes | dict[str, Any]) -> Envelope:
    """Parse raw data into an Envelope.

    Raises:
        ValueError: If the data is not valid JSON.
        ValidationError: If the data doesn't match the Envelope schema.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    if isinstance(data, str):
        data = json.loads(data)
    return Envelope.model_validate(data)


def parse_payload(envelope: Envelope) -> BaseModel:
    """Parse an envelope's payload dict into its typed Pydantic model.

    Raises:
        ValueError: If the message type has no registered payload.
        ValidationError: If the payload doesn't match its schema.
    """
    msg_type = MessageType(envelope.type)
    model_class = PAYLOAD_REGISTRY.get(msg_type)
    if model_class is None:
        raise ValueError(f"Unknown message type: {msg_type}")
    return model_class.model_validate(envelope.payload)

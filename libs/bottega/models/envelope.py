"""Envelope model — the wire format for all workshop messages on the bus."""

import time
import uuid
from typing import Any

from pydantic import BaseModel, Field

from bottega.models.messages import MessageType


class Envelope(BaseModel):
    """Standard envelope wrapping every command and event.

    `sender` maps to `"from"` in JSON; serialize with
    `model_dump(by_alias=True)` for the wire.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    sender: str = Field(alias="from")
    session_id: str
    topic: str
    timestamp: float = Field(default_factory=time.time)
    type: MessageType
    payload: dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

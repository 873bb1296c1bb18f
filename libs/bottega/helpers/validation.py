"""Message validation utilities."""

from pydantic import ValidationError

from bottega.models.envelope import Envelope
from bottega.models.messages import PAYLOAD_REGISTRY, MessageType


def validate_message(envelope: Envelope) -> list[str]:
    """Validate an envelope for correctness.

    Returns a list of error strings. Empty list means valid.
    """
    errors: list[str] = []

    if not envelope.sender or not envelope.sender.strip():
        errors.append("'from' field must not be empty")

    if not envelope.session_id or not envelope.session_id.strip():
        errors.append("'session_id' field must not be empty")
    elif "." in envelope.session_id or "/" in envelope.session_id:
        errors.append("'session_id' must not contain '.' or '/'")

    if not envelope.topic or not envelope.topic.strip():
        errors.append("'topic' field must not be empty")

    try:
        msg_type = MessageType(envelope.type)
    except ValueError:
        errors.append(f"Unknown message type: {envelope.type}")
        return errors

    model_class = PAYLOAD_REGISTRY.get(msg_type)
    if model_class is None:
        errors.append(f"No payload schema registered for type: {msg_type}")
        return errors

    try:
        model_class.model_validate(envelope.payload)
    except ValidationError as e:
        for err in e.errors():
            loc = ".".join(str(x) for x in err["loc"])
            errors.append(f"payload.{loc}: {err['msg']}")

    return errors

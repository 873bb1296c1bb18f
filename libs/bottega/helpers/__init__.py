from bottega.helpers.factory import create_message, parse_message, parse_payload
from bottega.helpers.validation import validate_message

__all__ = [
    "create_message",
    "parse_message",
    "parse_payload",
    "validate_message",
]

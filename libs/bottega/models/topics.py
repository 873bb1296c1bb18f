"""Topic paths and NATS subject conversion.

Topics use `/` separators (`/workshop/alice/commands`), NATS subjects use
`.` (`workshop.alice.commands`).
"""


class Topics:
    """Per-session topic paths."""

    ROOT = "/workshop"

    @classmethod
    def commands(cls, session_id: str) -> str:
        """Where UIs send commands for a session."""
        return f"{cls.ROOT}/{session_id}/commands"

    @classmethod
    def events(cls, session_id: str) -> str:
        """Where the service publishes results and firing notices."""
        return f"{cls.ROOT}/{session_id}/events"

    @classmethod
    def all_sessions(cls) -> str:
        return f"{cls.ROOT}/>"


def to_nats_subject(topic: str) -> str:
    """`/workshop/alice/commands` → `workshop.alice.commands`"""
    return topic.lstrip("/").replace("/", ".")


def from_nats_subject(subject: str) -> str:
    """`workshop.alice.commands` → `/workshop/alice/commands`"""
    return "/" + subject.replace(".", "/")

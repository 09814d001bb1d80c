"""Event bus for chat events."""

from chattext.core.bus import (
    ActionBarReceived,
    ChatReceived,
    Event,
    EventBus,
    EventType,
    MessageDeleted,
    MessageEdited,
    MessageSent,
)

__all__ = [
    "ActionBarReceived",
    "ChatReceived",
    "Event",
    "EventBus",
    "EventType",
    "MessageDeleted",
    "MessageEdited",
    "MessageSent",
]

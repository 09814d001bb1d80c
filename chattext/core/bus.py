"""Async pub/sub event bus for chat events."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Coroutine
from uuid import uuid4

from chattext.text.component import TextComponent
from chattext.utils.logging import get_logger

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Event types
# ---------------------------------------------------------------------------

class EventType(str, Enum):
    CHAT_RECEIVED = "chat.received"
    ACTION_BAR_RECEIVED = "action_bar.received"
    MESSAGE_SENT = "message.sent"
    MESSAGE_EDITED = "message.edited"
    MESSAGE_DELETED = "message.deleted"


@dataclass
class Event:
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ChatReceived(Event):
    type: EventType = field(default=EventType.CHAT_RECEIVED, init=False)
    component: TextComponent | None = field(default=None)


@dataclass
class ActionBarReceived(Event):
    type: EventType = field(default=EventType.ACTION_BAR_RECEIVED, init=False)
    component: TextComponent | None = field(default=None)


@dataclass
class MessageSent(Event):
    type: EventType = field(default=EventType.MESSAGE_SENT, init=False)
    component: TextComponent | None = field(default=None)
    # data keys: channel ("chat" or "action_bar")


@dataclass
class MessageEdited(Event):
    type: EventType = field(default=EventType.MESSAGE_EDITED, init=False)
    component: TextComponent | None = field(default=None)
    # data keys: target (dispatch id or formatted text), count


@dataclass
class MessageDeleted(Event):
    type: EventType = field(default=EventType.MESSAGE_DELETED, init=False)
    # data keys: target (dispatch id or formatted text), count


# ---------------------------------------------------------------------------
# Bus
# ---------------------------------------------------------------------------

Handler = Callable[[Event], Coroutine[Any, Any, None]]


class EventBus:
    def __init__(self, max_queue_size: int = 256) -> None:
        self._subscribers: dict[EventType, list[tuple[Handler, asyncio.Queue[Event]]]] = {}
        self._max_queue_size = max_queue_size
        self._running = False
        self._tasks: list[asyncio.Task[None]] = []

    @property
    def running(self) -> bool:
        return self._running

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        queue: asyncio.Queue[Event] = asyncio.Queue(maxsize=self._max_queue_size)
        self._subscribers.setdefault(event_type, []).append((handler, queue))
        if self._running:
            self._start_consumer(event_type, handler, queue)

    async def publish(self, event: Event) -> int:
        """Queue ``event`` for every subscriber of its type; returns how many accepted it."""
        delivered = 0
        for handler, queue in self._subscribers.get(event.type, []):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                log.warning(
                    "event_queue_full",
                    event_type=event.type.value,
                    handler=handler.__qualname__,
                )
        return delivered

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        for handler_list in self._subscribers.values():
            for _, queue in handler_list:
                await queue.join()

    async def start(self) -> None:
        self._running = True
        for event_type, handler_list in self._subscribers.items():
            for handler, queue in handler_list:
                self._start_consumer(event_type, handler, queue)

    def _start_consumer(
        self, event_type: EventType, handler: Handler, queue: asyncio.Queue[Event]
    ) -> None:
        task = asyncio.create_task(
            self._consumer(handler, queue, event_type.value),
            name=f"bus-{event_type.value}-{handler.__qualname__}",
        )
        self._tasks.append(task)

    async def _consumer(
        self, handler: Handler, queue: asyncio.Queue[Event], event_type: str
    ) -> None:
        while self._running:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=1.0)
            except asyncio.TimeoutError:
                continue
            try:
                await handler(event)
            except Exception:
                log.exception("handler_error", event_type=event_type, handler=handler.__qualname__)
            finally:
                queue.task_done()

    async def stop(self) -> None:
        self._running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

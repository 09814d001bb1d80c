"""Sends components to chat and the action bar, and tracks received messages."""

from __future__ import annotations

from collections import deque
from typing import Any

from chattext.chat.archive import MessageArchive
from chattext.chat.log import ChatLine, ChatLog, Target, describe_target
from chattext.core.bus import (
    ActionBarReceived,
    ChatReceived,
    EventBus,
    MessageDeleted,
    MessageEdited,
    MessageSent,
)
from chattext.text.component import NO_DISPATCH_ID, TextComponent
from chattext.utils.logging import get_logger

log = get_logger(__name__)


class ChatDispatcher:
    """Delivers components to the chat log and fires chat events.

    A component with a dispatch id replaces earlier lines with the same id. A
    recursive component is treated as if it had been received, so received
    handlers on the bus fire for it.
    """

    def __init__(
        self,
        bus: EventBus,
        chat_log: ChatLog | None = None,
        history_limit: int = 1000,
        archive: MessageArchive | None = None,
    ) -> None:
        self.bus = bus
        self.chat_log = chat_log if chat_log is not None else ChatLog()
        self._archive = archive
        self._chat_history: deque[TextComponent] = deque(maxlen=history_limit)
        self._action_bar_history: deque[TextComponent] = deque(maxlen=history_limit)
        self._action_bar: TextComponent | None = None

    @property
    def chat_history(self) -> list[TextComponent]:
        return list(self._chat_history)

    @property
    def action_bar_history(self) -> list[TextComponent]:
        return list(self._action_bar_history)

    @property
    def current_action_bar(self) -> TextComponent | None:
        return self._action_bar

    async def chat(self, message: Any) -> ChatLine:
        component = _as_component(message)

        if component.dispatch_id != NO_DISPATCH_ID:
            line = self.chat_log.send_with_id(component)
        elif component.recursive:
            line = await self._receive_chat(component)
        else:
            line = self.chat_log.add(component)

        log.debug("chat_sent", text=component.unformatted_text, dispatch_id=component.dispatch_id)
        if self._archive is not None:
            await self._archive.save(component, "chat")
        await self.bus.publish(MessageSent(component=component, data={"channel": "chat"}))
        return line

    async def action_bar(self, message: Any) -> None:
        component = _as_component(message)

        if component.recursive:
            await self._receive_action_bar(component)
        else:
            self._action_bar = component

        log.debug("action_bar_sent", text=component.unformatted_text)
        if self._archive is not None:
            await self._archive.save(component, "action_bar")
        await self.bus.publish(MessageSent(component=component, data={"channel": "action_bar"}))

    async def receive(self, message: Any, *, action_bar: bool = False) -> ChatLine | None:
        """Record an inbound message and fire its received event."""
        component = _as_component(message)
        if action_bar:
            await self._receive_action_bar(component)
            return None
        return await self._receive_chat(component)

    async def edit(self, target: Target, replacement: Any) -> int:
        """Replace lines matching ``target``; match by content unless given an id."""
        component = _as_component(replacement)
        count = self.chat_log.edit(target, component)
        if count and isinstance(target, int) and self._archive is not None:
            # Same id the log kept: the replacement's own, else the target's
            stored = component
            if stored.dispatch_id == NO_DISPATCH_ID:
                stored = stored.with_dispatch_id(target)
            elif stored.dispatch_id != target:
                await self._archive.delete(target)
            await self._archive.save(stored, "chat")
        await self.bus.publish(
            MessageEdited(component=component, data={"target": describe_target(target), "count": count})
        )
        return count

    async def delete(self, target: Target) -> int:
        count = self.chat_log.delete(target)
        if count and isinstance(target, int) and self._archive is not None:
            await self._archive.delete(target)
        await self.bus.publish(
            MessageDeleted(data={"target": describe_target(target), "count": count})
        )
        return count

    async def _receive_chat(self, component: TextComponent) -> ChatLine:
        self._chat_history.append(component)
        line = self.chat_log.add(component)
        await self.bus.publish(ChatReceived(component=component))
        return line

    async def _receive_action_bar(self, component: TextComponent) -> None:
        self._action_bar_history.append(component)
        self._action_bar = component
        await self.bus.publish(ActionBarReceived(component=component))


def _as_component(message: Any) -> TextComponent:
    if isinstance(message, TextComponent):
        return message
    return TextComponent(message)

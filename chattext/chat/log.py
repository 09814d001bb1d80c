"""Visible chat lines and the dispatch-id correlation table."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from chattext.text.component import NO_DISPATCH_ID, TextComponent
from chattext.text.errors import InvalidInputError
from chattext.utils.logging import get_logger

log = get_logger(__name__)

# An int matches by dispatch id, a component by its formatted text
Target = int | TextComponent


@dataclass
class ChatLine:
    component: TextComponent
    added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def dispatch_id(self) -> int:
        return self.component.dispatch_id


class ChatLog:
    """Bounded list of displayed messages, oldest first.

    Lines can be found again either by dispatch id or by content. All access
    goes through one lock so that sends from several producers cannot race a
    later edit or delete.
    """

    def __init__(self, max_lines: int = 100) -> None:
        if max_lines < 1:
            raise ValueError("max_lines must be at least 1")
        self._max_lines = max_lines
        self._lines: list[ChatLine] = []
        self._lock = threading.Lock()

    @property
    def lines(self) -> list[ChatLine]:
        with self._lock:
            return list(self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def add(self, component: TextComponent) -> ChatLine:
        line = ChatLine(component)
        with self._lock:
            self._append(line)
        return line

    def send_with_id(self, component: TextComponent) -> ChatLine:
        """Add ``component``, replacing any lines already holding its dispatch id."""
        if component.dispatch_id == NO_DISPATCH_ID:
            raise InvalidInputError("Cannot send a message by id without a dispatch id")
        line = ChatLine(component)
        with self._lock:
            removed = self._remove_matching(component.dispatch_id)
            self._append(line)
        if removed:
            log.debug("chat_line_replaced", dispatch_id=component.dispatch_id, count=removed)
        return line

    def find(self, target: Target) -> list[ChatLine]:
        with self._lock:
            return [line for line in self._lines if _matches(line, target)]

    def edit(self, target: Target, replacement: TextComponent) -> int:
        """Replace every matching line in place; returns how many were replaced.

        A replacement without a dispatch id takes over the id of the line it
        replaces.
        """
        _check_target(target)
        count = 0
        with self._lock:
            for index, line in enumerate(self._lines):
                if not _matches(line, target):
                    continue
                component = replacement
                if component.dispatch_id == NO_DISPATCH_ID and line.dispatch_id != NO_DISPATCH_ID:
                    component = component.with_dispatch_id(line.dispatch_id)
                self._lines[index] = ChatLine(component, added_at=line.added_at)
                count += 1
        log.debug("chat_lines_edited", target=describe_target(target), count=count)
        return count

    def delete(self, target: Target) -> int:
        _check_target(target)
        with self._lock:
            count = self._remove_matching(target)
        log.debug("chat_lines_deleted", target=describe_target(target), count=count)
        return count

    def clear(self) -> None:
        with self._lock:
            self._lines.clear()

    def _append(self, line: ChatLine) -> None:
        self._lines.append(line)
        overflow = len(self._lines) - self._max_lines
        if overflow > 0:
            del self._lines[:overflow]

    def _remove_matching(self, target: Target) -> int:
        kept = [line for line in self._lines if not _matches(line, target)]
        removed = len(self._lines) - len(kept)
        self._lines[:] = kept
        return removed


def _check_target(target: object) -> None:
    if isinstance(target, bool) or not isinstance(target, (int, TextComponent)):
        raise InvalidInputError(
            f"Expected a dispatch id or TextComponent, got {type(target).__name__}"
        )


def _matches(line: ChatLine, target: Target) -> bool:
    if isinstance(target, TextComponent):
        return line.component == target
    return target != NO_DISPATCH_ID and line.dispatch_id == target


def describe_target(target: Target) -> int | str:
    return target.formatted_text if isinstance(target, TextComponent) else target

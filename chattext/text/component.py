"""Immutable container of styled runs.

A :class:`TextComponent` is a flat list of :class:`~chattext.text.run.Run`
objects rather than a tree, which keeps appending, inserting and removing
simple. Instances never change: every "mutation" returns a new component that
owns a new run tuple. Run 0 plays the role of "self" for callers that expect a
tree-shaped message (see :attr:`string`, :attr:`style`, :attr:`siblings`).
"""

from __future__ import annotations

import random
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from chattext.text.errors import InvalidInputError, OutOfRangeError
from chattext.text.run import Run
from chattext.text.style import Style

# Dispatch id of a component that has not been tied to a delivered message
NO_DISPATCH_ID = -1

IdSource = Callable[[], int]

_random = random.SystemRandom()

_PLACEHOLDER = Run("", Style.EMPTY)


def random_dispatch_id() -> int:
    """Draw a fresh dispatch id from the process-wide random source."""
    return _random.randrange(0, 2**31)


@dataclass(frozen=True)
class StyledChar:
    index: int
    codepoint: int
    style: Style

    @property
    def char(self) -> str:
        return chr(self.codepoint)


class StyledCharSequence:
    """Per-codepoint view of a component, in order. Can be iterated repeatedly."""

    __slots__ = ("_parts", "_length")

    def __init__(self, parts: tuple[Run, ...]) -> None:
        self._parts = parts
        self._length = sum(len(run.text) for run in parts)

    def __iter__(self) -> Iterator[StyledChar]:
        index = 0
        for run in self._parts:
            for ch in run.text:
                yield StyledChar(index, ord(ch), run.style)
                index += 1

    def __len__(self) -> int:
        return self._length


class TextComponent:
    """A styled message made of one or more runs.

    Accepts any number of rich-text inputs: plain strings (split on their
    formatting codes), descriptor mappings with a ``text`` key, other
    components, runs, tree nodes, and lists of those.
    """

    __slots__ = ("_parts", "_dispatch_id", "_recursive", "_unformatted_text", "_formatted_text")

    def __init__(
        self,
        *parts: Any,
        dispatch_id: int = NO_DISPATCH_ID,
        recursive: bool = False,
    ) -> None:
        self._init(flatten(list(parts)), dispatch_id, recursive)

    @classmethod
    def from_runs(
        cls,
        runs: Iterable[Run],
        dispatch_id: int = NO_DISPATCH_ID,
        recursive: bool = False,
    ) -> TextComponent:
        """Build a component from already-built runs, keeping their text verbatim."""
        runs = list(runs)
        for run in runs:
            if not isinstance(run, Run):
                raise InvalidInputError(f"Expected a Run, got {type(run).__name__}")
        component = cls.__new__(cls)
        component._init(runs, dispatch_id, recursive)
        return component

    def _init(self, runs: list[Run], dispatch_id: int, recursive: bool) -> None:
        if not runs:
            runs = [_PLACEHOLDER]
        if isinstance(dispatch_id, bool) or not isinstance(dispatch_id, int):
            raise TypeError(f"dispatch_id must be an int, got {type(dispatch_id).__name__}")
        self._parts = tuple(runs)
        self._dispatch_id = dispatch_id
        self._recursive = bool(recursive)
        # Computed once here so instances can be shared across threads
        self._unformatted_text = "".join(run.text for run in self._parts)
        self._formatted_text = "".join(run.formatted_text for run in self._parts)

    def _copy(
        self,
        parts: tuple[Run, ...] | list[Run] | None = None,
        dispatch_id: int | None = None,
        recursive: bool | None = None,
    ) -> TextComponent:
        return TextComponent.from_runs(
            list(self._parts if parts is None else parts),
            self._dispatch_id if dispatch_id is None else dispatch_id,
            self._recursive if recursive is None else recursive,
        )

    # -- derived text ------------------------------------------------------

    @property
    def parts(self) -> tuple[Run, ...]:
        return self._parts

    @property
    def unformatted_text(self) -> str:
        """Text of all runs concatenated without formatting codes."""
        return self._unformatted_text

    @property
    def formatted_text(self) -> str:
        """Text of all runs concatenated, each preceded by its legacy marker prefix."""
        return self._formatted_text

    def styled_chars(self) -> StyledCharSequence:
        return StyledCharSequence(self._parts)

    def style_at(self, index: int) -> Style:
        """Style of the codepoint at ``index`` of :attr:`unformatted_text`."""
        if not 0 <= index < len(self._unformatted_text):
            raise OutOfRangeError(
                f"Character index {index} out of range for length {len(self._unformatted_text)}"
            )
        for run in self._parts:
            if index < len(run.text):
                return run.style
            index -= len(run.text)
        raise OutOfRangeError(f"Character index {index} out of range")

    def to_descriptors(self) -> list[dict[str, Any]]:
        return [run.to_descriptor() for run in self._parts]

    # -- identity ----------------------------------------------------------

    @property
    def dispatch_id(self) -> int:
        """Id used to find this message again after it was sent, or -1."""
        return self._dispatch_id

    def with_dispatch_id(
        self,
        dispatch_id: int | None = None,
        *,
        id_source: IdSource | None = None,
    ) -> TextComponent:
        """Return a copy carrying ``dispatch_id``, or a freshly drawn one."""
        if dispatch_id is None:
            dispatch_id = (id_source or random_dispatch_id)()
        return self._copy(dispatch_id=dispatch_id)

    @property
    def recursive(self) -> bool:
        """Whether sending this message fires received-message handlers."""
        return self._recursive

    def with_recursive(self, recursive: bool = True) -> TextComponent:
        return self._copy(recursive=recursive)

    # -- copy-on-write edits ------------------------------------------------

    def _content_parts(self) -> tuple[Run, ...]:
        # A lone empty placeholder is replaced by whatever gets added
        if self._parts == (_PLACEHOLDER,):
            return ()
        return self._parts

    def append(self, value: Any) -> TextComponent:
        """Return a copy with ``value`` appended. Accepts any constructor input."""
        return self._copy(parts=self._content_parts() + tuple(flatten(value)))

    def insert_at(self, index: int, value: Any) -> TextComponent:
        """Return a copy with ``value`` inserted before part ``index``."""
        if not 0 <= index <= len(self._parts):
            raise OutOfRangeError(
                f"Insert index {index} out of range for {len(self._parts)} parts"
            )
        content = self._content_parts()
        return self._copy(
            parts=content[:index] + tuple(flatten(value)) + content[index:]
        )

    def remove_at(self, index: int) -> TextComponent:
        """Return a copy without part ``index``.

        Removing the only part leaves a single empty part behind.
        """
        if not 0 <= index < len(self._parts):
            raise OutOfRangeError(
                f"Remove index {index} out of range for {len(self._parts)} parts"
            )
        return self._copy(parts=self._parts[:index] + self._parts[index + 1:])

    def __add__(self, other: Any) -> TextComponent:
        return self.append(other)

    def __radd__(self, other: Any) -> TextComponent:
        return TextComponent(other, dispatch_id=self._dispatch_id, recursive=self._recursive).append(self)

    # -- tree view: part 0 is "self", the rest are siblings -----------------

    @property
    def string(self) -> str:
        return self._parts[0].text

    @property
    def style(self) -> Style:
        return self._parts[0].style

    @property
    def siblings(self) -> list[Run]:
        return list(self._parts[1:])

    # -- sequence of part descriptors ---------------------------------------

    def __len__(self) -> int:
        return len(self._parts)

    def __getitem__(self, index: int) -> dict[str, Any]:
        try:
            return self._parts[index].to_descriptor()
        except IndexError:
            raise OutOfRangeError(
                f"Part index {index} out of range for {len(self._parts)} parts"
            ) from None

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return (run.to_descriptor() for run in self._parts)

    def __contains__(self, descriptor: object) -> bool:
        return any(descriptor == run.to_descriptor() for run in self._parts)

    def index_of(self, descriptor: dict[str, Any]) -> int:
        for index, run in enumerate(self._parts):
            if run.to_descriptor() == descriptor:
                return index
        return -1

    # -- content equality ---------------------------------------------------

    def __eq__(self, other: object) -> bool:
        # Messages match by their formatted text; use dispatch ids for exact identity
        if not isinstance(other, TextComponent):
            return NotImplemented
        return self._formatted_text == other._formatted_text

    def __hash__(self) -> int:
        return hash(self._formatted_text)

    def __str__(self) -> str:
        return self._formatted_text

    def __repr__(self) -> str:
        extras = ""
        if self._dispatch_id != NO_DISPATCH_ID:
            extras += f", dispatch_id={self._dispatch_id}"
        if self._recursive:
            extras += ", recursive=True"
        return f"TextComponent({self._formatted_text!r}{extras})"


# Deferred import to avoid circular dependency at module level
from chattext.text.normalizer import flatten  # noqa: E402

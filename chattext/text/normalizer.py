"""Flatten heterogeneous rich-text input into a list of runs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from chattext.text.component import TextComponent
from chattext.text.errors import InvalidInputError
from chattext.text.run import Run
from chattext.text.style import Style
from chattext.text.tokenizer import add_color, tokenize


@runtime_checkable
class RichTextNode(Protocol):
    """A node of tree-shaped rich text supplied by a host.

    ``content`` holds the node's own (style, text) segments, ``children`` the
    nested nodes that follow it.
    """

    style: Style
    content: Sequence[tuple[Style, str]]
    children: Sequence[Any]


@dataclass(frozen=True)
class TextNode:
    """Plain implementation of :class:`RichTextNode`."""

    content: Sequence[tuple[Style, str]] = ()
    children: Sequence[Any] = ()
    style: Style = field(default=Style.EMPTY)

    @classmethod
    def literal(cls, text: str, style: Style = Style.EMPTY, *children: Any) -> TextNode:
        return cls(content=((Style.EMPTY, text),), children=children, style=style)


def normalize(obj: Any) -> list[Run]:
    """Flatten ``obj`` into runs, never returning an empty list."""
    return flatten(obj) or [Run("", Style.EMPTY)]


def flatten(obj: Any) -> list[Run]:
    """Flatten ``obj`` into runs; empty input yields an empty list.

    Tree nodes are visited depth-first. A node's effective style is its own
    style merged over its parent's, and each content segment's style is merged
    over that, so attributes set closer to the text always win.
    """
    if obj is None:
        return []
    if isinstance(obj, Run):
        return [obj]
    if isinstance(obj, TextComponent):
        return list(obj.parts)
    if isinstance(obj, str):
        return tokenize(add_color(obj))
    if isinstance(obj, Mapping):
        return _from_descriptor(obj)
    if isinstance(obj, RichTextNode):
        return _visit_node(obj, Style.EMPTY)
    if isinstance(obj, Sequence):
        runs: list[Run] = []
        for item in obj:
            runs.extend(flatten(item))
        return runs
    raise InvalidInputError(f"Cannot convert {type(obj).__name__} to a TextComponent part")


def _from_descriptor(obj: Mapping[str, Any]) -> list[Run]:
    if "text" not in obj:
        raise InvalidInputError('Expected TextComponent part to have a "text" key')
    text = obj["text"]
    if not isinstance(text, str):
        raise InvalidInputError('TextComponent part\'s "text" key must be a string')
    # One descriptor is one part; inline codes stay in its text
    return [Run(add_color(text), Style.from_descriptor(obj))]


def _visit_node(node: RichTextNode, inherited: Style) -> list[Run]:
    effective = node.style.merge(inherited)
    runs = [Run(text, style.merge(effective)) for style, text in node.content]
    for child in node.children:
        if isinstance(child, RichTextNode):
            runs.extend(_visit_node(child, effective))
        else:
            runs.extend(Run(run.text, run.style.merge(effective)) for run in flatten(child))
    return runs

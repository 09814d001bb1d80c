"""Immutable text style with CSS-like inheritance."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar

from chattext.text.colors import DEFAULT_FONT, MARKER, Formatting, Identifier, TextColor
from chattext.text.errors import InvalidStyleValueError
from chattext.text.events import ClickEvent, HoverEvent, make_click_event, make_hover_event

# Decoration flags in the order they win when only one marker can be emitted
_DECORATION_PRIORITY = (
    ("bold", Formatting.BOLD),
    ("italic", Formatting.ITALIC),
    ("underline", Formatting.UNDERLINE),
    ("strikethrough", Formatting.STRIKETHROUGH),
    ("obfuscated", Formatting.OBFUSCATED),
)
_FLAG_FOR_FORMATTING = {fmt: flag for flag, fmt in _DECORATION_PRIORITY}
FLAG_KEYS = tuple(flag for flag, _ in _DECORATION_PRIORITY)


@dataclass(frozen=True)
class Style:
    """Visual and interactive attributes of a run of text.

    Every attribute may be unset (None). Unset decoration flags read as false
    through the ``is_*`` properties but still inherit from a parent in
    :meth:`merge`.
    """

    EMPTY: ClassVar[Style]

    color: TextColor | None = None
    bold: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    strikethrough: bool | None = None
    obfuscated: bool | None = None
    click_event: ClickEvent | None = None
    hover_event: HoverEvent | None = None
    insertion: str | None = None
    font: Identifier | None = None

    @property
    def is_bold(self) -> bool:
        return self.bold is True

    @property
    def is_italic(self) -> bool:
        return self.italic is True

    @property
    def is_underlined(self) -> bool:
        return self.underline is True

    @property
    def is_strikethrough(self) -> bool:
        return self.strikethrough is True

    @property
    def is_obfuscated(self) -> bool:
        return self.obfuscated is True

    @property
    def is_empty(self) -> bool:
        return self == Style.EMPTY

    def merge(self, parent: Style) -> Style:
        """Fill every unset attribute from ``parent``; set attributes win."""
        if self.is_empty:
            return parent
        if parent.is_empty:
            return self
        changes = {
            f.name: getattr(parent, f.name)
            for f in fields(self)
            if getattr(self, f.name) is None
        }
        return replace(self, **changes)

    def with_formatting(self, formatting: Formatting) -> Style:
        """Apply a single decoration or color code on top of this style."""
        if formatting.is_color:
            return replace(self, color=TextColor.from_formatting(formatting))
        if formatting is Formatting.RESET:
            return Style.EMPTY
        return replace(self, **{_FLAG_FOR_FORMATTING[formatting]: True})

    def without_decorations(self) -> Style:
        return replace(self, **{flag: None for flag in FLAG_KEYS})

    def format_prefix(self) -> str:
        """Legacy marker prefix: reset, at most one decoration, then the color.

        Only the highest-priority decoration is emitted even when several
        flags are set, and only named colors have a marker.
        """
        prefix = str(Formatting.RESET)
        for flag, formatting in _DECORATION_PRIORITY:
            if getattr(self, flag) is True:
                prefix += str(formatting)
                break
        if self.color is not None and self.color.formatting is not None:
            prefix += MARKER + self.color.formatting.code
        return prefix

    # -- descriptors --------------------------------------------------------

    @classmethod
    def from_descriptor(cls, obj: Mapping[str, Any]) -> Style:
        """Build a style from the recognized keys of a descriptor mapping.

        Unrecognized keys (including ``text``) are ignored.
        """
        flags: dict[str, bool | None] = {}
        for flag in FLAG_KEYS:
            value = obj.get(flag)
            if value is not None and not isinstance(value, bool):
                raise InvalidStyleValueError(f'Expected "{flag}" key to be a boolean')
            flags[flag] = value

        insertion = obj.get("insertion")
        if insertion is not None and not isinstance(insertion, str):
            raise InvalidStyleValueError('Expected "insertion" key to be a string')

        return cls(
            color=parse_color(obj.get("color")),
            click_event=make_click_event(obj.get("clickEvent")),
            hover_event=make_hover_event(obj.get("hoverEvent")),
            insertion=insertion,
            font=parse_font(obj.get("font")),
            **flags,
        )

    def to_descriptor(self) -> dict[str, Any]:
        """Descriptor keys for every set attribute, JSON-compatible."""
        result: dict[str, Any] = {}
        if self.color is not None:
            result["color"] = str(self.color)
        for flag in FLAG_KEYS:
            value = getattr(self, flag)
            if value is not None:
                result[flag] = value
        if self.click_event is not None:
            result["clickEvent"] = self.click_event.to_descriptor()
        if self.hover_event is not None:
            result["hoverEvent"] = self.hover_event.to_descriptor()
        if self.insertion is not None:
            result["insertion"] = self.insertion
        if self.font is not None and self.font != DEFAULT_FONT:
            result["font"] = str(self.font)
        return result


Style.EMPTY = Style()


def parse_color(color: Any) -> TextColor | None:
    """Accept a TextColor, a color Formatting, a numeric RGB value or a color string."""
    if color is None or isinstance(color, TextColor):
        return color
    if isinstance(color, Formatting):
        return TextColor.from_formatting(color)
    if isinstance(color, int) and not isinstance(color, bool):
        return TextColor.from_rgb(color)
    if isinstance(color, float) and color.is_integer():
        return TextColor.from_rgb(int(color))
    if isinstance(color, str):
        return TextColor.parse(color)
    raise InvalidStyleValueError(
        f"Could not convert type {type(color).__name__} to a text color"
    )


def parse_font(font: Any) -> Identifier | None:
    if font is None or isinstance(font, Identifier):
        return font
    if isinstance(font, str):
        return Identifier.parse(font)
    raise InvalidStyleValueError('Expected "font" key to be a string')

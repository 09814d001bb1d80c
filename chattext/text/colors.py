"""Legacy formatting codes, text colors and namespaced identifiers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from chattext.text.errors import InvalidStyleValueError

# Marker character that introduces a two-character formatting code
MARKER = "§"


class Formatting(Enum):
    """Legacy formatting codes: 16 colors, 5 decorations and reset."""

    BLACK = ("black", "0", 0x000000)
    DARK_BLUE = ("dark_blue", "1", 0x0000AA)
    DARK_GREEN = ("dark_green", "2", 0x00AA00)
    DARK_AQUA = ("dark_aqua", "3", 0x00AAAA)
    DARK_RED = ("dark_red", "4", 0xAA0000)
    DARK_PURPLE = ("dark_purple", "5", 0xAA00AA)
    GOLD = ("gold", "6", 0xFFAA00)
    GRAY = ("gray", "7", 0xAAAAAA)
    DARK_GRAY = ("dark_gray", "8", 0x555555)
    BLUE = ("blue", "9", 0x5555FF)
    GREEN = ("green", "a", 0x55FF55)
    AQUA = ("aqua", "b", 0x55FFFF)
    RED = ("red", "c", 0xFF5555)
    LIGHT_PURPLE = ("light_purple", "d", 0xFF55FF)
    YELLOW = ("yellow", "e", 0xFFFF55)
    WHITE = ("white", "f", 0xFFFFFF)
    OBFUSCATED = ("obfuscated", "k", None)
    BOLD = ("bold", "l", None)
    STRIKETHROUGH = ("strikethrough", "m", None)
    UNDERLINE = ("underline", "n", None)
    ITALIC = ("italic", "o", None)
    RESET = ("reset", "r", None)

    def __init__(self, key: str, code: str, rgb: int | None) -> None:
        self.key = key
        self.code = code
        self.rgb = rgb

    @property
    def is_color(self) -> bool:
        return self.rgb is not None

    @property
    def is_decoration(self) -> bool:
        return self.rgb is None and self is not Formatting.RESET

    @classmethod
    def by_code(cls, code: str) -> Formatting | None:
        return _BY_CODE.get(code.lower())

    @classmethod
    def by_name(cls, name: str) -> Formatting | None:
        return _BY_NAME.get(name.lower())

    def __str__(self) -> str:
        return MARKER + self.code


_BY_CODE = {f.code: f for f in Formatting}
_BY_NAME = {f.key: f for f in Formatting}

# All valid code characters, used when normalizing alternate markers
CODE_CHARS = "".join(f.code for f in Formatting)


@dataclass(frozen=True)
class TextColor:
    """An RGB color, optionally carrying the name of a legacy color."""

    rgb: int
    name: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.rgb <= 0xFFFFFF:
            raise InvalidStyleValueError(f"RGB value {self.rgb:#x} is out of range")

    @classmethod
    def from_formatting(cls, formatting: Formatting) -> TextColor:
        if formatting.rgb is None:
            raise InvalidStyleValueError(f"{formatting.name} is not a color")
        return cls(formatting.rgb, formatting.key)

    @classmethod
    def from_rgb(cls, rgb: int) -> TextColor:
        return cls(rgb)

    @classmethod
    def parse(cls, value: str) -> TextColor:
        """Parse ``#RRGGBB`` or a legacy color name such as ``dark_red``."""
        if value.startswith("#"):
            try:
                return cls(int(value[1:], 16))
            except ValueError:
                raise InvalidStyleValueError(
                    f'Could not parse "{value}" as a text color'
                ) from None
        formatting = Formatting.by_name(value)
        if formatting is None or not formatting.is_color:
            raise InvalidStyleValueError(f'Could not parse "{value}" as a text color')
        return cls.from_formatting(formatting)

    @property
    def formatting(self) -> Formatting | None:
        """The legacy color code this color maps to, if it is a named color."""
        if self.name is None:
            return None
        return Formatting.by_name(self.name)

    def __str__(self) -> str:
        return self.name if self.name is not None else f"#{self.rgb:06X}"


_NAMESPACE_RE = re.compile(r"^[a-z0-9_.-]+$")
_PATH_RE = re.compile(r"^[a-z0-9_./-]+$")


@dataclass(frozen=True)
class Identifier:
    """A ``namespace:path`` resource identifier, used for fonts and item types."""

    namespace: str
    path: str

    def __post_init__(self) -> None:
        if not _NAMESPACE_RE.match(self.namespace):
            raise InvalidStyleValueError(f'Invalid identifier namespace "{self.namespace}"')
        if not _PATH_RE.match(self.path):
            raise InvalidStyleValueError(f'Invalid identifier path "{self.path}"')

    @classmethod
    def parse(cls, value: str) -> Identifier:
        if ":" in value:
            namespace, path = value.split(":", 1)
            return cls(namespace, path)
        return cls("minecraft", value)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"


DEFAULT_FONT = Identifier("minecraft", "default")

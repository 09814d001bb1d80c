"""Styled text component model."""

from chattext.text.colors import DEFAULT_FONT, MARKER, Formatting, Identifier, TextColor
from chattext.text.errors import (
    ChatTextError,
    InvalidInputError,
    InvalidStyleValueError,
    OutOfRangeError,
    UnsupportedVariantError,
)
from chattext.text.events import (
    ClickAction,
    ClickEvent,
    EntityRef,
    HoverAction,
    HoverEvent,
    ItemStackRef,
)
from chattext.text.style import Style
from chattext.text.run import Run
from chattext.text.component import (
    NO_DISPATCH_ID,
    StyledChar,
    StyledCharSequence,
    TextComponent,
    random_dispatch_id,
)
from chattext.text.normalizer import RichTextNode, TextNode, flatten, normalize
from chattext.text.tokenizer import add_color, tokenize

__all__ = [
    "DEFAULT_FONT",
    "MARKER",
    "NO_DISPATCH_ID",
    "ChatTextError",
    "ClickAction",
    "ClickEvent",
    "EntityRef",
    "Formatting",
    "HoverAction",
    "HoverEvent",
    "Identifier",
    "InvalidInputError",
    "InvalidStyleValueError",
    "ItemStackRef",
    "OutOfRangeError",
    "RichTextNode",
    "Run",
    "Style",
    "StyledChar",
    "StyledCharSequence",
    "TextColor",
    "TextComponent",
    "TextNode",
    "UnsupportedVariantError",
    "add_color",
    "flatten",
    "normalize",
    "random_dispatch_id",
    "tokenize",
]

"""The atomic (text, style) unit of styled text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from chattext.text.style import Style


@dataclass(frozen=True)
class Run:
    text: str
    style: Style = Style.EMPTY

    @property
    def formatted_text(self) -> str:
        return self.style.format_prefix() + self.text

    def to_descriptor(self) -> dict[str, Any]:
        return {"text": self.text, **self.style.to_descriptor()}

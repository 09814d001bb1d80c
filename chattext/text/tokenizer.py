"""Split legacy formatting-coded strings into styled runs."""

from __future__ import annotations

import re

from chattext.text.colors import CODE_CHARS, MARKER, Formatting
from chattext.text.run import Run
from chattext.text.style import Style

# "&c" style alternate markers, unless escaped with a backslash
_ALTERNATE_MARKER_RE = re.compile(rf"(?<!\\)&(?=[{CODE_CHARS}])")


def add_color(text: str) -> str:
    """Replace ``&`` alternate markers that precede a valid code with ``§``."""
    return _ALTERNATE_MARKER_RE.sub(MARKER, text)


def tokenize(text: str, start: Style = Style.EMPTY) -> list[Run]:
    """Tokenize ``text`` into runs, beginning (and resetting) to ``start``.

    Decoration codes set one flag. A color code clears the decorations that
    were in effect before the current cluster of markers and sets the color,
    so ``§l§c`` is bold red while ``§lA§cB`` leaves ``B`` red only. Reset
    returns to ``start`` and closes the current run even when it is empty,
    unless it is the first thing in the input. A ``§`` that does not start a
    valid code is kept as literal text.
    """
    runs: list[Run] = []
    buffer: list[str] = []
    style = start
    # Decorations applied since the last literal character
    cluster: list[Formatting] = []
    started = False

    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        formatting = Formatting.by_code(text[i + 1]) if ch == MARKER and i + 1 < length else None
        if formatting is None:
            buffer.append(ch)
            cluster.clear()
            started = True
            i += 1
            continue

        if formatting is Formatting.RESET:
            if started:
                runs.append(Run("".join(buffer), style))
                buffer.clear()
            style = start
            cluster.clear()
        else:
            if buffer:
                runs.append(Run("".join(buffer), style))
                buffer.clear()
            if formatting.is_color:
                style = style.without_decorations().with_formatting(formatting)
                for decoration in cluster:
                    style = style.with_formatting(decoration)
            else:
                style = style.with_formatting(formatting)
                cluster.append(formatting)
        started = True
        i += 2

    if started:
        runs.append(Run("".join(buffer), style))
    return runs

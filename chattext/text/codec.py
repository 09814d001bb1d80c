"""Wire and persistent encoding of text components.

A component encodes to ``{"parts": [...], "dispatch_id": int, "recursive": bool}``
where each part is a descriptor mapping. Decoding keeps part text verbatim, so
the encoding is lossless for anything that descriptors can express.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from chattext.text.component import NO_DISPATCH_ID, TextComponent
from chattext.text.errors import InvalidInputError
from chattext.text.run import Run
from chattext.text.style import Style


def encode(component: TextComponent) -> dict[str, Any]:
    return {
        "parts": component.to_descriptors(),
        "dispatch_id": component.dispatch_id,
        "recursive": component.recursive,
    }


def decode(data: Mapping[str, Any] | Sequence[Mapping[str, Any]]) -> TextComponent:
    """Rebuild a component from :func:`encode` output or a bare part list."""
    if isinstance(data, Mapping):
        parts = data.get("parts")
        dispatch_id = data.get("dispatch_id", NO_DISPATCH_ID)
        recursive = data.get("recursive", False)
    else:
        parts, dispatch_id, recursive = data, NO_DISPATCH_ID, False

    if isinstance(parts, (str, bytes)) or not isinstance(parts, Sequence):
        raise InvalidInputError('Encoded component requires a "parts" list')
    if isinstance(dispatch_id, bool) or not isinstance(dispatch_id, int):
        raise InvalidInputError('Encoded "dispatch_id" must be an integer')
    if not isinstance(recursive, bool):
        raise InvalidInputError('Encoded "recursive" must be a boolean')

    runs = [_decode_part(part) for part in parts]
    return TextComponent.from_runs(runs, dispatch_id, recursive)


def dumps(component: TextComponent, **kwargs: Any) -> str:
    return json.dumps(encode(component), ensure_ascii=False, **kwargs)


def loads(payload: str | bytes) -> TextComponent:
    try:
        data = json.loads(payload)
    except ValueError as exc:
        raise InvalidInputError(f"Encoded component is not valid JSON: {exc}") from exc
    return decode(data)


def _decode_part(part: Any) -> Run:
    if not isinstance(part, Mapping):
        raise InvalidInputError(f"Encoded part must be an object, got {type(part).__name__}")
    text = part.get("text")
    if not isinstance(text, str):
        raise InvalidInputError('Encoded part requires a string "text" key')
    return Run(text, Style.from_descriptor(part))

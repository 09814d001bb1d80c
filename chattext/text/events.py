"""Click and hover actions attached to styled text.

Both event kinds are built from descriptor mappings of the form
``{"action": "<kind>", "value": ...}``. Construction validates the pairing of
action and value up front so that a :class:`ClickEvent` or :class:`HoverEvent`
that exists is always usable.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union
from uuid import UUID

from chattext.text.colors import Identifier
from chattext.text.errors import InvalidStyleValueError, UnsupportedVariantError

if TYPE_CHECKING:
    from chattext.text.component import TextComponent


# ---------------------------------------------------------------------------
# Click events
# ---------------------------------------------------------------------------

class ClickAction(str, Enum):
    OPEN_URL = "open_url"
    OPEN_FILE = "open_file"
    RUN_COMMAND = "run_command"
    SUGGEST_COMMAND = "suggest_command"
    CHANGE_PAGE = "change_page"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"


@dataclass(frozen=True)
class ClickEvent:
    action: ClickAction
    value: str | int

    def to_descriptor(self) -> dict[str, Any]:
        return {"action": self.action.value, "value": event_value(self)}


def normalize_url(value: str) -> str:
    """Give a URL an explicit scheme, defaulting to plain http."""
    if not value.startswith("http://") and not value.startswith("https://"):
        return f"http://{value}"
    return value


def make_click_event(obj: Any) -> ClickEvent | None:
    """Build a click event from a descriptor, or pass an existing one through.

    Returns None when neither action nor value is given, and for a
    ``change_page`` action whose value is not an integer.
    """
    if obj is None or isinstance(obj, ClickEvent):
        return obj
    if not isinstance(obj, Mapping):
        raise InvalidStyleValueError('Expected "clickEvent" key to be an object or ClickEvent')

    action = obj.get("action")
    value = obj.get("value")

    if action is None:
        if value is not None:
            raise InvalidStyleValueError("Cannot set a click value without a click action")
        return None
    click_action = _parse_action(ClickAction, action, "click")

    if value is None:
        raise InvalidStyleValueError(f"Click action {click_action.value} requires a value")
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidStyleValueError('Expected click "value" key to be a string')

    if click_action is ClickAction.CHANGE_PAGE:
        try:
            return ClickEvent(click_action, int(value))
        except ValueError:
            return None

    text = str(value)
    if click_action is ClickAction.OPEN_URL:
        if not text or any(ch.isspace() for ch in text):
            raise InvalidStyleValueError(f'"{text}" is not a usable URL')
        text = normalize_url(text)
    return ClickEvent(click_action, text)


# ---------------------------------------------------------------------------
# Hover events
# ---------------------------------------------------------------------------

class HoverAction(str, Enum):
    SHOW_TEXT = "show_text"
    SHOW_ITEM = "show_item"
    SHOW_ENTITY = "show_entity"


@dataclass(frozen=True)
class ItemStackRef:
    """Reference to an item stack: the item type and a count."""

    item: Identifier
    count: int = 1

    def to_descriptor(self) -> dict[str, Any]:
        return {"id": str(self.item), "count": self.count}


@dataclass(frozen=True)
class EntityRef:
    """Entity reduced to its type, unique id and optional display name."""

    type: Identifier
    uuid: UUID
    name: TextComponent | None = None

    def to_descriptor(self) -> dict[str, Any]:
        return {
            "type": str(self.type),
            "id": str(self.uuid),
            "name": self.name.to_descriptors() if self.name is not None else None,
        }


HoverValue = Union["TextComponent", ItemStackRef, EntityRef]


@dataclass(frozen=True)
class HoverEvent:
    action: HoverAction
    value: HoverValue

    def to_descriptor(self) -> dict[str, Any]:
        value = event_value(self)
        if self.action is HoverAction.SHOW_TEXT:
            encoded: Any = value.to_descriptors()
        else:
            encoded = value.to_descriptor()
        return {"action": self.action.value, "value": encoded}


def make_hover_event(obj: Any) -> HoverEvent | None:
    """Build a hover event from a descriptor, or pass an existing one through."""
    if obj is None or isinstance(obj, HoverEvent):
        return obj
    if not isinstance(obj, Mapping):
        raise InvalidStyleValueError('Expected "hoverEvent" key to be an object or HoverEvent')

    action = obj.get("action")
    value = obj.get("value")

    if action is None:
        if value is not None:
            raise InvalidStyleValueError("Cannot set a hover value without a hover action")
        return None
    hover_action = _parse_action(HoverAction, action, "hover")

    if value is None:
        raise InvalidStyleValueError(f"Hover action {hover_action.value} requires a value")

    if hover_action is HoverAction.SHOW_TEXT:
        from chattext.text.component import TextComponent

        return HoverEvent(hover_action, TextComponent(value))
    if hover_action is HoverAction.SHOW_ITEM:
        return HoverEvent(hover_action, parse_item(value))
    if hover_action is HoverAction.SHOW_ENTITY:
        return HoverEvent(hover_action, parse_entity(value))
    raise UnsupportedVariantError(f"No hover value parser for {hover_action!r}")


def parse_item(obj: Any) -> ItemStackRef:
    if isinstance(obj, ItemStackRef):
        return obj
    if isinstance(obj, str):
        return ItemStackRef(Identifier.parse(obj))
    if isinstance(obj, Mapping):
        item_id = obj.get("id")
        if not isinstance(item_id, str):
            raise InvalidStyleValueError('Item hover value requires a string "id" key')
        count = obj.get("count", 1)
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise InvalidStyleValueError('Item hover "count" must be a positive integer')
        return ItemStackRef(Identifier.parse(item_id), count)
    raise InvalidStyleValueError(f"{type(obj).__name__} cannot be parsed as an item hover value")


def parse_entity(obj: Any) -> EntityRef:
    """Reduce an entity-like value to an :class:`EntityRef`.

    Accepts an EntityRef, a mapping with ``type``/``id``/``name`` keys, or any
    object exposing ``type``, ``uuid`` and ``name`` attributes.
    """
    if isinstance(obj, EntityRef):
        return obj
    if isinstance(obj, Mapping):
        entity_type, entity_id, name = obj.get("type"), obj.get("id"), obj.get("name")
    elif all(hasattr(obj, attr) for attr in ("type", "uuid", "name")):
        entity_type, entity_id, name = obj.type, obj.uuid, obj.name
    else:
        raise InvalidStyleValueError(
            f"{type(obj).__name__} cannot be parsed as an entity hover value"
        )

    if isinstance(entity_type, str):
        entity_type = Identifier.parse(entity_type)
    if not isinstance(entity_type, Identifier):
        raise InvalidStyleValueError("Entity hover value requires a type")
    try:
        uuid = entity_id if isinstance(entity_id, UUID) else UUID(str(entity_id))
    except ValueError:
        raise InvalidStyleValueError(f'"{entity_id}" is not a valid entity UUID') from None

    if name is not None:
        from chattext.text.component import TextComponent

        name = TextComponent(name)
    return EntityRef(entity_type, uuid, name)


def event_value(event: ClickEvent | HoverEvent) -> Any:
    """Extract the payload of an event, checking its kind."""
    if isinstance(event, ClickEvent):
        if event.action in ClickAction:
            return event.value
    elif isinstance(event, HoverEvent):
        if event.action in HoverAction:
            return event.value
    raise UnsupportedVariantError(f"{type(event).__name__} is not of a supported type")


def _parse_action(enum_type: type[Enum], action: Any, label: str) -> Any:
    if isinstance(action, enum_type):
        return action
    if not isinstance(action, str):
        raise InvalidStyleValueError(
            f"Expected a string or {enum_type.__name__} for the {label} action, "
            f"but got {type(action).__name__}"
        )
    try:
        return enum_type(action.lower())
    except ValueError:
        raise InvalidStyleValueError(f'Unknown {label} event action "{action}"') from None

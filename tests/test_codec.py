"""Tests for the JSON encoding of components."""

import json

import pytest
from chattext.text import codec
from chattext.text.colors import Formatting, TextColor
from chattext.text.component import TextComponent
from chattext.text.errors import InvalidInputError, InvalidStyleValueError
from chattext.text.events import ClickAction, ClickEvent
from chattext.text.run import Run
from chattext.text.style import Style


@pytest.fixture
def component():
    return TextComponent(
        "§lHello ",
        {"text": "link", "clickEvent": {"action": "open_url", "value": "https://example.com"}},
        dispatch_id=77,
        recursive=True,
    )


class TestEncode:
    def test_shape(self, component):
        data = codec.encode(component)
        assert data == {
            "parts": [
                {"text": "Hello ", "bold": True},
                {
                    "text": "link",
                    "clickEvent": {"action": "open_url", "value": "https://example.com"},
                },
            ],
            "dispatch_id": 77,
            "recursive": True,
        }

    def test_dumps_keeps_unicode(self):
        payload = codec.dumps(TextComponent("§cñ"))
        assert "ñ" in payload
        assert json.loads(payload)["parts"] == [{"text": "ñ", "color": "red"}]


class TestDecode:
    def test_restores_everything(self, component):
        decoded = codec.loads(codec.dumps(component))
        assert decoded.parts == component.parts
        assert decoded.dispatch_id == 77
        assert decoded.recursive is True

    def test_text_kept_verbatim(self):
        decoded = codec.decode({"parts": [{"text": "50&c off"}]})
        assert decoded.parts == (Run("50&c off", Style.EMPTY),)

    def test_bare_part_list(self):
        decoded = codec.decode([{"text": "a", "color": "#010203"}])
        assert decoded.parts == (Run("a", Style(color=TextColor(0x010203))),)
        assert decoded.dispatch_id == -1
        assert decoded.recursive is False

    def test_empty_parts(self):
        assert codec.decode({"parts": []}) == TextComponent()

    def test_click_event(self):
        decoded = codec.decode(
            [{"text": "p", "clickEvent": {"action": "change_page", "value": 2}}]
        )
        assert decoded.style.click_event == ClickEvent(ClickAction.CHANGE_PAGE, 2)

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"parts": "text"},
            {"parts": [], "dispatch_id": "1"},
            {"parts": [], "dispatch_id": True},
            {"parts": [], "recursive": 1},
            {"parts": ["text"]},
            {"parts": [{"bold": True}]},
        ],
    )
    def test_malformed(self, data):
        with pytest.raises(InvalidInputError):
            codec.decode(data)

    def test_bad_style(self):
        with pytest.raises(InvalidStyleValueError):
            codec.decode([{"text": "x", "color": "nope"}])

    def test_invalid_json(self):
        with pytest.raises(InvalidInputError):
            codec.loads("{not json")

    def test_named_color_survives(self):
        decoded = codec.loads(codec.dumps(TextComponent("§9x")))
        assert decoded.style.color == TextColor.from_formatting(Formatting.BLUE)

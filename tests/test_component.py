"""Tests for TextComponent construction, edits and derived text."""

import pytest
from chattext.text import codec
from chattext.text.colors import Formatting, TextColor
from chattext.text.component import NO_DISPATCH_ID, TextComponent, random_dispatch_id
from chattext.text.errors import InvalidInputError, OutOfRangeError
from chattext.text.run import Run
from chattext.text.style import Style

RED = TextColor.from_formatting(Formatting.RED)


@pytest.fixture
def hello():
    return TextComponent("§lHello §r§cWorld")


class TestConstruction:
    def test_empty_has_placeholder_run(self):
        component = TextComponent()
        assert component.parts == (Run("", Style.EMPTY),)
        assert component.unformatted_text == ""
        assert component.formatted_text == "§r"

    def test_none_is_empty(self):
        assert TextComponent(None).parts == (Run("", Style.EMPTY),)

    def test_legacy_string(self, hello):
        assert hello.parts == (
            Run("Hello ", Style(bold=True)),
            Run("World", Style(color=RED)),
        )
        assert hello.unformatted_text == "Hello World"

    def test_alternate_marker(self):
        assert TextComponent("&cRed").parts == (Run("Red", Style(color=RED)),)

    def test_several_inputs_concatenate(self):
        component = TextComponent("a", Run("b", Style(italic=True)), {"text": "c"})
        assert [run.text for run in component.parts] == ["a", "b", "c"]

    def test_nested_component_is_flattened(self, hello):
        component = TextComponent(hello, "!")
        assert len(component) == 3
        assert component.unformatted_text == "Hello World!"

    def test_unsupported_input(self):
        with pytest.raises(InvalidInputError):
            TextComponent(42)

    def test_descriptor_requires_text(self):
        with pytest.raises(InvalidInputError):
            TextComponent({"bold": True})

    def test_dispatch_id_must_be_int(self):
        with pytest.raises(TypeError):
            TextComponent("x", dispatch_id="7")
        with pytest.raises(TypeError):
            TextComponent("x", dispatch_id=True)

    def test_from_runs_keeps_text_verbatim(self):
        component = TextComponent.from_runs([Run("a&cb", Style(italic=True))], dispatch_id=4)
        assert component.parts == (Run("a&cb", Style(italic=True)),)
        assert component.dispatch_id == 4
        assert component.recursive is False

    def test_from_runs_empty_gets_placeholder(self):
        assert TextComponent.from_runs([]).parts == (Run("", Style.EMPTY),)

    def test_from_runs_rejects_other_values(self):
        with pytest.raises(InvalidInputError):
            TextComponent.from_runs(["text"])

    def test_defaults(self):
        component = TextComponent("x")
        assert component.dispatch_id == NO_DISPATCH_ID
        assert component.recursive is False


class TestEdits:
    def test_append_to_empty_replaces_placeholder(self):
        component = TextComponent().append({"text": "hi", "bold": True}).append("!")
        assert len(component) == 2
        assert component.formatted_text == "§r§lhi§r!"

    def test_append_does_not_change_original(self, hello):
        before = hello.formatted_text
        longer = hello.append(" again")
        assert hello.formatted_text == before
        assert len(hello) == 2
        assert len(longer) == 3

    def test_insert_at(self, hello):
        component = hello.insert_at(1, "big ")
        assert component.unformatted_text == "Hello big World"
        assert component.parts[1] == Run("big ", Style.EMPTY)

    def test_insert_at_end(self, hello):
        assert hello.insert_at(2, "!").unformatted_text == "Hello World!"

    @pytest.mark.parametrize("index", [-1, 3])
    def test_insert_out_of_range(self, hello, index):
        with pytest.raises(OutOfRangeError):
            hello.insert_at(index, "x")
        assert hello.parts == (Run("Hello ", Style(bold=True)), Run("World", Style(color=RED)))
        assert hello.formatted_text == "§r§lHello §r§cWorld"

    def test_insert_into_empty(self):
        assert TextComponent().insert_at(0, "x").parts == (Run("x", Style.EMPTY),)

    def test_remove_at(self, hello):
        component = hello.remove_at(0)
        assert component.parts == (Run("World", Style(color=RED)),)

    def test_remove_only_part_keeps_placeholder(self):
        component = TextComponent("x").remove_at(0)
        assert component.parts == (Run("", Style.EMPTY),)

    @pytest.mark.parametrize("index", [-1, 2])
    def test_remove_out_of_range(self, hello, index):
        with pytest.raises(OutOfRangeError):
            hello.remove_at(index)
        assert len(hello) == 2
        assert hello.formatted_text == "§r§lHello §r§cWorld"

    def test_out_of_range_is_index_error(self, hello):
        with pytest.raises(IndexError):
            hello.remove_at(10)

    def test_edits_keep_identity(self):
        component = TextComponent("a", dispatch_id=5, recursive=True).append("b")
        assert component.dispatch_id == 5
        assert component.recursive is True

    def test_add_operators(self):
        assert (TextComponent("a") + "b").unformatted_text == "ab"
        combined = "x" + TextComponent("y", dispatch_id=3)
        assert isinstance(combined, TextComponent)
        assert combined.unformatted_text == "xy"
        assert combined.dispatch_id == 3

    def test_properties_are_read_only(self, hello):
        with pytest.raises(AttributeError):
            hello.parts = ()


class TestIdentity:
    def test_with_dispatch_id(self, hello):
        tagged = hello.with_dispatch_id(1234)
        assert tagged.dispatch_id == 1234
        assert hello.dispatch_id == NO_DISPATCH_ID

    def test_with_dispatch_id_from_source(self, hello):
        assert hello.with_dispatch_id(id_source=lambda: 42).dispatch_id == 42

    def test_with_dispatch_id_random(self, hello):
        dispatch_id = hello.with_dispatch_id().dispatch_id
        assert 0 <= dispatch_id < 2**31

    def test_random_dispatch_id_range(self):
        for _ in range(50):
            assert 0 <= random_dispatch_id() < 2**31

    def test_with_recursive_defaults_true(self, hello):
        assert hello.with_recursive().recursive is True
        assert hello.with_recursive().with_recursive(False).recursive is False


class TestEquality:
    def test_same_formatted_text(self):
        assert TextComponent("§lA") == TextComponent({"text": "A", "bold": True})
        assert hash(TextComponent("§lA")) == hash(TextComponent({"text": "A", "bold": True}))

    def test_raw_run_matches_tokenized_string(self):
        assert TextComponent(Run("a§r§cb")) == TextComponent("a§r§cb")

    def test_dispatch_id_ignored(self):
        assert TextComponent("x", dispatch_id=1) == TextComponent("x", dispatch_id=2)

    def test_different_styles(self):
        assert TextComponent("§lA") != TextComponent("A")

    def test_not_equal_to_string(self):
        assert TextComponent("A") != "§rA"

    def test_str_and_repr(self):
        component = TextComponent("A", dispatch_id=9)
        assert str(component) == "§rA"
        assert repr(component) == "TextComponent('§rA', dispatch_id=9)"


class TestStyledChars:
    def test_codepoints_and_styles(self, hello):
        chars = list(hello.styled_chars())
        assert "".join(c.char for c in chars) == "Hello World"
        assert chars[0].style == Style(bold=True)
        assert chars[6].style == Style(color=RED)
        assert [c.index for c in chars] == list(range(11))
        assert chars[0].codepoint == ord("H")

    def test_restartable(self, hello):
        sequence = hello.styled_chars()
        assert list(sequence) == list(sequence)
        assert len(sequence) == 11

    def test_empty_runs_contribute_nothing(self):
        assert list(TextComponent().styled_chars()) == []

    def test_style_at(self, hello):
        assert hello.style_at(5) == Style(bold=True)
        assert hello.style_at(6) == Style(color=RED)

    @pytest.mark.parametrize("index", [-1, 11])
    def test_style_at_out_of_range(self, hello, index):
        with pytest.raises(OutOfRangeError):
            hello.style_at(index)


class TestTreeView:
    def test_first_part_is_self(self, hello):
        assert hello.string == "Hello "
        assert hello.style == Style(bold=True)
        assert hello.siblings == [Run("World", Style(color=RED))]


class TestSequence:
    def test_getitem(self, hello):
        assert hello[0] == {"text": "Hello ", "bold": True}
        assert hello[1] == {"text": "World", "color": "red"}

    def test_getitem_out_of_range(self, hello):
        with pytest.raises(OutOfRangeError):
            hello[2]

    def test_iter(self, hello):
        assert list(hello) == [hello[0], hello[1]]

    def test_contains_and_index_of(self, hello):
        assert {"text": "World", "color": "red"} in hello
        assert hello.index_of({"text": "World", "color": "red"}) == 1
        assert hello.index_of({"text": "World"}) == -1

    def test_to_descriptors(self, hello):
        assert hello.to_descriptors() == list(hello)


class TestFormattedRoundTrip:
    @pytest.mark.parametrize(
        "component",
        [
            TextComponent("§lHello §r§cWorld"),
            TextComponent({"text": "hi", "bold": True, "color": "red"}),
            TextComponent({"text": "", "italic": True}),
            TextComponent("plain", " text"),
            TextComponent({"text": "hex", "color": "#123456", "underline": True}),
            TextComponent(),
            TextComponent(Run("raw", Style(bold=True, color=RED)), Run("tail")),
            codec.decode({"parts": [{"text": "a", "italic": True}, {"text": "b"}]}),
            codec.decode({"parts": []}),
        ],
    )
    def test_reparse_formatted_text(self, component):
        reparsed = TextComponent(component.formatted_text)
        assert reparsed == component
        assert reparsed.unformatted_text == component.unformatted_text

    def test_codes_inside_raw_run_are_resplit(self):
        component = TextComponent(Run("a§lb", Style(color=RED)))
        assert component.formatted_text == "§r§ca§lb"

        reparsed = TextComponent(component.formatted_text)
        assert reparsed.formatted_text == "§r§ca§r§l§cb"
        assert reparsed.parts == (
            Run("a", Style(color=RED)),
            Run("b", Style(color=RED, bold=True)),
        )

    def test_alternate_codes_inside_decoded_part_are_resplit(self):
        component = codec.decode({"parts": [{"text": "50&c off"}]})
        assert component.formatted_text == "§r50&c off"
        assert TextComponent(component.formatted_text).formatted_text == "§r50§r§c off"

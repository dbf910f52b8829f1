"""Unit and property-based tests for the annotations module."""
import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chatscope.annotations import (
    AnnotationDecoder,
    AnnotationKind,
    CodeElement,
    ColorSwatchStrategy,
    ElementNode,
    FileChipStrategy,
    LineRange,
    PlainCodeStrategy,
    SourceQuoteStrategy,
    SyntaxBlockStrategy,
    decode_annotation,
    format_line_range,
    is_hex_color,
    parse_line_range,
    scan_class_string,
)


class RecordingNavigation:
    """CodeNavigation that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def update_scroll_to_index(self, lines):
        self.calls.append(("scroll", lines))

    def open_file_modal(self, path, start_line=None, highlight_color=None):
        self.calls.append(("open", path, start_line, highlight_color))

    def set_file_highlights(self, path, ranges):
        self.calls.append(("highlight", path, ranges))

    def set_hovered_lines(self, line_range):
        self.calls.append(("hover", line_range))


def element(class_name: str, *children) -> CodeElement:
    return CodeElement(class_name=class_name, children=tuple(children))


class TestClassStringGrammar:
    """Tests for the class-string tokenizer."""

    def test_decodes_language_path_and_lines(self):
        """Test the canonical annotated block."""
        tokens = scan_class_string("lang:rust path:src/main.rs, lines:10-20")

        assert tokens.language == "rust"
        assert tokens.path == "src/main.rs"
        assert tokens.line_range == LineRange(9, 19)

    def test_language_prefix_fallback(self):
        """Test that language-<word> is used when there is no lang: tag."""
        assert scan_class_string("language-python").language == "python"

    def test_lang_tag_wins_over_language_prefix(self):
        """Test that lang: takes precedence."""
        tokens = scan_class_string("language-type:Quoted,lang:go,path:a.go,lines:1")

        assert tokens.language == "go"
        assert tokens.quote_type == "Quoted"
        assert tokens.is_quoted

    def test_path_requires_trailing_comma(self):
        """Test that a path value without a comma is not matched."""
        assert scan_class_string("lang:rust path:src/main.rs").path is None

    def test_path_runs_to_last_comma(self):
        """Test that the path extends up to the last comma on the line."""
        tokens = scan_class_string("path:src/a,b.rs,lines:3")

        assert tokens.path == "src/a,b.rs"

    def test_type_tag_is_case_sensitive(self):
        """Test that only the exact Quoted token marks a quote."""
        assert not scan_class_string("language-type:quoted").is_quoted

    def test_empty_class_string(self):
        """Test that no tags are found in an empty string."""
        tokens = scan_class_string("")

        assert tokens.language is None
        assert not tokens.has_block_tag


class TestLineRange:
    """Tests for line tag decoding."""

    def test_single_line(self):
        assert parse_line_range("5") == LineRange(4, 4)

    def test_start_and_end(self):
        assert parse_line_range("10-20") == LineRange(9, 19)

    @pytest.mark.parametrize("value", ["", "abc", "5-", "-5", "0", "x-3", "1-y", "1.5"])
    def test_malformed_values_are_absent(self, value):
        """Test that bad bounds never produce a range."""
        assert parse_line_range(value) is None

    def test_scroll_index_format(self):
        """Test the string passed to the scroll-index setter."""
        assert LineRange(4, 9).to_scroll_index() == "4_9"
        assert LineRange.from_scroll_index("4_9") == LineRange(4, 9)
        assert LineRange.from_scroll_index("nope") is None

    def test_round_trip_single_line(self):
        """Test that lines:7 is displayed as 7 again."""
        line_range = scan_class_string("lines:7").line_range

        assert line_range == LineRange(6, 6)
        assert line_range.display_start == 7
        assert format_line_range(line_range) == "7"

    @given(st.integers(min_value=1, max_value=100_000), st.integers(min_value=0, max_value=500))
    def test_round_trip_property(self, start, length):
        """Property test: decoding then re-encoding recovers the 1-indexed bounds."""
        value = f"{start}-{start + length}" if length else str(start)
        line_range = parse_line_range(value)

        assert line_range is not None
        assert line_range.start == start - 1
        assert format_line_range(line_range) == value

    @given(st.text())
    def test_parse_never_raises(self, value):
        """Property test: arbitrary line tags decode to a range or None."""
        result = parse_line_range(value)
        assert result is None or (result.start >= 0 and result.end >= 0)


class TestHexColor:
    """Tests for color literal detection."""

    @pytest.mark.parametrize("text", ["#FFF", "#fff", "#89b4fa", "#A1B2C3"])
    def test_valid_colors(self, text):
        assert is_hex_color(text)

    @pytest.mark.parametrize("text", ["#GGGGGG", "#FFFF", "FFF", " #FFF", "#FFF\n", "#12345"])
    def test_invalid_colors(self, text):
        assert not is_hex_color(text)


class TestDecodeAnnotation:
    """Tests for strategy selection."""

    def test_quoted_with_hide_code_selects_file_chip(self):
        """Test that hidden quoted code becomes a file chip."""
        annotation = decode_annotation(
            "language-type:Quoted path:a.py, lines:5", ("code\n",), hide_code=True
        )

        assert annotation.kind is AnnotationKind.FILE_CHIP
        assert annotation.path == "a.py"
        assert annotation.line_range == LineRange(4, 4)

    def test_quoted_selects_source_quote(self):
        annotation = decode_annotation(
            "language-type:Quoted,lang:rust,path:src/main.rs,lines:10-12", ("fn x()\n",)
        )

        assert annotation.kind is AnnotationKind.SOURCE_QUOTE
        assert annotation.language == "rust"

    def test_language_only_selects_syntax_block(self):
        annotation = decode_annotation("language-python", ("print(1)\n",))

        assert annotation.kind is AnnotationKind.SYNTAX_BLOCK
        assert annotation.language == "python"

    def test_hide_code_has_no_effect_without_quote(self):
        """Test that hide_code only matters for quoted blocks."""
        annotation = decode_annotation("language-python", ("x\n",), hide_code=True)

        assert annotation.kind is AnnotationKind.SYNTAX_BLOCK

    def test_inline_code_never_becomes_block(self):
        annotation = decode_annotation("language-python", ("x",), inline=True)

        assert annotation.kind is AnnotationKind.PLAIN_CODE

    def test_multiple_children_fall_through(self):
        """Test that blocks need exactly one plain-text child."""
        annotation = decode_annotation(
            "language-python", ("a", ElementNode("em", ("b",)))
        )

        assert annotation.kind is AnnotationKind.PLAIN_CODE

    def test_short_hex_selects_color_swatch(self):
        assert decode_annotation("", ("#FFF",)).kind is AnnotationKind.COLOR_SWATCH

    def test_invalid_hex_selects_plain_code(self):
        assert decode_annotation("", ("#GGGGGG",)).kind is AnnotationKind.PLAIN_CODE

    def test_color_with_language_tag_is_syntax_block(self):
        """Test that branch A is evaluated before the color check."""
        assert decode_annotation("language-css", ("#FFF",)).kind is AnnotationKind.SYNTAX_BLOCK

    @given(st.text(max_size=60), st.text(max_size=20), st.booleans(), st.booleans())
    def test_decode_never_raises(self, class_name, content, inline, hide_code):
        """Property test: any class string degrades to some strategy."""
        annotation = decode_annotation(class_name, (content,), inline, hide_code)
        assert annotation.kind in AnnotationKind


class TestAnnotationDecoder:
    """Tests for strategy records and callback wiring."""

    @pytest.fixture
    def navigation(self):
        return RecordingNavigation()

    @pytest.fixture
    def decoder(self, navigation):
        return AnnotationDecoder(navigation)

    def test_file_chip_click_updates_scroll_index(self, decoder, navigation):
        strategy = decoder.decode(
            element("language-type:Quoted path:a.py, lines:5-8", "x\n"), hide_code=True
        )

        assert isinstance(strategy, FileChipStrategy)
        assert strategy.file_name == "a.py"
        strategy.activate()
        assert navigation.calls == [("scroll", "4_7")]

    def test_file_chip_without_range_does_not_scroll(self, decoder, navigation):
        strategy = decoder.decode(
            element("language-type:Quoted path:a.py, lines:oops", "x\n"), hide_code=True
        )

        assert strategy.line_range is None
        strategy.activate()
        assert navigation.calls == []

    def test_file_chip_without_path_has_empty_name(self, decoder):
        strategy = decoder.decode(element("language-type:Quoted", "x\n"), hide_code=True)

        assert strategy.file_name == ""

    def test_source_quote_opens_file(self, decoder, navigation):
        strategy = decoder.decode(
            element("language-type:Quoted,lang:rust,path:src/main.rs,lines:10-12", "fn main() {}\n")
        )

        assert isinstance(strategy, SourceQuoteStrategy)
        assert strategy.code == "fn main() {}"
        assert strategy.start_line == 9
        strategy.open("#ff0000")
        assert navigation.calls == [("open", "src/main.rs", 9, "#ff0000")]

    def test_source_quote_without_lines_has_no_start(self, decoder):
        strategy = decoder.decode(element("language-type:Quoted,lang:rust,path:a.rs,", "x"))

        assert strategy.start_line is None

    def test_syntax_block_strips_one_newline(self, decoder):
        strategy = decoder.decode(element("language-python", "a\n\n"))

        assert isinstance(strategy, SyntaxBlockStrategy)
        assert strategy.code == "a\n"

    def test_plain_code_forwards_attributes(self, decoder):
        code = CodeElement(class_name="", children=("x",), props_json='{"data-line": 3}')
        strategy = decoder.decode(code, inline=True)

        assert isinstance(strategy, PlainCodeStrategy)
        assert strategy.attributes == {"data-line": 3}
        assert strategy.element is code

    def test_color_swatch_keeps_color(self, decoder):
        strategy = decoder.decode(element("", "#89b4fa"), inline=True)

        assert isinstance(strategy, ColorSwatchStrategy)
        assert strategy.color == "#89b4fa"

    def test_malformed_attributes_are_fatal(self, decoder):
        """Test that a broken pass-through blob propagates."""
        code = CodeElement(class_name="", children=("x",), props_json="{not json")

        with pytest.raises(json.JSONDecodeError):
            decoder.decode(code)

    def test_malformed_attributes_ignored_for_blocks(self, decoder):
        """Test that recognized blocks never read the pass-through blob."""
        code = CodeElement(class_name="language-python", children=("x",), props_json="{")

        assert isinstance(decoder.decode(code), SyntaxBlockStrategy)

    def test_highlight_and_hover(self, decoder, navigation):
        strategy = decoder.decode(
            element("language-type:Quoted path:a.py, lines:2", "x"), hide_code=True
        )
        decoder.highlight(strategy)
        decoder.hover(strategy)
        decoder.hover(None)

        assert navigation.calls == [
            ("highlight", "a.py", [LineRange(1, 1)]),
            ("hover", LineRange(1, 1)),
            ("hover", None),
        ]

    def test_decoder_without_navigation(self):
        """Test that strategies still work with no collaborators."""
        decoder = AnnotationDecoder()
        chip = decoder.decode(element("language-type:Quoted path:a.py, lines:2", "x"), hide_code=True)
        chip.activate()
        quote = decoder.decode(element("language-type:Quoted path:a.py, lines:2", "x"))
        quote.open()

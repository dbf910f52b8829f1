"""Unit tests for markdown segmentation."""
import json

from chatscope.annotations import AnnotationDecoder, AnnotationKind
from chatscope.markdown import (
    CodeSegment,
    MarkdownSegmenter,
    ProseSegment,
    fence_class_name,
    segment_markdown,
)


class TestFenceClassName:
    """Tests for the class string given to fenced blocks."""

    def test_first_word_of_info(self):
        assert fence_class_name("python title=x") == "language-python"

    def test_annotation_info_string(self):
        info = "type:Quoted,lang:rust,path:src/main.rs,lines:10-12"
        assert fence_class_name(info) == f"language-{info}"

    def test_empty_info(self):
        assert fence_class_name("") == ""


class TestMarkdownSegmenter:
    """Tests for splitting answers into prose and code."""

    def test_segments_in_order(self, sample_answer):
        """Test that prose and code alternate as in the source."""
        segments = segment_markdown(sample_answer)
        kinds = [type(s).__name__ for s in segments]

        assert kinds == [
            "ProseSegment",
            "CodeSegment",
            "ProseSegment",
            "CodeSegment",
            "ProseSegment",
            "CodeSegment",
        ]

    def test_fenced_block_element(self, sample_answer):
        """Test the class string and content of an annotated fence."""
        quote = segment_markdown(sample_answer)[1]

        assert isinstance(quote, CodeSegment)
        assert quote.fenced
        assert quote.element.class_name == (
            "language-type:Quoted,lang:rust,path:src/main.rs,lines:10-12"
        )
        assert quote.element.single_text.startswith("fn main() {\n")
        assert json.loads(quote.element.props_json)["data-line"] == 2

    def test_indented_block_has_no_class(self, sample_answer):
        indented = segment_markdown(sample_answer)[-1]

        assert isinstance(indented, CodeSegment)
        assert not indented.fenced
        assert indented.element.class_name == ""

    def test_inline_code_collected(self, sample_answer):
        """Test that inline code spans are exposed per prose run."""
        prose = segment_markdown(sample_answer)[4]

        assert isinstance(prose, ProseSegment)
        assert "accent color" in prose.markdown
        assert [e.text for e in prose.inline_code] == ["#89b4fa", "theme"]
        assert all(e.class_name == "" for e in prose.inline_code)

    def test_decoded_strategies(self, sample_answer):
        """Test the full markdown-to-strategy path."""
        decoder = AnnotationDecoder()
        segments = segment_markdown(sample_answer)
        blocks = [
            decoder.decode(s.element).kind
            for s in segments
            if isinstance(s, CodeSegment)
        ]
        inline = [
            decoder.decode(e, inline=True).kind
            for s in segments
            if isinstance(s, ProseSegment)
            for e in s.inline_code
        ]

        assert blocks == [
            AnnotationKind.SOURCE_QUOTE,
            AnnotationKind.SYNTAX_BLOCK,
            AnnotationKind.PLAIN_CODE,
        ]
        assert inline == [AnnotationKind.COLOR_SWATCH, AnnotationKind.PLAIN_CODE]

    def test_nested_fence_stays_in_prose(self):
        """Test that fences inside lists are not split out."""
        text = "- item\n\n  ```python\n  x = 1\n  ```\n"
        segments = MarkdownSegmenter().segment(text)

        assert len(segments) == 1
        assert isinstance(segments[0], ProseSegment)
        assert "```python" in segments[0].markdown

    def test_blank_text(self):
        assert segment_markdown("   \n") == []

    def test_plain_prose(self):
        segments = segment_markdown("Just *words* here.")

        assert segments == [ProseSegment("Just *words* here.", ())]

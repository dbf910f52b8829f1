"""Markdown segmentation using markdown-it-py.

Splits an answer into prose runs and top-level fenced code blocks, and
turns every code span into a ``CodeElement`` with the class string the
annotation decoder expects.

Hidden design decisions:
- Fenced blocks get the class ``language-<first word of the info string>``
- Indented code blocks and inline code spans get no class
- Fences nested inside lists or quotes stay part of the prose run
- Pass-through attributes are serialized to JSON once, here
"""

import json
from dataclasses import dataclass, field

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ..annotations.models import CodeElement


@dataclass(frozen=True)
class ProseSegment:
    """A run of ordinary markdown between code blocks."""

    markdown: str
    inline_code: tuple[CodeElement, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CodeSegment:
    """A top-level code block."""

    element: CodeElement
    fenced: bool = True


Segment = ProseSegment | CodeSegment


def fence_class_name(info: str) -> str:
    """Class string for a fenced block with the given info string."""
    words = info.split()
    return f"language-{words[0]}" if words else ""


def _serialize_attrs(token: Token) -> str:
    attrs = {str(key): value for key, value in token.attrs.items()}
    if token.map is not None:
        attrs["data-line"] = token.map[0]
    return json.dumps(attrs)


def _inline_code(tokens: list[Token]) -> tuple[CodeElement, ...]:
    found = []
    for token in tokens:
        if token.type != "inline" or not token.children:
            continue
        for child in token.children:
            if child.type == "code_inline":
                found.append(
                    CodeElement(
                        class_name="",
                        children=(child.content,),
                        props_json=_serialize_attrs(child),
                    )
                )
    return tuple(found)


class MarkdownSegmenter:
    """Segments assistant markdown into renderable pieces.

    Example:
        segmenter = MarkdownSegmenter()
        for segment in segmenter.segment(answer):
            ...
    """

    def __init__(self) -> None:
        self._md = MarkdownIt()

    def segment(self, text: str) -> list[Segment]:
        """Split ``text`` into prose and code segments, in order."""
        if not text.strip():
            return []

        lines = text.splitlines(keepends=True)
        tokens = self._md.parse(text)
        segments: list[Segment] = []
        prose_tokens: list[Token] = []
        prose_start: int | None = None
        prose_end = 0

        def flush() -> None:
            nonlocal prose_start
            if prose_start is not None:
                markdown = "".join(lines[prose_start:prose_end]).strip("\n")
                if markdown:
                    segments.append(
                        ProseSegment(markdown, _inline_code(prose_tokens))
                    )
            prose_tokens.clear()
            prose_start = None

        for token in tokens:
            is_code = token.level == 0 and token.type in ("fence", "code_block")
            if is_code:
                flush()
                fenced = token.type == "fence"
                segments.append(
                    CodeSegment(
                        element=CodeElement(
                            class_name=fence_class_name(token.info) if fenced else "",
                            children=(token.content,),
                            props_json=_serialize_attrs(token),
                        ),
                        fenced=fenced,
                    )
                )
                continue

            prose_tokens.append(token)
            if token.map is not None:
                if prose_start is None:
                    prose_start = token.map[0]
                prose_end = max(prose_end, token.map[1])

        flush()
        return segments


_default_segmenter: MarkdownSegmenter | None = None


def segment_markdown(text: str) -> list[Segment]:
    """Segment ``text`` with a shared parser instance."""
    global _default_segmenter
    if _default_segmenter is None:
        _default_segmenter = MarkdownSegmenter()
    return _default_segmenter.segment(text)

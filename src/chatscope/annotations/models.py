"""Data structures for code annotations and rendering strategies.

Hides the shape of a decoded annotation and of the strategy records that
leaf renderers consume. Everything here is built fresh per decode.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class AnnotationKind(str, Enum):
    """The five ways a code element can be rendered."""

    PLAIN_CODE = "plain_code"
    SYNTAX_BLOCK = "syntax_block"
    SOURCE_QUOTE = "source_quote"
    FILE_CHIP = "file_chip"
    COLOR_SWATCH = "color_swatch"


@dataclass(frozen=True)
class LineRange:
    """Zero-indexed, inclusive line range inside a source file."""

    start: int
    end: int

    @property
    def display_start(self) -> int:
        """1-indexed first line, as written in the annotation."""
        return self.start + 1

    @property
    def display_end(self) -> int:
        """1-indexed last line, as written in the annotation."""
        return self.end + 1

    def to_scroll_index(self) -> str:
        """Encode as ``"<start>_<end>"`` for the file viewer's scroll target."""
        return f"{self.start}_{self.end}"

    @classmethod
    def from_scroll_index(cls, value: str) -> "LineRange | None":
        """Inverse of ``to_scroll_index``; None if the value is malformed."""
        start, sep, end = value.partition("_")
        if not sep:
            return None
        try:
            return cls(int(start), int(end))
        except ValueError:
            return None

    def as_tuple(self) -> tuple[int, int]:
        return (self.start, self.end)


@dataclass(frozen=True)
class ElementNode:
    """A non-text child of a code element (emphasis, links, ...)."""

    tag: str
    children: tuple["str | ElementNode", ...] = ()

    @property
    def text(self) -> str:
        return "".join(
            child if isinstance(child, str) else child.text
            for child in self.children
        )


CodeChild = str | ElementNode


@dataclass(frozen=True)
class CodeElement:
    """A rendered ``code`` element as produced by the markdown pass.

    ``props_json`` carries pass-through attributes pre-serialized as JSON.
    """

    class_name: str = ""
    children: tuple[CodeChild, ...] = ()
    props_json: str = "{}"

    @property
    def single_text(self) -> str | None:
        """The content if it is exactly one plain-text child, else None."""
        if len(self.children) == 1 and isinstance(self.children[0], str):
            return self.children[0]
        return None

    @property
    def text(self) -> str:
        return "".join(
            child if isinstance(child, str) else child.text
            for child in self.children
        )


@dataclass(frozen=True)
class Annotation:
    """Decoded annotation of one code element."""

    kind: AnnotationKind
    language: str = ""
    path: str | None = None
    line_range: LineRange | None = None
    quote_type: str | None = None


@dataclass(frozen=True)
class RenderStrategy:
    """Base record handed to a leaf renderer."""

    annotation: Annotation

    @property
    def kind(self) -> AnnotationKind:
        return self.annotation.kind


@dataclass(frozen=True)
class PlainCodeStrategy(RenderStrategy):
    """Render the element unchanged."""

    element: CodeElement = field(default_factory=CodeElement)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ColorSwatchStrategy(PlainCodeStrategy):
    """Small color preview followed by the plain inline code."""

    color: str = ""


@dataclass(frozen=True)
class SyntaxBlockStrategy(RenderStrategy):
    """Syntax-highlighted code block with no file provenance."""

    code: str = ""
    language: str = ""


@dataclass(frozen=True)
class SourceQuoteStrategy(RenderStrategy):
    """Code quoted from a repository file, with breadcrumbs."""

    code: str = ""
    language: str = ""
    path: str = ""
    start_line: int | None = None  # Zero-indexed; None when unknown
    on_result_click: Callable[..., None] | None = None

    def open(self, highlight_color: str | None = None) -> None:
        """Open the quoted file at the quoted line."""
        if self.on_result_click is not None:
            self.on_result_click(self.path, self.start_line, highlight_color)


@dataclass(frozen=True)
class FileChipStrategy(RenderStrategy):
    """Compact file reference shown instead of the quoted code."""

    file_name: str = ""
    file_path: str = ""
    line_range: LineRange | None = None
    on_click: Callable[[], None] | None = None

    def activate(self) -> None:
        if self.on_click is not None:
            self.on_click()

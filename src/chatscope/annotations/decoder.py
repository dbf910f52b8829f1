"""Selects a rendering strategy for a single code element.

The decoder is stateless: it reads the class string, the children and the
caller flags, and returns a strategy record whose callbacks are wired to
the navigation collaborators it was given. It never navigates itself.

Dispatch, first match wins:
    A. block element (not inline) with a type or language tag and exactly
       one plain-text child: FileChip / SourceQuote for ``Quoted`` blocks,
       SyntaxBlock otherwise
    B. exactly one plain-text child that is a hex color: ColorSwatch
    C. anything else: PlainCode
"""

import json
from functools import lru_cache
from typing import Any, Protocol

from .grammar import is_hex_color, scan_class_string
from .models import (
    Annotation,
    AnnotationKind,
    CodeChild,
    CodeElement,
    ColorSwatchStrategy,
    FileChipStrategy,
    LineRange,
    PlainCodeStrategy,
    RenderStrategy,
    SourceQuoteStrategy,
    SyntaxBlockStrategy,
)


class CodeNavigation(Protocol):
    """Collaborators notified when a user activates a file reference."""

    def update_scroll_to_index(self, lines: str) -> None:
        ...

    def open_file_modal(
        self,
        path: str,
        start_line: int | None = None,
        highlight_color: str | None = None,
    ) -> None:
        ...

    def set_file_highlights(self, path: str, ranges: list[LineRange]) -> None:
        ...

    def set_hovered_lines(self, line_range: LineRange | None) -> None:
        ...


@lru_cache(maxsize=2048)
def decode_annotation(
    class_name: str,
    children: tuple[CodeChild, ...],
    inline: bool = False,
    hide_code: bool = False,
) -> Annotation:
    """Decode which strategy applies and the fields it needs.

    Pure function; the cache only saves repeated work across renders.

    Args:
        class_name: Class string of the code element
        children: Child nodes of the element
        inline: Element is inline code rather than a fenced block
        hide_code: Show quoted blocks as file chips instead of code

    Returns:
        Annotation with kind, language, path and zero-indexed line range
    """
    tokens = scan_class_string(class_name)
    single_text = (
        children[0] if len(children) == 1 and isinstance(children[0], str) else None
    )

    if not inline and tokens.has_block_tag and single_text is not None:
        language = tokens.language or ""
        if tokens.is_quoted:
            kind = AnnotationKind.FILE_CHIP if hide_code else AnnotationKind.SOURCE_QUOTE
            return Annotation(
                kind=kind,
                language=language,
                path=tokens.path,
                line_range=tokens.line_range,
                quote_type=tokens.quote_type,
            )
        return Annotation(
            kind=AnnotationKind.SYNTAX_BLOCK,
            language=language,
            path=tokens.path,
            line_range=tokens.line_range,
            quote_type=tokens.quote_type,
        )

    if single_text is not None and is_hex_color(single_text):
        return Annotation(kind=AnnotationKind.COLOR_SWATCH)

    return Annotation(kind=AnnotationKind.PLAIN_CODE)


def strip_trailing_newline(text: str) -> str:
    """Remove the single newline a fenced block ends with."""
    return text[:-1] if text.endswith("\n") else text


class AnnotationDecoder:
    """Turns code elements into strategy records for the leaf renderers.

    Example:
        decoder = AnnotationDecoder(navigation)
        strategy = decoder.decode(element, hide_code=True)
        if isinstance(strategy, FileChipStrategy):
            strategy.activate()
    """

    def __init__(self, navigation: CodeNavigation | None = None) -> None:
        self._navigation = navigation
        self._debug_callback: Any | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set debug callback for logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Decoder", message)

    def decode(
        self,
        element: CodeElement,
        inline: bool = False,
        hide_code: bool = False,
    ) -> RenderStrategy:
        """Select and populate the strategy for ``element``.

        Raises:
            json.JSONDecodeError: If the element's pass-through attributes
                are not valid JSON (only read for swatches and plain code)
        """
        annotation = decode_annotation(
            element.class_name, element.children, inline, hide_code
        )
        self._debug(
            "debug",
            f"{element.class_name or '<no class>'} -> {annotation.kind.value}",
        )

        if annotation.kind is AnnotationKind.FILE_CHIP:
            return self._file_chip(annotation)
        if annotation.kind is AnnotationKind.SOURCE_QUOTE:
            return SourceQuoteStrategy(
                annotation=annotation,
                code=strip_trailing_newline(element.children[0]),
                language=annotation.language,
                path=annotation.path or "",
                start_line=(
                    annotation.line_range.start
                    if annotation.line_range is not None
                    else None
                ),
                on_result_click=(
                    self._navigation.open_file_modal
                    if self._navigation is not None
                    else None
                ),
            )
        if annotation.kind is AnnotationKind.SYNTAX_BLOCK:
            return SyntaxBlockStrategy(
                annotation=annotation,
                code=strip_trailing_newline(element.children[0]),
                language=annotation.language,
            )

        attributes = json.loads(element.props_json)
        if annotation.kind is AnnotationKind.COLOR_SWATCH:
            return ColorSwatchStrategy(
                annotation=annotation,
                element=element,
                attributes=attributes,
                color=element.children[0],
            )
        return PlainCodeStrategy(
            annotation=annotation,
            element=element,
            attributes=attributes,
        )

    def _file_chip(self, annotation: Annotation) -> FileChipStrategy:
        line_range = annotation.line_range
        navigation = self._navigation

        def on_click() -> None:
            # Without a usable range there is nothing to scroll to.
            if navigation is None or line_range is None:
                return
            navigation.update_scroll_to_index(line_range.to_scroll_index())

        return FileChipStrategy(
            annotation=annotation,
            file_name=annotation.path or "",
            file_path=annotation.path or "",
            line_range=line_range,
            on_click=on_click,
        )

    def highlight(self, strategy: FileChipStrategy) -> None:
        """Mark a chip's lines in the shared highlight store."""
        if self._navigation is None or strategy.line_range is None:
            return
        self._navigation.set_file_highlights(
            strategy.file_path, [strategy.line_range]
        )

    def hover(self, strategy: FileChipStrategy | None) -> None:
        """Report the lines under the pointer, or None when it leaves."""
        if self._navigation is None:
            return
        self._navigation.set_hovered_lines(
            strategy.line_range if strategy is not None else None
        )

from .decoder import (
    AnnotationDecoder,
    CodeNavigation,
    decode_annotation,
    strip_trailing_newline,
)
from .grammar import (
    QUOTED_TYPE,
    ClassTokens,
    format_line_range,
    is_hex_color,
    parse_line_range,
    scan_class_string,
)
from .models import (
    Annotation,
    AnnotationKind,
    CodeChild,
    CodeElement,
    ColorSwatchStrategy,
    ElementNode,
    FileChipStrategy,
    LineRange,
    PlainCodeStrategy,
    RenderStrategy,
    SourceQuoteStrategy,
    SyntaxBlockStrategy,
)

__all__ = [
    "Annotation",
    "AnnotationDecoder",
    "AnnotationKind",
    "ClassTokens",
    "CodeChild",
    "CodeElement",
    "CodeNavigation",
    "ColorSwatchStrategy",
    "ElementNode",
    "FileChipStrategy",
    "LineRange",
    "PlainCodeStrategy",
    "QUOTED_TYPE",
    "RenderStrategy",
    "SourceQuoteStrategy",
    "SyntaxBlockStrategy",
    "decode_annotation",
    "format_line_range",
    "is_hex_color",
    "parse_line_range",
    "scan_class_string",
    "strip_trailing_newline",
]

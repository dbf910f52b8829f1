from .segments import (
    CodeSegment,
    MarkdownSegmenter,
    ProseSegment,
    Segment,
    fence_class_name,
    segment_markdown,
)

__all__ = [
    "CodeSegment",
    "MarkdownSegmenter",
    "ProseSegment",
    "Segment",
    "fence_class_name",
    "segment_markdown",
]

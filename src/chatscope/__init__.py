"""
chatscope: Renders code-search assistant transcripts with annotated code quotes.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .annotations import (
    Annotation,
    AnnotationDecoder,
    AnnotationKind,
    CodeElement,
    LineRange,
    decode_annotation,
)
from .transcript import (
    NIL_QUERY_ID,
    ChatTurn,
    ScrollFollowController,
    ServerTurn,
    Transcript,
    TranscriptContext,
    TurnProps,
    UserTurn,
    load_transcript,
    project_transcript,
)

__all__ = [
    "Annotation",
    "AnnotationDecoder",
    "AnnotationKind",
    "ChatTurn",
    "CodeElement",
    "LineRange",
    "NIL_QUERY_ID",
    "ScrollFollowController",
    "ServerTurn",
    "Transcript",
    "TranscriptContext",
    "TurnProps",
    "UserTurn",
    "decode_annotation",
    "load_transcript",
    "project_transcript",
]

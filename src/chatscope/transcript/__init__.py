from .follow import ScrollContainer, ScrollFollowController, ScrollMetrics
from .models import (
    ChatMessageAuthor,
    ChatTurn,
    LoadingStep,
    LoadingStepType,
    ServerTurn,
    Transcript,
    UserTurn,
    dump_transcript,
    is_server_turn,
    is_user_turn,
    load_transcript,
)
from .projection import (
    NIL_QUERY_ID,
    MessageEditCallback,
    TranscriptContext,
    TurnProps,
    effective_query_id,
    project_transcript,
    project_turn,
    server_turn_count,
    shows_inline_feedback,
)

__all__ = [
    "ChatMessageAuthor",
    "ChatTurn",
    "LoadingStep",
    "LoadingStepType",
    "MessageEditCallback",
    "NIL_QUERY_ID",
    "ScrollContainer",
    "ScrollFollowController",
    "ScrollMetrics",
    "ServerTurn",
    "Transcript",
    "TranscriptContext",
    "TurnProps",
    "UserTurn",
    "dump_transcript",
    "effective_query_id",
    "is_server_turn",
    "is_user_turn",
    "load_transcript",
    "project_transcript",
    "project_turn",
    "server_turn_count",
    "shows_inline_feedback",
]

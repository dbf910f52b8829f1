"""Per-turn projection of a transcript into renderer props.

Hides the cross-turn rules: which turn shows feedback affordances and
which query a user turn belongs to.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from .models import (
    ChatMessageAuthor,
    LoadingStep,
    ServerTurn,
    Transcript,
    UserTurn,
    is_server_turn,
)

NIL_QUERY_ID = UUID("00000000-0000-0000-0000-000000000000")

MessageEditCallback = Callable[[UUID, int], None]


@dataclass(frozen=True)
class TranscriptContext:
    """Transcript-wide values shared by every turn of one render pass."""

    thread_id: str
    repo_ref: str
    repo_name: str
    is_loading: bool = False
    is_history: bool = False


@dataclass(frozen=True)
class TurnProps:
    """Everything a message renderer needs for one turn."""

    index: int
    author: ChatMessageAuthor
    text: str
    is_loading: bool
    loading_steps: tuple[LoadingStep, ...]
    results: str | None
    error: str
    response_timestamp: datetime | None
    explained_file: str | None
    show_inline_feedback: bool
    query_id: UUID
    thread_id: str
    repo_ref: str
    repo_name: str
    is_history: bool


def effective_query_id(transcript: Transcript, index: int) -> UUID:
    """Return the query a turn refers to.

    Server turns own a query id. A user turn borrows the id of the server
    turn directly before it, or gets ``NIL_QUERY_ID`` when there is none.
    """
    turn = transcript[index]
    if is_server_turn(turn):
        return turn.query_id
    if index > 0:
        previous = transcript[index - 1]
        if is_server_turn(previous):
            return previous.query_id
    return NIL_QUERY_ID


def shows_inline_feedback(
    transcript: Transcript,
    index: int,
    transcript_loading: bool,
) -> bool:
    """Feedback is offered once, on the freshest completed live answer."""
    turn = transcript[index]
    return (
        is_server_turn(turn)
        and not turn.is_loading
        and not transcript_loading
        and index == len(transcript) - 1
        and not turn.is_from_history
    )


def project_turn(
    transcript: Transcript,
    index: int,
    context: TranscriptContext,
) -> TurnProps:
    """Derive the props for the turn at ``index``."""
    turn: UserTurn | ServerTurn = transcript[index]
    server = turn if is_server_turn(turn) else None

    return TurnProps(
        index=index,
        author=ChatMessageAuthor(turn.author),
        text=turn.text,
        is_loading=server is not None and server.is_loading,
        loading_steps=server.loading_steps if server is not None else (),
        results=server.results if server is not None else None,
        error=server.error if server is not None else "",
        response_timestamp=server.response_timestamp if server is not None else None,
        explained_file=server.explained_file if server is not None else None,
        show_inline_feedback=shows_inline_feedback(
            transcript, index, context.is_loading
        ),
        query_id=effective_query_id(transcript, index),
        thread_id=context.thread_id,
        repo_ref=context.repo_ref,
        repo_name=context.repo_name,
        is_history=context.is_history,
    )


def project_transcript(
    transcript: Transcript,
    context: TranscriptContext,
) -> Iterator[TurnProps]:
    """Yield props for every turn, in transcript order."""
    for index in range(len(transcript)):
        yield project_turn(transcript, index, context)


def server_turn_count(transcript: Transcript) -> int:
    """Number of assistant answers in the transcript."""
    return sum(1 for turn in transcript if isinstance(turn, ServerTurn))

"""Data models for conversation transcripts.

Hides how turns are represented: the author field is the discriminant of a
tagged union, so server-only fields only exist on ``ServerTurn``.
"""

from collections.abc import Sequence
from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, TypeGuard
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ChatMessageAuthor(str, Enum):
    """Who wrote a turn."""

    USER = "user"
    SERVER = "server"


class LoadingStepType(str, Enum):
    """Kind of search step reported while an answer is being produced."""

    QUERY = "query"  # Semantic search over the repository
    PATH = "path"    # Path search
    CODE = "code"    # Code search
    PROC = "proc"    # Reading file contents


class LoadingStep(BaseModel):
    """One progress step shown while the assistant is working."""

    model_config = ConfigDict(frozen=True)

    type: LoadingStepType = Field(description="Step kind")
    content: str = Field(description="Query or path the step operated on")
    display_value: str | None = Field(
        default=None,
        description="Optional human-friendly label"
    )


class UserTurn(BaseModel):
    """A message typed by the user."""

    model_config = ConfigDict(frozen=True)

    author: Literal["user"] = "user"
    text: str = Field(description="Message text")


class ServerTurn(BaseModel):
    """An answer produced by the assistant."""

    model_config = ConfigDict(frozen=True)

    author: Literal["server"] = "server"
    text: str = Field(default="", description="Streaming answer text")
    query_id: UUID = Field(description="Identifier of the query this answers")
    is_loading: bool = Field(default=False)
    loading_steps: tuple[LoadingStep, ...] = Field(default_factory=tuple)
    results: str | None = Field(
        default=None,
        description="Markdown conclusion of the answer"
    )
    error: str = Field(default="")
    response_timestamp: datetime | None = None
    explained_file: str | None = Field(
        default=None,
        description="Path of the file this answer explains, if any"
    )
    is_from_history: bool = Field(
        default=False,
        description="Turn was replayed from a stored conversation"
    )


ChatTurn = Annotated[UserTurn | ServerTurn, Field(discriminator="author")]

# New content replaces the whole tuple; a transcript is never mutated in place.
Transcript = tuple[ChatTurn, ...]

_transcript_adapter: TypeAdapter[Transcript] = TypeAdapter(Transcript)


def is_server_turn(turn: UserTurn | ServerTurn) -> TypeGuard[ServerTurn]:
    """Narrow a turn to the assistant variant."""
    return turn.author == ChatMessageAuthor.SERVER


def is_user_turn(turn: UserTurn | ServerTurn) -> TypeGuard[UserTurn]:
    """Narrow a turn to the user variant."""
    return turn.author == ChatMessageAuthor.USER


def load_transcript(data: str | bytes | Sequence[dict]) -> Transcript:
    """Validate raw transcript data into an immutable transcript.

    Args:
        data: JSON text, or already-decoded list of turn dictionaries

    Returns:
        Tuple of validated turns in the original order

    Raises:
        pydantic.ValidationError: If any turn is malformed
    """
    if isinstance(data, (str, bytes)):
        return _transcript_adapter.validate_json(data)
    return _transcript_adapter.validate_python(list(data))


def dump_transcript(transcript: Transcript) -> bytes:
    """Serialize a transcript to JSON."""
    return _transcript_adapter.dump_json(transcript, indent=2)

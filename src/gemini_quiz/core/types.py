"""Core data types that flow through the quiz pipeline.

This module defines the immutable data structures that represent a request as
it moves from an uploaded document to a validated set of questions. Each
record validates its invariants on construction so that invalid states cannot
travel further down the pipeline.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from pathlib import Path
import typing

from gemini_quiz.constants import OPTION_COUNT
from gemini_quiz.exceptions import EncodingError

# --- Minimal guard helpers ---


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


def _is_tuple_of(value: object, typ: type | tuple[type, ...]) -> bool:
    return isinstance(value, tuple) and all(isinstance(v, typ) for v in value)


# --- Result Monad for Explicit Error Handling ---

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Success[TSuccess]:
    """A successful pipeline result."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[TFailure]:
    """A failed pipeline result, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]

# --- Enumerations ---


class Transport(str, Enum):
    """How document content reaches the model."""

    INLINE = "inline"  # Bytes embedded in the generation request
    RESUMABLE = "resumable"  # Uploaded through the Files API first


class AssetState(str, Enum):
    """Processing state of a file uploaded to the Files API."""

    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


class PipelineState(str, Enum):
    """States of a single quiz pipeline run."""

    START = "start"
    PROMPT_BUILT = "prompt_built"
    TRANSPORT_CHOSEN = "transport_chosen"
    INLINE_READY = "inline_ready"
    ASSET_UPLOADING = "asset_uploading"
    ASSET_POLLING = "asset_polling"
    ASSET_READY = "asset_ready"
    REMOTE_CALL_ISSUED = "remote_call_issued"
    RESPONSE_RECEIVED = "response_received"
    NORMALIZED = "normalized"
    FAILED = "failed"


# --- Documents ---


@dataclasses.dataclass(frozen=True, slots=True)
class Document:
    """An uploaded document backed by a temporary file.

    Content is read lazily so that large files are only loaded when the inline
    transport actually needs their bytes.
    """

    path: Path
    mime_type: str
    display_name: str
    size_bytes: int

    def __post_init__(self) -> None:
        """Validate Document invariants."""
        _require(
            condition=isinstance(self.path, Path),
            message="must be a pathlib.Path",
            field_name="path",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.mime_type, str) and self.mime_type.strip() != "",
            message="must be a non-empty str",
            field_name="mime_type",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.display_name, str),
            message="must be a str",
            field_name="display_name",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.size_bytes, int) and self.size_bytes >= 0,
            message="must be an int >= 0",
            field_name="size_bytes",
        )

    @classmethod
    def from_file(
        cls, path: str | Path, mime_type: str, display_name: str | None = None
    ) -> Document:
        """Create a `Document` for an existing local file."""
        file_path = Path(path)
        return cls(
            path=file_path,
            mime_type=mime_type,
            display_name=display_name if display_name is not None else file_path.name,
            size_bytes=file_path.stat().st_size,
        )

    def read_bytes(self) -> bytes:
        """Return the document content.

        Raises:
            EncodingError: If the backing file vanished or cannot be read.
        """
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise EncodingError(f"Failed to read document {self.path}: {e}") from e


# --- Request parts ---


@dataclasses.dataclass(frozen=True, slots=True)
class TextPart:
    """A text instruction sent to the model."""

    text: str

    def __post_init__(self) -> None:
        """Validate TextPart invariants."""
        _require(
            condition=isinstance(self.text, str) and self.text.strip() != "",
            message="text must be a non-empty str",
            exc=TypeError,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class InlineDataPart:
    """Document bytes embedded directly in a generation request."""

    mime_type: str
    data: bytes

    def __post_init__(self) -> None:
        """Validate InlineDataPart invariants."""
        _require(
            condition=isinstance(self.mime_type, str) and self.mime_type.strip() != "",
            message="mime_type must be a non-empty str",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.data, bytes | bytearray),
            message="data must be bytes-like",
            exc=TypeError,
        )

    def __repr__(self) -> str:
        return f"InlineDataPart(mime_type={self.mime_type!r}, data=<{len(self.data)} bytes>)"


@dataclasses.dataclass(frozen=True, slots=True)
class FileRefPart:
    """Reference to a file already uploaded to the Files API."""

    uri: str
    mime_type: str

    def __post_init__(self) -> None:
        """Validate FileRefPart invariants."""
        _require(
            condition=isinstance(self.uri, str) and self.uri != "",
            message="uri must be a non-empty str",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.mime_type, str) and self.mime_type != "",
            message="mime_type must be a non-empty str",
            exc=TypeError,
        )


type APIPart = TextPart | InlineDataPart | FileRefPart


@dataclasses.dataclass(frozen=True, slots=True)
class GenerationRequest:
    """A prompt plus exactly one content reference.

    Either ``inline`` or ``file_ref`` is set, never both and never neither.
    """

    prompt: TextPart
    inline: InlineDataPart | None = None
    file_ref: FileRefPart | None = None

    def __post_init__(self) -> None:
        """Validate that exactly one content reference is present."""
        _require(
            condition=isinstance(self.prompt, TextPart),
            message="must be a TextPart",
            field_name="prompt",
            exc=TypeError,
        )
        _require(
            condition=(self.inline is None) != (self.file_ref is None),
            message="exactly one of inline or file_ref must be set",
            field_name="content",
        )

    @property
    def transport(self) -> Transport:
        return Transport.INLINE if self.inline is not None else Transport.RESUMABLE

    @property
    def content(self) -> InlineDataPart | FileRefPart:
        return typing.cast(
            "InlineDataPart | FileRefPart",
            self.inline if self.inline is not None else self.file_ref,
        )

    @property
    def parts(self) -> tuple[APIPart, ...]:
        """Ordered parts sent to the model: instruction first, then content."""
        return (self.prompt, self.content)


# --- Remote assets ---


@dataclasses.dataclass(frozen=True, slots=True)
class RemoteAsset:
    """A document uploaded out-of-band to the Files API."""

    name: str
    mime_type: str
    uri: str
    state: AssetState

    def __post_init__(self) -> None:
        """Validate RemoteAsset invariants."""
        _require(
            condition=isinstance(self.name, str) and self.name != "",
            message="must be a non-empty str",
            field_name="name",
            exc=TypeError,
        )
        _require(
            condition=isinstance(self.state, AssetState),
            message="must be an AssetState",
            field_name="state",
            exc=TypeError,
        )


# --- Quiz output ---


@dataclasses.dataclass(frozen=True, slots=True)
class Question:
    """A multiple-choice question with exactly four options."""

    text: str
    options: tuple[str, ...]
    correct_index: int

    def __post_init__(self) -> None:
        """Validate Question invariants."""
        _require(
            condition=isinstance(self.text, str) and self.text.strip() != "",
            message="must be a non-empty str",
            field_name="text",
            exc=TypeError,
        )
        _require(
            condition=_is_tuple_of(self.options, str),
            message="must be a tuple[str, ...]",
            field_name="options",
            exc=TypeError,
        )
        _require(
            condition=len(self.options) == OPTION_COUNT,
            message=f"must contain exactly {OPTION_COUNT} options",
            field_name="options",
        )
        _require(
            condition=isinstance(self.correct_index, int)
            and not isinstance(self.correct_index, bool)
            and 0 <= self.correct_index < len(self.options),
            message=f"must be an int in [0, {len(self.options) - 1}]",
            field_name="correct_index",
        )

    def to_api(self) -> dict[str, typing.Any]:
        """Render the public wire shape."""
        return {
            "question": self.text,
            "options": list(self.options),
            "answerIndex": self.correct_index,
        }


type QuestionSet = tuple[Question, ...]

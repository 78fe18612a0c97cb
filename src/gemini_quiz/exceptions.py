"""
Exceptions for the Gemini quiz generator
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gemini_quiz.core.types import PipelineState


class GeminiQuizError(Exception):
    """Base exception for Gemini quiz generation errors"""

    pass


class ConfigurationError(GeminiQuizError):
    """Raised when configuration values are missing or invalid"""

    pass


class QuizGenerationError(GeminiQuizError):
    """Base for failures raised while turning a document into a quiz.

    ``stage`` is filled in by the pipeline with the state it was in when the
    failure happened. ``public_message`` is safe to show to HTTP callers;
    ``str(error)`` carries the diagnostic detail and is only logged.
    """

    public_message = "Failed to generate quiz"

    def __init__(self, message: str, *, stage: PipelineState | None = None) -> None:
        super().__init__(message)
        self.stage = stage


class NoDocumentProvided(QuizGenerationError):  # noqa: N818
    """Raised when a request carries no document"""

    public_message = "No file was provided"


class UnsupportedContentError(QuizGenerationError):
    """Raised when the document type cannot be sent to the model"""

    public_message = "Only image and PDF documents are supported"


class EncodingError(QuizGenerationError):
    """Raised when document bytes cannot be read for submission"""

    public_message = "Failed to read the uploaded document"


class RemoteUploadError(QuizGenerationError):
    """Raised when the Files API rejects an upload or status query"""

    public_message = "Failed to upload the document for processing"


class RemoteProcessingError(QuizGenerationError):
    """Raised when an uploaded file fails remote processing"""

    public_message = "The document could not be processed"


class ProcessingTimeoutError(RemoteProcessingError):
    """Raised when an uploaded file stays in processing past the poll bound"""

    public_message = "Timed out waiting for the document to be processed"


class RemoteCallError(QuizGenerationError):
    """Raised when the generation call itself fails"""

    public_message = "Failed to generate content"


class ResponseFormatError(QuizGenerationError):
    """Raised when model output does not parse or validate as a quiz"""

    public_message = "The model returned an unusable quiz"

    def __init__(
        self,
        message: str,
        *,
        raw_text: str = "",
        cleaned_text: str = "",
        stage: PipelineState | None = None,
    ) -> None:
        super().__init__(message, stage=stage)
        self.raw_text = raw_text
        self.cleaned_text = cleaned_text


class PipelineError(QuizGenerationError):
    """Raised when a pipeline stage fails unexpectedly"""

    public_message = "Failed to generate quiz"

"""Gemini quiz generator: documents in, multiple-choice questions out."""

import importlib.metadata
import logging

from gemini_quiz.config import FrozenConfig, ResolvedConfig, resolve_config
from gemini_quiz.core.types import (
    AssetState,
    Document,
    Failure,
    GenerationRequest,
    PipelineState,
    Question,
    QuestionSet,
    RemoteAsset,
    Result,
    Success,
    Transport,
)
from gemini_quiz.exceptions import (
    ConfigurationError,
    EncodingError,
    GeminiQuizError,
    NoDocumentProvided,
    PipelineError,
    ProcessingTimeoutError,
    QuizGenerationError,
    RemoteCallError,
    RemoteProcessingError,
    RemoteUploadError,
    ResponseFormatError,
    UnsupportedContentError,
)
from gemini_quiz.executor import QuizPipeline, create_pipeline
from gemini_quiz.telemetry import TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("gemini-quiz")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Pipeline
    "QuizPipeline",
    "create_pipeline",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    # Core Types
    "Document",
    "GenerationRequest",
    "RemoteAsset",
    "AssetState",
    "Transport",
    "PipelineState",
    "Question",
    "QuestionSet",
    "Result",
    "Success",
    "Failure",
    # Exceptions
    "GeminiQuizError",
    "ConfigurationError",
    "QuizGenerationError",
    "NoDocumentProvided",
    "UnsupportedContentError",
    "EncodingError",
    "RemoteUploadError",
    "RemoteProcessingError",
    "ProcessingTimeoutError",
    "RemoteCallError",
    "ResponseFormatError",
    "PipelineError",
]

"""FastAPI application exposing the quiz pipeline.

``POST /generate`` accepts a multipart form with a single ``file`` field and
answers with a JSON array of questions. Failures are reported as
``{"error": "..."}`` with a non-2xx status; diagnostic detail stays in the logs.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from gemini_quiz.constants import SUPPORTED_MIME_PREFIXES, SUPPORTED_MIME_TYPES
from gemini_quiz.exceptions import (
    EncodingError,
    NoDocumentProvided,
    ProcessingTimeoutError,
    QuizGenerationError,
    RemoteCallError,
    RemoteProcessingError,
    RemoteUploadError,
    ResponseFormatError,
    UnsupportedContentError,
)
from gemini_quiz.executor import QuizPipeline, create_pipeline

from .models import ErrorOut, QuestionOut

if TYPE_CHECKING:
    from collections.abc import Coroutine

log = logging.getLogger(__name__)

# Upper bound on how long a cancelled request keeps the model call running
DISCONNECT_POLL_INTERVAL = 1.0  # seconds
CLIENT_CLOSED_REQUEST = 499

_STATUS_BY_ERROR: dict[type[QuizGenerationError], int] = {
    NoDocumentProvided: 400,
    UnsupportedContentError: 415,
    EncodingError: 500,
    ProcessingTimeoutError: 504,
    RemoteProcessingError: 502,
    RemoteUploadError: 502,
    RemoteCallError: 502,
    ResponseFormatError: 502,
}

router = APIRouter()


def status_for(error: QuizGenerationError) -> int:
    """HTTP status for an error, resolved through its class hierarchy."""
    for cls in type(error).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return 500


def is_supported_mime(mime_type: str) -> bool:
    return mime_type in SUPPORTED_MIME_TYPES or mime_type.startswith(
        SUPPORTED_MIME_PREFIXES
    )


async def _run_until_disconnected(
    request: Request,
    coro: Coroutine[Any, Any, Any],
    *,
    poll_interval: float | None = None,
) -> tuple[bool, Any]:
    """Run ``coro`` as a task and cancel it if the client goes away.

    Returns ``(True, result)`` on completion and ``(False, None)`` when the
    client disconnected first. The connection is checked every
    ``poll_interval`` seconds (``DISCONNECT_POLL_INTERVAL`` by default).
    """
    interval = DISCONNECT_POLL_INTERVAL if poll_interval is None else poll_interval
    task = asyncio.create_task(coro)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=interval)
            if done:
                return True, task.result()
            if await request.is_disconnected():
                log.info("Client disconnected; cancelling quiz generation")
                task.cancel()
                with suppress(asyncio.CancelledError):
                    await task
                return False, None
    finally:
        if not task.done():
            task.cancel()


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/generate",
    response_model=list[QuestionOut],
    responses={
        400: {"model": ErrorOut},
        415: {"model": ErrorOut},
        500: {"model": ErrorOut},
        502: {"model": ErrorOut},
        504: {"model": ErrorOut},
    },
)
async def generate(
    request: Request, file: UploadFile | None = File(default=None)
) -> Any:
    if file is None or not file.filename:
        raise NoDocumentProvided("Request has no file field")

    mime_type = file.content_type or "application/octet-stream"
    if not is_supported_mime(mime_type):
        raise UnsupportedContentError(f"Unsupported content type: {mime_type}")

    pipeline: QuizPipeline = request.app.state.pipeline
    document = await pipeline.storage.save_upload(file, file.filename, mime_type)
    try:
        completed, questions = await _run_until_disconnected(
            request, pipeline.run(document)
        )
    except asyncio.CancelledError:
        # The pipeline task may not have started; release is idempotent
        pipeline.storage.release(document)
        raise

    if not completed:
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    return [QuestionOut.from_question(q) for q in questions]


async def _quiz_error_handler(request: Request, error: QuizGenerationError) -> JSONResponse:
    status = status_for(error)
    log.warning(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        status,
        type(error).__name__,
        error,
    )
    return JSONResponse(status_code=status, content={"error": error.public_message})


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    log.warning(
        "%s %s -> 400 invalid form: %s", request.method, request.url.path, exc.errors()
    )
    return JSONResponse(
        status_code=400, content={"error": NoDocumentProvided.public_message}
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Failed to generate content"})


def create_app(pipeline: QuizPipeline | None = None) -> FastAPI:
    """Build the application around ``pipeline`` (resolved from env when omitted)."""
    app = FastAPI(title="gemini-quiz")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.pipeline = pipeline or create_pipeline()
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(QuizGenerationError, _quiz_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
    return app

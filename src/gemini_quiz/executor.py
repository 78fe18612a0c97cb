"""The primary entry point for turning a document into a quiz.

`QuizPipeline` runs one document through prompt building, transport selection,
submission, the generation call and normalization. Each run walks the states
in `PipelineState`; the first failure ends the run and is returned as a
`Failure` carrying the stage it happened in. The document's temp storage is
released exactly once on every exit path, cancellation included.
"""

from __future__ import annotations

import logging
from time import perf_counter
from typing import TYPE_CHECKING

from gemini_quiz.config import FrozenConfig, resolve_config
from gemini_quiz.core.types import (
    Failure,
    PipelineState,
    QuestionSet,
    Result,
    Success,
    Transport,
)
from gemini_quiz.exceptions import (
    PipelineError,
    QuizGenerationError,
    RemoteCallError,
    ResponseFormatError,
)
from gemini_quiz.files.storage import TempStorage
from gemini_quiz.pipeline.adapters.mock import MockAdapter
from gemini_quiz.pipeline.normalizer import ResponseNormalizer
from gemini_quiz.pipeline.prompts import build_quiz_prompt
from gemini_quiz.pipeline.submitters import InlineSubmitter, ResumableSubmitter
from gemini_quiz.pipeline.transport import select_transport
from gemini_quiz.telemetry import LoggingReporter, TelemetryContext

if TYPE_CHECKING:
    from gemini_quiz.core.types import Document, GenerationRequest
    from gemini_quiz.pipeline.adapters.base import GenerationAdapter
    from gemini_quiz.telemetry import TelemetryContextProtocol

log = logging.getLogger(__name__)


class _Run:
    """Mutable state of a single pipeline run."""

    __slots__ = ("document", "state", "started")

    def __init__(self, document: Document) -> None:
        self.document = document
        self.state = PipelineState.START
        self.started = perf_counter()

    def advance(self, state: PipelineState) -> None:
        log.debug(
            "%s: %s -> %s", self.document.display_name, self.state.value, state.value
        )
        self.state = state


class QuizPipeline:
    """Executes one document through the quiz generation stages.

    Instances hold only collaborators and configuration, so a single pipeline
    can serve concurrent requests.
    """

    def __init__(
        self,
        config: FrozenConfig,
        adapter: GenerationAdapter,
        *,
        storage: TempStorage | None = None,
        resumable: ResumableSubmitter | None = None,
        telemetry: TelemetryContextProtocol | None = None,
    ) -> None:
        self.config = config
        self.adapter = adapter
        self.storage = storage or TempStorage(config.upload_dir)
        self.inline = InlineSubmitter()
        self.resumable = resumable or ResumableSubmitter(
            adapter,
            poll_interval=config.poll_interval_seconds,
            max_poll_attempts=config.max_poll_attempts,
        )
        self.normalizer = ResponseNormalizer()
        self._telemetry: TelemetryContextProtocol = telemetry or TelemetryContext()

    async def execute(
        self, document: Document
    ) -> Result[QuestionSet, QuizGenerationError]:
        """Run the pipeline for ``document`` and release its storage.

        Returns:
            Success with the questions, or Failure with the stage error.
        """
        run = _Run(document)
        with self.storage.claim(document):
            try:
                questions = await self._run_stages(run)
            except QuizGenerationError as e:
                return Failure(self._fail(run, e))
            except Exception as e:
                error = PipelineError(f"Unexpected failure in {run.state.value}: {e}")
                error.__cause__ = e
                return Failure(self._fail(run, error))

        log.info(
            "Generated %d questions from %s in %.2fs",
            len(questions),
            document.display_name,
            perf_counter() - run.started,
        )
        return Success(questions)

    async def run(self, document: Document) -> QuestionSet:
        """Like `execute`, but raises the failure's error."""
        result = await self.execute(document)
        if isinstance(result, Failure):
            raise result.error
        return result.value

    # --- Stages ---

    async def _run_stages(self, run: _Run) -> QuestionSet:
        document = run.document
        ctx = self._telemetry

        prompt = build_quiz_prompt(self.config.question_count)
        run.advance(PipelineState.PROMPT_BUILT)

        transport = select_transport(
            document.size_bytes, self.config.inline_threshold_bytes
        )
        run.advance(PipelineState.TRANSPORT_CHOSEN)
        ctx.gauge("quiz.document_bytes", document.size_bytes, transport=transport.value)
        log.info(
            "Submitting %s (%s, %d bytes) via %s transport",
            document.display_name,
            document.mime_type,
            document.size_bytes,
            transport.value,
        )

        with ctx("quiz.submit", transport=transport.value):
            request = await self._prepare(run, transport, prompt)

        run.advance(PipelineState.REMOTE_CALL_ISSUED)
        with ctx("quiz.generate", model=self.config.model):
            raw_text = await self._generate(request)
        run.advance(PipelineState.RESPONSE_RECEIVED)

        with ctx("quiz.normalize"):
            questions = self._normalize(raw_text)
        run.advance(PipelineState.NORMALIZED)
        ctx.count("quiz.questions", len(questions))
        return questions

    async def _prepare(
        self, run: _Run, transport: Transport, prompt: str
    ) -> GenerationRequest:
        if transport is Transport.INLINE:
            request = self.inline.prepare(run.document, prompt)
            run.advance(PipelineState.INLINE_READY)
            return request
        return await self.resumable.prepare(run.document, prompt, on_state=run.advance)

    async def _generate(self, request: GenerationRequest) -> str:
        try:
            return await self.adapter.generate(
                model_name=self.config.model, parts=request.parts
            )
        except Exception as e:
            raise RemoteCallError(f"Content generation failed: {e}") from e

    def _normalize(self, raw_text: str) -> QuestionSet:
        if not raw_text or not raw_text.strip():
            raise ResponseFormatError("Model returned an empty response")
        return self.normalizer.normalize(
            raw_text, expected_count=self.config.question_count
        )

    def _fail(self, run: _Run, error: QuizGenerationError) -> QuizGenerationError:
        error.stage = run.state
        run.advance(PipelineState.FAILED)
        self._telemetry.count("pipeline.error", stage=error.stage.value)
        if isinstance(error, ResponseFormatError):
            log.error(
                "Quiz generation failed for %s at %s: %s\nraw response: %r",
                run.document.display_name,
                error.stage.value,
                error,
                error.raw_text,
            )
        else:
            log.error(
                "Quiz generation failed for %s at %s: %s",
                run.document.display_name,
                error.stage.value,
                error,
                exc_info=error.__cause__ is not None,
            )
        return error


def create_pipeline(
    config: FrozenConfig | None = None,
    *,
    adapter: GenerationAdapter | None = None,
) -> QuizPipeline:
    """Create a pipeline with optional configuration.

    Without a configuration, one is resolved from the environment. Without an
    adapter, the Google adapter is used when ``use_real_api`` is set and the
    deterministic mock otherwise. Stage timings go to a `LoggingReporter`
    when telemetry is switched on with ``GEMINI_TELEMETRY=1``.
    """
    final_config = config if config is not None else resolve_config().to_frozen()

    if adapter is None:
        if final_config.use_real_api:
            # Defer the SDK import until it is needed
            from gemini_quiz.pipeline.adapters.gemini import GoogleGenAIAdapter

            adapter = GoogleGenAIAdapter(str(final_config.api_key))
        else:
            adapter = MockAdapter()

    return QuizPipeline(
        final_config, adapter, telemetry=TelemetryContext(LoggingReporter())
    )

"""Builders for the generation request, one per transport.

`InlineSubmitter` embeds document bytes in the request. `ResumableSubmitter`
uploads the document through the Files API, waits for processing to finish and
references the uploaded file by URI.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
import logging
from typing import TYPE_CHECKING

from gemini_quiz.constants import FILE_POLL_INTERVAL, MAX_POLL_ATTEMPTS
from gemini_quiz.core.types import (
    AssetState,
    FileRefPart,
    GenerationRequest,
    InlineDataPart,
    PipelineState,
    RemoteAsset,
    TextPart,
)
from gemini_quiz.exceptions import (
    ProcessingTimeoutError,
    RemoteProcessingError,
    RemoteUploadError,
)

if TYPE_CHECKING:
    from gemini_quiz.core.types import Document
    from gemini_quiz.pipeline.adapters.base import GenerationAdapter

log = logging.getLogger(__name__)

type StateCallback = Callable[[PipelineState], None]


def _ignore_state(_: PipelineState) -> None:
    return None


class InlineSubmitter:
    """Embeds the document directly in the generation request."""

    def prepare(self, document: Document, prompt: str) -> GenerationRequest:
        """Read the document and build an inline request.

        Raises:
            EncodingError: If the document bytes cannot be read.
        """
        data = document.read_bytes()
        log.debug("Inline payload for %s: %d bytes", document.display_name, len(data))
        return GenerationRequest(
            prompt=TextPart(text=prompt),
            inline=InlineDataPart(mime_type=document.mime_type, data=data),
        )


class ResumableSubmitter:
    """Uploads the document out-of-band and polls until it is usable.

    The remote file is not deleted afterwards; the Files API expires it.
    """

    def __init__(
        self,
        adapter: GenerationAdapter,
        *,
        poll_interval: float = FILE_POLL_INTERVAL,
        max_poll_attempts: int | None = MAX_POLL_ATTEMPTS,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.adapter = adapter
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self._sleep = sleep

    async def prepare(
        self,
        document: Document,
        prompt: str,
        *,
        on_state: StateCallback = _ignore_state,
    ) -> GenerationRequest:
        """Upload, wait for processing, and build a file-reference request.

        Raises:
            RemoteUploadError: If the upload or a status query fails.
            RemoteProcessingError: If the file ends up in the failed state.
            ProcessingTimeoutError: If processing outlasts ``max_poll_attempts``.
        """
        on_state(PipelineState.ASSET_UPLOADING)
        try:
            asset = await self.adapter.upload_file(
                document.path,
                mime_type=document.mime_type,
                display_name=document.display_name,
            )
        except Exception as e:
            raise RemoteUploadError(
                f"Failed to upload file {document.display_name}: {e}"
            ) from e

        on_state(PipelineState.ASSET_POLLING)
        asset = await self._wait_for_processing(asset)

        if asset.state is AssetState.FAILED:
            raise RemoteProcessingError(f"File processing failed: {asset.name}")

        on_state(PipelineState.ASSET_READY)
        return GenerationRequest(
            prompt=TextPart(text=prompt),
            file_ref=FileRefPart(uri=asset.uri, mime_type=document.mime_type),
        )

    async def _wait_for_processing(self, asset: RemoteAsset) -> RemoteAsset:
        """Re-query the asset every ``poll_interval`` seconds while it is pending."""
        attempts = 0
        while asset.state is AssetState.PENDING:
            if self.max_poll_attempts is not None and attempts >= self.max_poll_attempts:
                raise ProcessingTimeoutError(
                    f"File processing timeout: {asset.name} still pending after "
                    f"{attempts} status checks"
                )

            await self._sleep(self.poll_interval)
            try:
                asset = await self.adapter.get_file(asset.name)
            except Exception as e:
                raise RemoteUploadError(
                    f"Failed to query file state for {asset.name}: {e}"
                ) from e
            attempts += 1
            log.debug("Poll %d for %s: %s", attempts, asset.name, asset.state.value)

        return asset

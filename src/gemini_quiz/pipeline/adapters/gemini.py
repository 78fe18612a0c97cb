"""Google GenAI adapter.

Wraps the async surface of the ``google-genai`` SDK (``client.aio``) behind
the `GenerationAdapter` protocol. SDK types never leave this module.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

from google import genai
from google.genai import types

from gemini_quiz.core.types import (
    AssetState,
    FileRefPart,
    InlineDataPart,
    RemoteAsset,
    TextPart,
)

if TYPE_CHECKING:
    from gemini_quiz.core.types import APIPart

log = logging.getLogger(__name__)

_STATE_MAP = {
    "STATE_UNSPECIFIED": AssetState.PENDING,
    "PROCESSING": AssetState.PENDING,
    "ACTIVE": AssetState.READY,
    "FAILED": AssetState.FAILED,
}


class GoogleGenAIAdapter:
    """Gemini Developer API adapter built on ``genai.Client``."""

    def __init__(self, api_key: str, *, client: genai.Client | None = None) -> None:
        self._client = client or genai.Client(api_key=api_key)

    async def upload_file(
        self,
        path: os.PathLike[str] | str,
        *,
        mime_type: str,
        display_name: str,
    ) -> RemoteAsset:
        uploaded = await self._client.aio.files.upload(
            file=os.fspath(path),
            config=types.UploadFileConfig(
                mime_type=mime_type, display_name=display_name
            ),
        )
        log.debug("Uploaded %s as %s", display_name, uploaded.name)
        return self._to_asset(uploaded, mime_type)

    async def get_file(self, name: str) -> RemoteAsset:
        current = await self._client.aio.files.get(name=name)
        return self._to_asset(current, None)

    async def generate(self, *, model_name: str, parts: tuple[APIPart, ...]) -> str:
        response = await self._client.aio.models.generate_content(
            model=model_name,
            contents=[self._to_sdk_part(p) for p in parts],
        )
        return response.text or ""

    # --- Conversions ---

    def _to_sdk_part(self, part: APIPart) -> types.Part:
        if isinstance(part, TextPart):
            return types.Part.from_text(text=part.text)
        if isinstance(part, InlineDataPart):
            return types.Part.from_bytes(data=bytes(part.data), mime_type=part.mime_type)
        if isinstance(part, FileRefPart):
            return types.Part.from_uri(file_uri=part.uri, mime_type=part.mime_type)
        raise TypeError(f"Unsupported part type: {type(part).__name__}")

    def _to_asset(self, file: Any, fallback_mime: str | None) -> RemoteAsset:
        state_name = getattr(file.state, "name", str(file.state or "STATE_UNSPECIFIED"))
        return RemoteAsset(
            name=file.name,
            mime_type=file.mime_type or fallback_mime or "application/octet-stream",
            uri=file.uri or "",
            state=_STATE_MAP.get(state_name, AssetState.PENDING),
        )

"""Provider adapter protocol.

Adapters translate the library's neutral parts and asset records to and from a
provider SDK. Every method is a coroutine so that uploads, status queries and
generation calls suspend instead of blocking other requests.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gemini_quiz.core.types import APIPart, RemoteAsset


@runtime_checkable
class GenerationAdapter(Protocol):
    """Minimal surface the quiz pipeline needs from a model provider."""

    async def upload_file(
        self,
        path: os.PathLike[str] | str,
        *,
        mime_type: str,
        display_name: str,
    ) -> RemoteAsset:
        """Upload a local file out-of-band and return its asset record."""
        ...

    async def get_file(self, name: str) -> RemoteAsset:
        """Return the current state of a previously uploaded asset."""
        ...

    async def generate(self, *, model_name: str, parts: tuple[APIPart, ...]) -> str:
        """Issue one generation call and return the response text."""
        ...

"""Deterministic adapter used for tests and examples (no network)."""

from __future__ import annotations

import json
import os
import re
from typing import TYPE_CHECKING, Any

from gemini_quiz.constants import DEFAULT_QUESTION_COUNT, OPTION_COUNT
from gemini_quiz.core.types import AssetState, FileRefPart, RemoteAsset, TextPart

if TYPE_CHECKING:
    from gemini_quiz.core.types import APIPart

_COUNT_PATTERN = re.compile(r"exactly (\d+) questions")


class MockAdapter:
    """Echo-style adapter that always answers with a well-formed quiz.

    Uploaded assets report ``pending`` for ``polls_until_ready`` status queries,
    then ``ready``. The response is wrapped in a ```json fence on purpose, the
    way real models often answer.
    """

    def __init__(self, *, polls_until_ready: int = 0) -> None:
        self.polls_until_ready = polls_until_ready
        self.calls: list[tuple[str, Any]] = []
        self._polls: dict[str, int] = {}
        self._mime_types: dict[str, str] = {}

    async def upload_file(
        self,
        path: os.PathLike[str] | str,
        *,
        mime_type: str,
        display_name: str,
    ) -> RemoteAsset:
        self.calls.append(("upload_file", os.fspath(path)))
        name = f"files/mock-{len(self._polls)}"
        self._polls[name] = 0
        self._mime_types[name] = mime_type
        return RemoteAsset(
            name=name,
            mime_type=mime_type,
            uri=f"mock://uploaded/{name}",
            state=self._state(name),
        )

    async def get_file(self, name: str) -> RemoteAsset:
        self.calls.append(("get_file", name))
        self._polls[name] += 1
        return RemoteAsset(
            name=name,
            mime_type=self._mime_types[name],
            uri=f"mock://uploaded/{name}",
            state=self._state(name),
        )

    async def generate(self, *, model_name: str, parts: tuple[APIPart, ...]) -> str:
        self.calls.append(("generate", model_name))
        prompt = next((p.text for p in parts if isinstance(p, TextPart)), "")
        match = _COUNT_PATTERN.search(prompt)
        count = int(match.group(1)) if match else DEFAULT_QUESTION_COUNT
        source = next(
            (p.uri for p in parts if isinstance(p, FileRefPart)), "inline document"
        )
        questions = [
            {
                "question": f"Question {i} about {source}?",
                "options": [f"Option {chr(65 + j)}" for j in range(OPTION_COUNT)],
                "correctAnswer": i % OPTION_COUNT,
            }
            for i in range(1, count + 1)
        ]
        return "```json\n" + json.dumps({"questions": questions}, indent=2) + "\n```"

    def _state(self, name: str) -> AssetState:
        if self._polls[name] >= self.polls_until_ready:
            return AssetState.READY
        return AssetState.PENDING

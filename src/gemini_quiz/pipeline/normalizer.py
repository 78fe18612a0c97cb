"""Conversion of raw model text into a validated `QuestionSet`.

The model is asked for bare JSON but often wraps it in a Markdown code fence.
Fences are stripped, the remainder is parsed exactly once, and the whole batch
is validated before any `Question` is built: one bad entry rejects everything.
"""

from __future__ import annotations

import json
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gemini_quiz.constants import OPTION_COUNT
from gemini_quiz.core.types import Question, QuestionSet
from gemini_quiz.exceptions import ResponseFormatError

log = logging.getLogger(__name__)

_LEADING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` / ```json fence and trim whitespace."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


class _RawQuestion(BaseModel):
    """One question as the model writes it."""

    model_config = ConfigDict(strict=True, extra="ignore")

    question: str = Field(min_length=1)
    options: list[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    correctAnswer: int = Field(ge=0, le=OPTION_COUNT - 1)  # noqa: N815


class _RawQuiz(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    questions: list[_RawQuestion] = Field(min_length=1)


class ResponseNormalizer:
    """Parses and validates model output into canonical questions."""

    def normalize(self, raw_text: str, expected_count: int | None = None) -> QuestionSet:
        """Return the questions encoded in ``raw_text``.

        Raises:
            ResponseFormatError: If the text is not JSON or any entry is invalid.
                Carries both the raw and the cleaned text for diagnostics.
        """
        cleaned = strip_code_fences(raw_text)

        try:
            payload = json.loads(cleaned)
        except json.JSONDecodeError as e:
            raise ResponseFormatError(
                f"Response is not valid JSON: {e}",
                raw_text=raw_text,
                cleaned_text=cleaned,
            ) from e

        try:
            quiz = _RawQuiz.model_validate(payload)
        except ValidationError as e:
            raise ResponseFormatError(
                f"Response does not match the quiz schema: {e}",
                raw_text=raw_text,
                cleaned_text=cleaned,
            ) from e

        if expected_count is not None and len(quiz.questions) != expected_count:
            log.warning(
                "Model returned %d questions, %d were requested",
                len(quiz.questions),
                expected_count,
            )

        try:
            return tuple(
                Question(
                    text=item.question,
                    options=tuple(item.options),
                    correct_index=item.correctAnswer,
                )
                for item in quiz.questions
            )
        except (TypeError, ValueError) as e:
            raise ResponseFormatError(
                f"Response contains an invalid question: {e}",
                raw_text=raw_text,
                cleaned_text=cleaned,
            ) from e

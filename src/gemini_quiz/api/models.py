"""Wire models for the HTTP API."""

from pydantic import BaseModel, Field

from gemini_quiz.constants import OPTION_COUNT
from gemini_quiz.core.types import Question


class QuestionOut(BaseModel):
    """A quiz question as returned to HTTP callers."""

    question: str
    options: list[str] = Field(min_length=OPTION_COUNT, max_length=OPTION_COUNT)
    answerIndex: int = Field(ge=0, le=OPTION_COUNT - 1)  # noqa: N815

    @classmethod
    def from_question(cls, question: Question) -> "QuestionOut":
        return cls.model_validate(question.to_api())


class ErrorOut(BaseModel):
    error: str

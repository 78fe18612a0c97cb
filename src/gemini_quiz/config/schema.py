"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment and programmatic overrides into the correct types
with proper defaults.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_quiz.constants import (
    DEFAULT_MODEL,
    DEFAULT_QUESTION_COUNT,
    FILE_POLL_INTERVAL,
    INLINE_SIZE_THRESHOLD,
    MAX_POLL_ATTEMPTS,
)


class QuizSettings(BaseSettings):
    """Pydantic settings schema for the quiz generator.

    Integrates with environment variables using the GEMINI_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        env_file=None,  # Only used when explicitly requested
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
    )

    model: str = Field(
        default=DEFAULT_MODEL,
        description="Gemini model identifier",
        min_length=1,
    )

    use_real_api: bool = Field(
        default=False,
        description="Call the Gemini API instead of the deterministic mock",
    )

    question_count: int = Field(
        default=DEFAULT_QUESTION_COUNT,
        description="Number of questions requested from the model",
        ge=1,
    )

    inline_threshold_bytes: int = Field(
        default=INLINE_SIZE_THRESHOLD,
        description="Largest document sent inline; larger ones use the Files API",
        ge=0,
    )

    poll_interval_seconds: float = Field(
        default=FILE_POLL_INTERVAL,
        description="Delay between Files API status queries",
        gt=0,
    )

    max_poll_attempts: int | None = Field(
        default=MAX_POLL_ATTEMPTS,
        description="Status queries before giving up; None waits indefinitely",
        ge=1,
    )

    upload_dir: Path | None = Field(
        default=None,
        description="Directory for spooled uploads (system temp dir when unset)",
    )

    @field_validator("max_poll_attempts", "upload_dir", mode="before")
    @classmethod
    def parse_optional(cls, v: Any) -> Any:
        """Treat empty and "none" strings from the environment as unset."""
        if isinstance(v, str) and v.strip().lower() in ("", "none"):
            return None
        return v

    @model_validator(mode="after")
    def validate_api_key_requirement(self) -> "QuizSettings":
        """Ensure api_key is provided when use_real_api is True."""
        if self.use_real_api and not self.api_key:
            raise ValueError(
                "api_key is required when use_real_api=True. "
                "Set GEMINI_API_KEY or pass it programmatically."
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary keyed by field name."""
        return {name: getattr(self, name) for name in type(self).model_fields}

"""Core configuration data types.

Configuration follows a resolve-once, freeze-then-flow pattern: values are
merged from their sources into a `ResolvedConfig` that remembers where each
field came from, then frozen into the `FrozenConfig` handed to the pipeline.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]

_FIELD_ORDER = (
    "api_key",
    "model",
    "use_real_api",
    "question_count",
    "inline_threshold_bytes",
    "poll_interval_seconds",
    "max_poll_attempts",
    "upload_dir",
)


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources, before freezing."""

    api_key: str | None
    model: str
    use_real_api: bool
    question_count: int
    inline_threshold_bytes: int
    poll_interval_seconds: float
    max_poll_attempts: int | None
    upload_dir: Path | None

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"ResolvedConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_real_api={self.use_real_api!r}, "
            f"question_count={self.question_count!r}, "
            f"inline_threshold_bytes={self.inline_threshold_bytes!r}, "
            f"poll_interval_seconds={self.poll_interval_seconds!r}, "
            f"max_poll_attempts={self.max_poll_attempts!r}, "
            f"upload_dir={self.upload_dir!r}, origin={dict(self.origin)!r})"
        )

    def __repr__(self) -> str:
        """Repr with redacted API key for safe debugging."""
        return self.__str__()

    def to_frozen(self) -> "FrozenConfig":
        """Convert to the immutable configuration used in the pipeline."""
        values = self._asdict()
        values.pop("origin")
        return FrozenConfig(**values)

    def audit(self) -> str:
        """Report the origin of each field, with the API key redacted."""
        lines = []
        for field in _FIELD_ORDER:
            if field not in self.origin:
                continue
            origin = self.origin[field]
            value = getattr(self, field)
            if field == "api_key":
                value_display = f"{origin}:<redacted>" if value else f"{origin}:None"
            elif origin == "env":
                value_display = f"env:GEMINI_{field.upper()}={value}"
            else:
                value_display = f"{origin}:{value}"
            lines.append(f"{field}: {value_display}")
        return "\n".join(lines)


@dataclass(frozen=True)
class FrozenConfig:
    """Immutable configuration attached to a pipeline.

    Any attempt to modify this object will raise an exception.
    """

    api_key: str | None
    model: str
    use_real_api: bool
    question_count: int
    inline_threshold_bytes: int
    poll_interval_seconds: float
    max_poll_attempts: int | None
    upload_dir: Path | None

    def __str__(self) -> str:
        """String representation with redacted API key for safe logging."""
        api_key_display = "[REDACTED]" if self.api_key else None
        return (
            f"FrozenConfig(api_key={api_key_display!r}, model={self.model!r}, "
            f"use_real_api={self.use_real_api!r}, "
            f"question_count={self.question_count!r}, "
            f"inline_threshold_bytes={self.inline_threshold_bytes!r}, "
            f"poll_interval_seconds={self.poll_interval_seconds!r}, "
            f"max_poll_attempts={self.max_poll_attempts!r}, "
            f"upload_dir={self.upload_dir!r})"
        )

    def __repr__(self) -> str:
        """Representation with redacted API key for safe debugging."""
        return self.__str__()

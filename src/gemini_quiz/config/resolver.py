"""Configuration resolution with precedence handling.

Merges configuration according to the documented precedence order:
Programmatic > Environment > Defaults
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from gemini_quiz.exceptions import ConfigurationError

from .schema import QuizSettings
from .types import ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "GEMINI_"


class ConfigResolver:
    """Resolves configuration from multiple sources with proper precedence."""

    def resolve(
        self,
        programmatic: dict[str, Any] | None = None,
        *,
        use_env_file: str | Path | None = None,
    ) -> ResolvedConfig:
        """Resolve configuration from all sources with proper precedence.

        Args:
            programmatic: Programmatic overrides (highest precedence). Unknown
                fields are ignored.
            use_env_file: Optional .env file loaded into the environment before
                GEMINI_* variables are read. Existing variables win.

        Returns:
            ResolvedConfig with merged values and source tracking.

        Raises:
            ConfigurationError: If the env file is missing or validation fails.
        """
        origins: dict[str, ConfigOrigin] = {}
        merged: dict[str, Any] = {}

        # Step 1: schema defaults
        for field, info in QuizSettings.model_fields.items():
            merged[field] = info.default
            origins[field] = "default"

        # Step 2: environment variables
        if use_env_file is not None:
            env_path = Path(use_env_file)
            if not env_path.exists():
                raise ConfigurationError(f"Environment file not found: {env_path}")
            load_dotenv(env_path, override=False)

        for field, value in self._read_env().items():
            merged[field] = value
            origins[field] = "env"

        # Step 3: programmatic overrides
        for field, value in (programmatic or {}).items():
            if field in merged:
                merged[field] = value
                origins[field] = "programmatic"
            else:
                log.debug("Ignoring unknown configuration field: %s", field)

        # Step 4: validate the merged result
        try:
            final = QuizSettings(**merged).to_dict()
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        return ResolvedConfig(**final, origin=origins)

    def _read_env(self) -> dict[str, str]:
        found = {}
        for field in QuizSettings.model_fields:
            env_var = f"{ENV_PREFIX}{field.upper()}"
            if env_var in os.environ:
                found[field] = os.environ[env_var]
        return found


_resolver = ConfigResolver()


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Example:
        config = resolve_config({"question_count": 12}).to_frozen()
    """
    return _resolver.resolve(programmatic, use_env_file=use_env_file)

"""Configuration management for the quiz generator.

Key components:
- ResolvedConfig: Post-resolution configuration with audit metadata
- FrozenConfig: Immutable configuration for pipeline execution
- SourceMap: Audit tracking of configuration value origins
"""

from .resolver import ConfigResolver, resolve_config
from .schema import QuizSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "resolve_config",
    "ConfigResolver",
    "QuizSettings",
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
]

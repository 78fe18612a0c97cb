"""Provider adapters for the quiz pipeline.

The real Google adapter is imported lazily by ``create_pipeline`` so that the
SDK is only loaded when ``use_real_api`` is enabled.
"""

from .base import GenerationAdapter
from .mock import MockAdapter

__all__ = ["GenerationAdapter", "MockAdapter"]

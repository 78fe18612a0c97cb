"""Choice between inline and Files API submission."""

from gemini_quiz.constants import INLINE_SIZE_THRESHOLD
from gemini_quiz.core.types import Transport


def select_transport(size_bytes: int, threshold: int = INLINE_SIZE_THRESHOLD) -> Transport:
    """Return INLINE for documents up to ``threshold`` bytes, RESUMABLE above it."""
    if size_bytes < 0:
        raise ValueError(f"size_bytes must be >= 0, got {size_bytes}")
    return Transport.INLINE if size_bytes <= threshold else Transport.RESUMABLE

"""Stages of the document-to-quiz pipeline."""

from .normalizer import ResponseNormalizer, strip_code_fences
from .prompts import build_quiz_prompt
from .submitters import InlineSubmitter, ResumableSubmitter
from .transport import select_transport

__all__ = [
    "build_quiz_prompt",
    "select_transport",
    "InlineSubmitter",
    "ResumableSubmitter",
    "ResponseNormalizer",
    "strip_code_fences",
]

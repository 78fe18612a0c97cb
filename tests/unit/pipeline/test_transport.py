import pytest

from gemini_quiz.constants import INLINE_SIZE_THRESHOLD
from gemini_quiz.core.types import Transport
from gemini_quiz.pipeline.transport import select_transport


@pytest.mark.unit
class TestSelectTransport:
    def test_threshold_is_inclusive_for_inline(self):
        assert select_transport(INLINE_SIZE_THRESHOLD) is Transport.INLINE

    def test_one_byte_over_threshold_is_resumable(self):
        assert select_transport(INLINE_SIZE_THRESHOLD + 1) is Transport.RESUMABLE

    def test_one_byte_under_threshold_is_inline(self):
        assert select_transport(INLINE_SIZE_THRESHOLD - 1) is Transport.INLINE

    def test_empty_document_is_inline(self):
        assert select_transport(0) is Transport.INLINE

    def test_default_threshold_is_twenty_mebibytes(self):
        assert INLINE_SIZE_THRESHOLD == 20 * 1024 * 1024

    def test_custom_threshold(self):
        assert select_transport(11, threshold=10) is Transport.RESUMABLE
        assert select_transport(10, threshold=10) is Transport.INLINE

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError, match="size_bytes"):
            select_transport(-1)

import pytest

from gemini_quiz.core.types import (
    Document,
    FileRefPart,
    GenerationRequest,
    InlineDataPart,
    Question,
    TextPart,
    Transport,
)


@pytest.mark.unit
class TestQuestion:
    def test_valid_question(self):
        q = Question(text="Q?", options=("a", "b", "c", "d"), correct_index=3)
        assert q.to_api()["answerIndex"] == 3

    def test_requires_four_options(self):
        with pytest.raises(ValueError, match="options"):
            Question(text="Q?", options=("a", "b", "c"), correct_index=0)

    @pytest.mark.parametrize("index", [-1, 4, True])
    def test_index_bounds(self, index):
        with pytest.raises(ValueError, match="correct_index"):
            Question(text="Q?", options=("a", "b", "c", "d"), correct_index=index)

    def test_options_must_be_tuple(self):
        with pytest.raises(TypeError):
            Question(text="Q?", options=["a", "b", "c", "d"], correct_index=0)  # type: ignore[arg-type]


@pytest.mark.unit
class TestGenerationRequest:
    def test_exactly_one_content_reference(self):
        prompt = TextPart(text="p")
        inline = InlineDataPart(mime_type="image/png", data=b"x")
        ref = FileRefPart(uri="u", mime_type="application/pdf")

        with pytest.raises(ValueError):
            GenerationRequest(prompt=prompt)
        with pytest.raises(ValueError):
            GenerationRequest(prompt=prompt, inline=inline, file_ref=ref)

        assert GenerationRequest(prompt=prompt, file_ref=ref).transport is Transport.RESUMABLE
        assert GenerationRequest(prompt=prompt, inline=inline).parts == (prompt, inline)

    def test_inline_repr_hides_bytes(self):
        part = InlineDataPart(mime_type="image/png", data=b"secret" * 10)
        assert "secret" not in repr(part)
        assert "60 bytes" in repr(part)


@pytest.mark.unit
def test_document_from_file(tmp_path):
    path = tmp_path / "scan.png"
    path.write_bytes(b"12345")

    document = Document.from_file(path, "image/png")

    assert document.size_bytes == 5
    assert document.display_name == "scan.png"
    assert document.read_bytes() == b"12345"

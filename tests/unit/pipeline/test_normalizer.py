"""Tests for turning raw model text into questions."""

import json

import pytest

from gemini_quiz.core.types import Question
from gemini_quiz.exceptions import ResponseFormatError
from gemini_quiz.pipeline.normalizer import ResponseNormalizer, strip_code_fences


def _payload(*questions):
    return json.dumps({"questions": list(questions)})


def _entry(text="What is 2+2?", options=("3", "4", "5", "6"), answer=1):
    return {"question": text, "options": list(options), "correctAnswer": answer}


@pytest.mark.unit
class TestStripCodeFences:
    def test_plain_text_unchanged(self):
        assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'

    def test_json_fence_removed(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence_removed(self):
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_uppercase_language_tag(self):
        assert strip_code_fences('```JSON\n{"a": 1}\n```') == '{"a": 1}'


@pytest.mark.unit
class TestResponseNormalizer:
    def setup_method(self):
        self.normalizer = ResponseNormalizer()

    def test_single_question(self):
        result = self.normalizer.normalize(_payload(_entry()))

        assert result == (
            Question(text="What is 2+2?", options=("3", "4", "5", "6"), correct_index=1),
        )

    def test_fenced_and_bare_payloads_are_equivalent(self):
        """Fenced output normalizes to the same questions as bare JSON."""
        bare = _payload(_entry(), _entry(text="Capital of France?", answer=3))
        fenced = f"```json\n{bare}\n```"

        assert self.normalizer.normalize(fenced) == self.normalizer.normalize(bare)

    def test_order_is_preserved(self):
        texts = [f"Q{i}?" for i in range(5)]
        result = self.normalizer.normalize(_payload(*(_entry(text=t) for t in texts)))

        assert [q.text for q in result] == texts

    def test_wire_shape_round_trip(self):
        result = self.normalizer.normalize(_payload(_entry(answer=2)))

        assert result[0].to_api() == {
            "question": "What is 2+2?",
            "options": ["3", "4", "5", "6"],
            "answerIndex": 2,
        }

    def test_missing_questions_key(self):
        with pytest.raises(ResponseFormatError) as exc_info:
            self.normalizer.normalize('{"items": []}')
        assert exc_info.value.raw_text == '{"items": []}'

    def test_empty_question_list_rejected(self):
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize('{"questions": []}')

    @pytest.mark.parametrize(
        "options", [("a", "b", "c"), ("a", "b", "c", "d", "e")], ids=["three", "five"]
    )
    def test_wrong_option_count(self, options):
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize(_payload(_entry(options=options)))

    @pytest.mark.parametrize("answer", [-1, 4])
    def test_answer_index_out_of_range(self, answer):
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize(_payload(_entry(answer=answer)))

    @pytest.mark.parametrize("answer", [True, "1", 1.0])
    def test_answer_index_must_be_integer(self, answer):
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize(_payload(_entry(answer=answer)))

    def test_blank_question_text_rejected(self):
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize(_payload(_entry(text="   ")))

    def test_invalid_json_keeps_raw_and_cleaned_text(self):
        raw = "```json\n{not json}\n```"
        with pytest.raises(ResponseFormatError) as exc_info:
            self.normalizer.normalize(raw)

        assert exc_info.value.raw_text == raw
        assert exc_info.value.cleaned_text == "{not json}"

    def test_top_level_list_rejected(self):
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize(json.dumps([_entry()]))

    def test_one_bad_entry_rejects_whole_batch(self):
        """Valid entries are never returned alongside an invalid one."""
        raw = _payload(_entry(), _entry(options=("only", "two")))
        with pytest.raises(ResponseFormatError):
            self.normalizer.normalize(raw)

    def test_count_mismatch_is_accepted_with_warning(self, caplog):
        with caplog.at_level("WARNING", logger="gemini_quiz.pipeline.normalizer"):
            result = self.normalizer.normalize(_payload(_entry()), expected_count=5)

        assert len(result) == 1
        assert "1 questions, 5 were requested" in caplog.text

    def test_extra_fields_ignored(self):
        entry = _entry() | {"explanation": "because"}
        assert len(self.normalizer.normalize(_payload(entry))) == 1

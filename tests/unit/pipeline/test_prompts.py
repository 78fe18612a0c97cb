"""Tests for the quiz prompt text."""

import pytest

from gemini_quiz.pipeline.prompts import build_quiz_prompt


@pytest.mark.unit
class TestBuildQuizPrompt:
    def test_states_question_count(self):
        """The requested number of questions appears verbatim."""
        assert "Generate exactly 7 questions." in build_quiz_prompt(7)

    def test_states_option_count_and_zero_based_index(self):
        prompt = build_quiz_prompt(3)
        assert "exactly 4 answer options" in prompt
        assert "zero-based index" in prompt
        assert "3 for the last" in prompt

    def test_describes_json_shape(self):
        prompt = build_quiz_prompt(1)
        assert '"questions"' in prompt
        assert '"correctAnswer"' in prompt
        assert "Markdown code fences" in prompt

    def test_is_deterministic(self):
        assert build_quiz_prompt(5) == build_quiz_prompt(5)

    @pytest.mark.parametrize("count", [0, -3])
    def test_rejects_non_positive_count(self, count):
        with pytest.raises(ValueError, match="question_count"):
            build_quiz_prompt(count)

    def test_rejects_single_option(self):
        with pytest.raises(ValueError, match="option_count"):
            build_quiz_prompt(5, option_count=1)

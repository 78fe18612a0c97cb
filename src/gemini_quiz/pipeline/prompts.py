"""Instruction text sent to the model alongside the document."""

from gemini_quiz.constants import OPTION_COUNT


def build_quiz_prompt(question_count: int, option_count: int = OPTION_COUNT) -> str:
    """Creates a prompt that instructs the model to return a single JSON quiz object."""
    if question_count < 1:
        raise ValueError(f"question_count must be >= 1, got {question_count}")
    if option_count < 2:
        raise ValueError(f"option_count must be >= 2, got {option_count}")

    prompt_parts = [
        "Analyze the attached document and write a multiple-choice quiz about its content.",
        f"Generate exactly {question_count} questions.",
        f"Each question must have exactly {option_count} answer options, "
        "of which exactly one is correct.",
        "Identify the correct option by its zero-based index into the options list "
        f"(0 for the first option, {option_count - 1} for the last).",
    ]

    instruction = (
        "\nYour output MUST be a single, valid JSON object of the form "
        '{"questions": [{"question": "<text>", "options": ["<option>", ...], '
        '"correctAnswer": <index>}]}. '
        "Do not include any other text, Markdown code fences, or explanations "
        "outside of the JSON object."
    )
    prompt_parts.append(instruction)

    return "\n".join(prompt_parts)

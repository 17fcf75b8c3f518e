"""Question bank loading and validation."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from career_match.errors import ValidationError
from career_match.quiz.models import QuizQuestion
from career_match.utils.files import extract_items, load_document


def validate_questions(questions: list[QuizQuestion | dict]) -> list[QuizQuestion]:
    """Validate a question list handed to a new quiz session.

    The list must be non-empty, ids must be unique, and every question needs
    a skill category and a correct answer.

    Raises:
        ValidationError: If any rule is violated.
    """
    parsed: list[QuizQuestion] = []
    for position, item in enumerate(questions or []):
        if isinstance(item, QuizQuestion):
            parsed.append(item)
            continue
        try:
            parsed.append(QuizQuestion.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(f"Question #{position} is invalid: {e}", e) from e

    if not parsed:
        raise ValidationError("A quiz needs at least one question")

    seen: set[int] = set()
    for question in parsed:
        if question.id in seen:
            raise ValidationError(f"Duplicate question id: {question.id}")
        seen.add(question.id)
        if not question.skill_category.strip():
            raise ValidationError(f"Question {question.id} has no skill_category")
        if not question.correct_answer.strip():
            raise ValidationError(f"Question {question.id} has no correct_answer")

    return parsed


class QuestionBank:
    """Question provider backed by a YAML/JSON file."""

    def __init__(self, questions: list[QuizQuestion | dict]) -> None:
        self.questions = validate_questions(questions)

    @classmethod
    def load(cls, path: Path | str) -> QuestionBank:
        """Load questions from a list or a `{questions: [...]}` document."""
        data = load_document(path)
        return cls(extract_items(data, "questions", path))

    def skill_categories(self) -> list[str]:
        """Return skill categories in order of first appearance."""
        seen: list[str] = []
        for question in self.questions:
            if question.skill_category not in seen:
                seen.append(question.skill_category)
        return seen

    def __len__(self) -> int:
        return len(self.questions)

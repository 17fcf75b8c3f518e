"""Data models for quizzes and per-skill scores."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class QuestionType(str, Enum):
    """Kind of quiz question."""

    MULTIPLE_CHOICE = "multiple_choice"
    OPEN_ENDED = "open_ended"


class QuizQuestion(BaseModel):
    """A single quiz question tagged with the skill it probes."""

    id: int = Field(..., description="Question id, unique within a session")
    question: str = Field(..., description="Question text")
    type: QuestionType = Field(..., description="multiple_choice or open_ended")
    options: list[str] | None = Field(
        default=None, description="Answer options (multiple_choice only)"
    )
    skill_category: str = Field(..., description="Skill this question measures")
    correct_answer: str = Field(
        default="",
        description="Exact answer (multiple_choice) or keyword list (open_ended)",
    )

    @model_validator(mode="after")
    def validate_options_match_type(self) -> QuizQuestion:
        """Require options for multiple choice questions and only for them."""
        if self.type == QuestionType.MULTIPLE_CHOICE and not self.options:
            raise ValueError(
                f"Question {self.id}: multiple_choice questions require options"
            )
        if self.type == QuestionType.OPEN_ENDED and self.options:
            raise ValueError(f"Question {self.id}: open_ended questions take no options")
        return self

    def to_dict(self) -> dict:
        """Serialize to a dictionary, omitting absent options."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict) -> QuizQuestion:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class QuizAnswer(BaseModel):
    """A submitted answer to one question of a session."""

    question_id: int = Field(..., description="Id of the answered question")
    answer: str = Field(default="", description="Submitted answer text")

    @field_validator("answer", mode="before")
    @classmethod
    def coerce_missing_answer(cls, v: object) -> object:
        """Treat a null answer as an empty one."""
        if v is None:
            return ""
        return v

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> QuizAnswer:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class QuizSession(BaseModel):
    """A quiz handed to a user, with its fixed question order."""

    id: str = Field(..., description="Session (quiz) id")
    user_id: int = Field(..., description="Owning user id")
    questions: list[QuizQuestion] = Field(..., description="Ordered questions")
    answers: list[QuizAnswer] | None = Field(
        default=None, description="Answers attached at submission"
    )
    completed: bool = Field(default=False, description="Whether answers were submitted")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = Field(default=None)

    def question_map(self) -> dict[int, QuizQuestion]:
        """Return the session's questions keyed by id."""
        return {question.id: question for question in self.questions}

    def skill_categories(self) -> list[str]:
        """Return skill categories in order of first appearance."""
        seen: list[str] = []
        for question in self.questions:
            if question.skill_category not in seen:
                seen.append(question.skill_category)
        return seen

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict) -> QuizSession:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass(frozen=True)
class ScoredAnswer:
    """Outcome of judging one answer."""

    question_id: int
    skill_category: str
    is_correct: bool


@dataclass(frozen=True)
class SkillScore:
    """Correct/total tally for one skill category."""

    skill: str
    correct: int
    total: int
    percentage: float

    def __post_init__(self) -> None:
        if self.total <= 0:
            raise ValueError(f"total must be positive (got {self.total})")
        if not (0 <= self.correct <= self.total):
            raise ValueError(
                f"correct must be between 0 and {self.total} (got {self.correct})"
            )
        if not (0.0 <= self.percentage <= 100.0):
            raise ValueError(
                f"percentage must be between 0.0 and 100.0 (got {self.percentage})"
            )

    def to_dict(self) -> dict:
        """Serialize using the wire field names."""
        return {
            "skill": self.skill,
            "correct": self.correct,
            "total": self.total,
            "percentage": self.percentage,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SkillScore:
        """Deserialize from the wire field names."""
        return cls(
            skill=str(data["skill"]),
            correct=int(data["correct"]),
            total=int(data["total"]),
            percentage=float(data["percentage"]),
        )

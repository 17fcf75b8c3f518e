"""Data models for careers, career matches, and recommendations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from career_match.quiz.models import SkillScore


class Career(BaseModel):
    """A career from the read-only catalog."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Career id")
    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "career_name"),
        description="Career name",
    )
    required_skills: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("required_skills", "key_skills"),
        description="Skills required to be matchable (empty = never matched)",
    )
    description: str | None = Field(default=None, description="Short description")
    salary_range: str | None = Field(
        default=None,
        validation_alias=AliasChoices("salary_range", "average_salary"),
        description="Display salary range",
    )
    required_education: str | None = Field(
        default=None, description="Typical education requirement"
    )
    growth_outlook: str | None = Field(default=None, description="Job growth outlook")

    @field_validator("required_skills", mode="before")
    @classmethod
    def coerce_required_skills(cls, v: object) -> object:
        """Treat a null skill list as empty and drop blank entries."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(skill).strip() for skill in v if str(skill).strip()]
        return v

    def to_dict(self) -> dict:
        """Serialize to a dictionary, omitting absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True)

    @classmethod
    def from_dict(cls, data: dict) -> Career:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass
class CareerMatch:
    """How well a user's skill scores cover one career's required skills."""

    career_id: int
    career_name: str
    match_percentage: float
    matching_skills: list[str] = field(default_factory=list)
    missing_skills: list[str] = field(default_factory=list)
    description: str | None = None
    salary_range: str | None = None

    def __post_init__(self) -> None:
        if not (0.0 <= self.match_percentage <= 100.0):
            raise ValueError(
                "match_percentage must be between 0.0 and 100.0 "
                f"(got {self.match_percentage})"
            )
        overlap = set(self.matching_skills) & set(self.missing_skills)
        if overlap:
            raise ValueError(
                f"Skills cannot be both matching and missing: {sorted(overlap)}"
            )

    @property
    def required_skills(self) -> list[str]:
        """Required skills of the career, matched first."""
        return [*self.matching_skills, *self.missing_skills]

    def to_dict(self) -> dict:
        """Serialize using the wire field names; absent optionals are omitted."""
        payload: dict = {
            "career_id": self.career_id,
            "career_name": self.career_name,
        }
        if self.description is not None:
            payload["description"] = self.description
        payload["match_percentage"] = self.match_percentage
        payload["matching_skills"] = list(self.matching_skills)
        payload["missing_skills"] = list(self.missing_skills)
        if self.salary_range is not None:
            payload["salary_range"] = self.salary_range
        return payload

    @classmethod
    def from_dict(cls, data: dict) -> CareerMatch:
        """Deserialize from the wire field names."""
        return cls(
            career_id=int(data["career_id"]),
            career_name=data["career_name"],
            match_percentage=float(data["match_percentage"]),
            matching_skills=list(data.get("matching_skills") or []),
            missing_skills=list(data.get("missing_skills") or []),
            description=data.get("description"),
            salary_range=data.get("salary_range"),
        )


@dataclass
class Recommendation:
    """A career recommendation derived from a match and the user's skill scores.

    Attributes:
        user_id: User the recommendation is for.
        career_id: Recommended career.
        career_name: Display name of the career.
        match_percentage: Share of required skills the user demonstrated.
        reasoning: Templated explanation of the match.
        strengths: Matched skills scored at or above the strength threshold.
        areas_to_develop: Missing skills, then marginally matched skills.
        created_at: Set by the store when the recommendation is saved.
    """

    user_id: int
    career_id: int
    career_name: str
    match_percentage: float
    reasoning: str
    strengths: list[str] = field(default_factory=list)
    areas_to_develop: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Serialize the recommendation to a dictionary."""
        payload: dict = {
            "user_id": self.user_id,
            "career_id": self.career_id,
            "career_name": self.career_name,
            "match_percentage": self.match_percentage,
            "reasoning": self.reasoning,
            "strengths": list(self.strengths),
            "areas_to_develop": list(self.areas_to_develop),
        }
        if self.created_at is not None:
            payload["created_at"] = self.created_at.isoformat()
        return payload

    @classmethod
    def from_dict(cls, data: dict) -> Recommendation:
        """Deserialize a recommendation from a dictionary."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            user_id=int(data["user_id"]),
            career_id=int(data["career_id"]),
            career_name=data["career_name"],
            match_percentage=float(data["match_percentage"]),
            reasoning=data.get("reasoning") or "",
            strengths=list(data.get("strengths") or []),
            areas_to_develop=list(data.get("areas_to_develop") or []),
            created_at=created_at,
        )


@dataclass
class QuizResult:
    """Outcome of submitting a quiz."""

    quiz_id: str
    total_score: int
    total_questions: int
    percentage: float
    skill_breakdown: list[SkillScore] = field(default_factory=list)
    career_matches: list[CareerMatch] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize using the wire field names."""
        return {
            "quiz_id": self.quiz_id,
            "total_score": self.total_score,
            "total_questions": self.total_questions,
            "percentage": self.percentage,
            "skill_breakdown": [score.to_dict() for score in self.skill_breakdown],
            "career_matches": [match.to_dict() for match in self.career_matches],
        }


def recommendations_payload(recommendations: list[Recommendation]) -> dict:
    """Wrap recommendations in the `{recommendations: [...]}` response shape."""
    return {"recommendations": [rec.to_dict() for rec in recommendations]}

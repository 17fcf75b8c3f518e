"""Recommendation generation from ranked career matches."""

from __future__ import annotations

from collections.abc import Iterable

from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.matcher import skill_index
from career_match.matching.matchers import normalize_skill
from career_match.matching.models import CareerMatch, Recommendation
from career_match.quiz.models import SkillScore

REASONING_TEMPLATE = (
    "You scored strongly in {matched} of {required} required skills for "
    "{career}, making you a {match_percentage}% match."
)


def format_percentage(value: float) -> str:
    """Render a percentage without trailing zeros (66.67, 50, 12.5)."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text or "0"


class RecommendationGenerator:
    """Turn career matches and skill scores into recommendations."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or get_matching_config()

    def split_matched(
        self, match: CareerMatch, possessed: dict[str, float]
    ) -> tuple[list[str], list[str]]:
        """Split matched skills into strengths and marginal matches."""
        strengths: list[str] = []
        marginal: list[str] = []
        for skill in match.matching_skills:
            score = possessed.get(normalize_skill(skill), 0.0)
            if score >= self.config.strength_threshold:
                strengths.append(skill)
            elif score >= self.config.match_threshold:
                marginal.append(skill)
        return strengths, marginal

    def build_reasoning(
        self,
        match: CareerMatch,
        strengths: list[str],
        areas_to_develop: list[str],
    ) -> str:
        """Fill the reasoning template for one match."""
        reasoning = REASONING_TEMPLATE.format(
            matched=len(match.matching_skills),
            required=len(match.required_skills),
            career=match.career_name,
            match_percentage=format_percentage(match.match_percentage),
        )
        if strengths:
            reasoning += f" Strengths: {', '.join(strengths)}."
        if areas_to_develop:
            reasoning += f" Areas to develop: {', '.join(areas_to_develop)}."
        return reasoning

    def recommend(
        self,
        career_matches: Iterable[CareerMatch],
        skill_scores: Iterable[SkillScore],
        *,
        user_id: int,
    ) -> list[Recommendation]:
        """Build one recommendation per match, preserving match order."""
        possessed = skill_index(skill_scores)
        recommendations: list[Recommendation] = []

        for match in career_matches:
            strengths, marginal = self.split_matched(match, possessed)
            areas_to_develop = [*match.missing_skills, *marginal]
            recommendations.append(
                Recommendation(
                    user_id=user_id,
                    career_id=match.career_id,
                    career_name=match.career_name,
                    match_percentage=match.match_percentage,
                    reasoning=self.build_reasoning(match, strengths, areas_to_develop),
                    strengths=strengths,
                    areas_to_develop=areas_to_develop,
                )
            )

        return recommendations

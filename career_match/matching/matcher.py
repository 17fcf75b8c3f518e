"""Career matching: rank catalog careers against a user's skill scores."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.matchers import (
    dedupe_skills,
    find_matching_skills,
    normalize_skill,
)
from career_match.matching.models import Career, CareerMatch
from career_match.quiz.aggregator import percentage
from career_match.quiz.models import SkillScore
from career_match.utils.logging import get_logger

logger = get_logger("matching.matcher")


def skill_index(skill_scores: Iterable[SkillScore]) -> dict[str, float]:
    """Return skill percentages keyed by normalized skill name.

    When two scores normalize to the same name the higher percentage wins.
    """
    index: dict[str, float] = {}
    for score in skill_scores:
        key = normalize_skill(score.skill)
        if key not in index or score.percentage > index[key]:
            index[key] = score.percentage
    return index


def ranking_key(match: CareerMatch) -> tuple[float, str, int]:
    """Sort key: match percentage descending, then name, then id."""
    return (-match.match_percentage, match.career_name, match.career_id)


class CareerMatcher:
    """Compare skill scores against each career's required skills."""

    def __init__(self, config: MatchingConfig | None = None) -> None:
        self.config = config or get_matching_config()

    def evaluate_career(
        self, career: Career, possessed: dict[str, float]
    ) -> CareerMatch | None:
        """Score a single career, or return None when it is not matchable."""
        required = dedupe_skills(career.required_skills)
        if not required:
            logger.debug("Skipping career %s: no required skills", career.id)
            return None

        matched, missing = find_matching_skills(
            required=required,
            possessed=possessed,
            threshold=self.config.match_threshold,
        )
        return CareerMatch(
            career_id=career.id,
            career_name=career.name,
            match_percentage=percentage(len(matched), len(required)),
            matching_skills=matched,
            missing_skills=missing,
            description=career.description,
            salary_range=career.salary_range,
        )

    def match(
        self, skill_scores: Iterable[SkillScore], careers: Iterable[Career]
    ) -> list[CareerMatch]:
        """Rank careers by how many required skills the user possesses.

        Careers with no required skills are excluded. Results are sorted by
        match percentage (descending), career name, then career id, filtered
        by `min_match_floor`, and truncated to `top_n`. The order never
        depends on evaluation order, so serial and threaded runs agree.
        """
        possessed = skill_index(skill_scores)
        catalog = list(careers)

        if self.config.max_workers > 1 and len(catalog) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
                evaluated = list(
                    pool.map(lambda c: self.evaluate_career(c, possessed), catalog)
                )
        else:
            evaluated = [self.evaluate_career(c, possessed) for c in catalog]

        matches = [m for m in evaluated if m is not None]
        matches.sort(key=ranking_key)

        floor = self.config.min_match_floor
        ranked = [m for m in matches if m.match_percentage >= floor]
        logger.debug(
            "Matched %d career(s); %d above floor %.2f",
            len(matches),
            len(ranked),
            floor,
        )
        return ranked[: self.config.top_n]

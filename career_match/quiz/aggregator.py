"""Skill aggregation: scored answers to per-skill percentages."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from career_match.quiz.models import ScoredAnswer, SkillScore


def percentage(part: int, whole: int) -> float:
    """Return part/whole as a percentage rounded to 2 decimals (0.0 if whole is 0)."""
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 2)


def aggregate(
    scored_answers: Iterable[ScoredAnswer],
    category_order: Sequence[str] | None = None,
) -> list[SkillScore]:
    """Group scored answers by skill category into SkillScore records.

    Args:
        scored_answers: Output of the answer scorer.
        category_order: Skill categories in the session's question order.
            Categories are emitted in order of first appearance here, and
            otherwise in order of first appearance among the answers.

    Returns:
        One SkillScore per category that has at least one answered question.
    """
    tallies: dict[str, list[int]] = {}
    first_seen: list[str] = []

    for item in scored_answers:
        counts = tallies.get(item.skill_category)
        if counts is None:
            counts = tallies[item.skill_category] = [0, 0]
            first_seen.append(item.skill_category)
        counts[1] += 1
        if item.is_correct:
            counts[0] += 1

    order: list[str] = []
    for category in list(category_order or []) + first_seen:
        if category in tallies and category not in order:
            order.append(category)

    return [
        SkillScore(
            skill=category,
            correct=tallies[category][0],
            total=tallies[category][1],
            percentage=percentage(tallies[category][0], tallies[category][1]),
        )
        for category in order
    ]


def overall_score(
    scored_answers: Iterable[ScoredAnswer], total_questions: int
) -> tuple[int, float]:
    """Return (correct answers, percentage of all session questions)."""
    total_score = sum(1 for item in scored_answers if item.is_correct)
    return total_score, percentage(total_score, total_questions)

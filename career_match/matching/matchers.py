"""Skill name matching utilities for career matching."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping


def normalize_skill(skill: str) -> str:
    """Normalize a skill string for comparison.

    Lowercases, collapses internal whitespace, and trims surrounding
    whitespace while preserving meaningful characters like "+", "#",
    and "." (e.g. "C++", "C#", "Node.js").
    """
    value = re.sub(r"\s+", " ", skill.strip())
    return value.casefold()


def dedupe_skills(skills: Iterable[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling."""
    seen: set[str] = set()
    unique: list[str] = []
    for skill in skills:
        key = normalize_skill(skill)
        if key and key not in seen:
            seen.add(key)
            unique.append(skill.strip())
    return unique


def find_matching_skills(
    required: Iterable[str],
    possessed: Mapping[str, float],
    threshold: float,
) -> tuple[list[str], list[str]]:
    """Split required skills into those possessed at `threshold` and those missing.

    Args:
        required: Required skill names, in display order.
        possessed: Skill percentages keyed by normalized skill name.
        threshold: Minimum percentage for a skill to count as possessed.

    Returns:
        (matched, missing), both in `required` order and disjoint.
    """
    matched: list[str] = []
    missing: list[str] = []

    for requirement in dedupe_skills(required):
        score = possessed.get(normalize_skill(requirement))
        if score is not None and score >= threshold:
            matched.append(requirement)
        else:
            missing.append(requirement)

    return matched, missing

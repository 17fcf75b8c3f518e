"""Career matching and recommendation system.

This module ranks catalog careers against a user's per-skill quiz scores
and explains the top matches.

Public API:
    - CareerMatcher: Rank careers against skill scores
    - RecommendationGenerator: Build recommendations from matches
    - CareerCatalog: Load careers from YAML/JSON
    - Career / CareerMatch / Recommendation / QuizResult: Models
    - MatchingConfig: Configuration settings
"""

from career_match.matching.catalog import CareerCatalog
from career_match.matching.config import (
    MatchingConfig,
    get_matching_config,
    reset_matching_config,
)
from career_match.matching.matcher import CareerMatcher
from career_match.matching.models import (
    Career,
    CareerMatch,
    QuizResult,
    Recommendation,
    recommendations_payload,
)
from career_match.matching.recommendations import RecommendationGenerator

__all__ = [
    "CareerMatcher",
    "RecommendationGenerator",
    "CareerCatalog",
    "Career",
    "CareerMatch",
    "Recommendation",
    "QuizResult",
    "recommendations_payload",
    "MatchingConfig",
    "get_matching_config",
    "reset_matching_config",
]

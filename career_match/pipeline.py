"""Quiz-to-career pipeline: pure composition of the scoring components."""

from __future__ import annotations

from collections.abc import Iterable

from career_match.errors import ValidationError
from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.matcher import CareerMatcher
from career_match.matching.models import Career, QuizResult, Recommendation
from career_match.matching.recommendations import RecommendationGenerator
from career_match.quiz.aggregator import aggregate, overall_score
from career_match.quiz.config import QuizConfig, get_quiz_config
from career_match.quiz.models import QuizAnswer, QuizSession
from career_match.quiz.scorer import AnswerScorer


def evaluate_quiz(
    session: QuizSession,
    answers: Iterable[QuizAnswer | dict],
    careers: Iterable[Career],
    *,
    quiz_config: QuizConfig | None = None,
    matching_config: MatchingConfig | None = None,
    scorer: AnswerScorer | None = None,
) -> QuizResult:
    """Score a submission and rank careers against the resulting skill scores.

    Raises:
        ValidationError: If any answer is malformed or references a question
            outside the session. Nothing is scored in that case.
    """
    scorer = scorer or AnswerScorer(quiz_config or get_quiz_config())
    matcher = CareerMatcher(matching_config or get_matching_config())

    scored = scorer.score_submission(session, answers)
    skill_breakdown = aggregate(scored, session.skill_categories())
    total_score, percentage = overall_score(scored, len(session.questions))

    return QuizResult(
        quiz_id=session.id,
        total_score=total_score,
        total_questions=len(session.questions),
        percentage=percentage,
        skill_breakdown=skill_breakdown,
        career_matches=matcher.match(skill_breakdown, careers),
    )


def recommend_for_session(
    session: QuizSession,
    careers: Iterable[Career],
    *,
    quiz_config: QuizConfig | None = None,
    matching_config: MatchingConfig | None = None,
) -> list[Recommendation]:
    """Recompute matches for a completed session and build recommendations.

    Raises:
        ValidationError: If the session has not been completed.
    """
    if not session.completed:
        raise ValidationError(f"Quiz {session.id} has not been completed")

    config = matching_config or get_matching_config()
    result = evaluate_quiz(
        session,
        session.answers or [],
        careers,
        quiz_config=quiz_config,
        matching_config=config,
    )
    return RecommendationGenerator(config).recommend(
        result.career_matches, result.skill_breakdown, user_id=session.user_id
    )

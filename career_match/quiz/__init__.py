"""Quiz scoring and skill aggregation.

This module turns a user's answers to a skill quiz into per-skill
proficiency scores.

Public API:
    - AnswerScorer: Judge single answers and whole submissions
    - aggregate: Group scored answers into SkillScore records
    - QuestionBank: Load and validate question lists
    - QuizQuestion / QuizAnswer / QuizSession: Input models
    - SkillScore: Per-skill result model
    - QuizConfig: Configuration settings
"""

from career_match.quiz.aggregator import aggregate, overall_score
from career_match.quiz.bank import QuestionBank, validate_questions
from career_match.quiz.config import QuizConfig, get_quiz_config, reset_quiz_config
from career_match.quiz.models import (
    QuestionType,
    QuizAnswer,
    QuizQuestion,
    QuizSession,
    ScoredAnswer,
    SkillScore,
)
from career_match.quiz.scorer import AnswerScorer, score_open_ended

__all__ = [
    "AnswerScorer",
    "score_open_ended",
    "aggregate",
    "overall_score",
    "QuestionBank",
    "validate_questions",
    "QuestionType",
    "QuizQuestion",
    "QuizAnswer",
    "QuizSession",
    "ScoredAnswer",
    "SkillScore",
    "QuizConfig",
    "get_quiz_config",
    "reset_quiz_config",
]

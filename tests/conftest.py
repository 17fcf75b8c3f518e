"""Pytest configuration and shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Keep configuration and logging singletons isolated between tests."""
    from career_match.config.settings import reset_settings
    from career_match.matching.config import reset_matching_config
    from career_match.quiz.config import reset_quiz_config
    from career_match.utils.logging import reset_logging

    yield
    reset_settings()
    reset_quiz_config()
    reset_matching_config()
    reset_logging()


@pytest.fixture
def sample_questions() -> list[dict]:
    """Three questions tagged [Python, SQL, Python]."""
    return [
        {
            "id": 1,
            "question": "Which keyword defines a function in Python?",
            "type": "multiple_choice",
            "options": ["A) def", "B) func", "C) lambda", "D) fn"],
            "skill_category": "Python",
            "correct_answer": "A",
        },
        {
            "id": 2,
            "question": "Which clause filters rows in a query?",
            "type": "multiple_choice",
            "options": ["SELECT", "WHERE", "ORDER BY"],
            "skill_category": "SQL",
            "correct_answer": "WHERE",
        },
        {
            "id": 3,
            "question": "Describe a list comprehension.",
            "type": "open_ended",
            "skill_category": "Python",
            "correct_answer": "list, loop; expression",
        },
    ]


@pytest.fixture
def correct_answers() -> list[dict]:
    """Correct answers for `sample_questions`."""
    return [
        {"question_id": 1, "answer": "A"},
        {"question_id": 2, "answer": "where"},
        {"question_id": 3, "answer": "It builds a list from a loop expression"},
    ]


@pytest.fixture
def sample_session(sample_questions):
    """An incomplete quiz session over `sample_questions`."""
    from career_match.quiz.models import QuizSession

    return QuizSession(id="quiz-1", user_id=7, questions=sample_questions)


@pytest.fixture
def sample_careers() -> list[dict]:
    """A small career catalog."""
    return [
        {
            "id": 1,
            "name": "Data Analyst",
            "required_skills": ["Python", "SQL", "Excel"],
            "description": "Turns data into decisions",
            "salary_range": "$60k-$90k",
        },
        {
            "id": 2,
            "name": "Backend Developer",
            "required_skills": ["Python", "SQL"],
        },
        {
            "id": 3,
            "name": "Graphic Designer",
            "required_skills": ["Photoshop", "Illustrator"],
        },
        {
            "id": 4,
            "name": "Generalist",
            "required_skills": [],
        },
    ]


@pytest.fixture
def matching_config():
    """Matching config with defaults and no .env lookup."""
    from career_match.matching.config import MatchingConfig

    return MatchingConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def quiz_config():
    """Quiz config with defaults and no .env lookup."""
    from career_match.quiz.config import QuizConfig

    return QuizConfig(_env_file=None)  # type: ignore[call-arg]

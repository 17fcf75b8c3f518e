"""Quiz session persistence.

Public API:
- QuizService: Submission, completion, and recommendation workflow
- QuizRepository: Async SQLite repository for sessions, careers, recommendations
"""

from career_match.store.repository import QuizRepository
from career_match.store.service import QuizService

__all__ = [
    "QuizService",
    "QuizRepository",
]

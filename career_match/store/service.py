"""Business logic service for quiz submission and recommendations.

This module provides the QuizService class which handles:
- Session creation from a validated question list
- Quiz submission: scoring, career matching, and one-time completion
- Lookup of the result stored at completion
- Recommendation generation and storage for completed sessions
"""

from career_match.errors import NotFoundError, ValidationError
from career_match.matching.config import MatchingConfig, get_matching_config
from career_match.matching.models import Career, QuizResult, Recommendation
from career_match.pipeline import evaluate_quiz, recommend_for_session
from career_match.quiz.bank import validate_questions
from career_match.quiz.config import QuizConfig, get_quiz_config
from career_match.quiz.models import QuizAnswer, QuizQuestion, QuizSession
from career_match.quiz.scorer import parse_answers
from career_match.store.repository import QuizRepository
from career_match.utils.logging import get_logger

logger = get_logger("store.service")


class QuizService:
    """Coordinates the pure pipeline with the quiz repository."""

    def __init__(
        self,
        repository: QuizRepository,
        quiz_config: QuizConfig | None = None,
        matching_config: MatchingConfig | None = None,
    ):
        """Initialize the service.

        Args:
            repository: The QuizRepository instance for database access.
            quiz_config: Answer scoring settings (defaults to the singleton).
            matching_config: Career matching settings (defaults to the singleton).
        """
        self.repository = repository
        self.quiz_config = quiz_config or get_quiz_config()
        self.matching_config = matching_config or get_matching_config()

    async def create_session(
        self, user_id: int, questions: list[QuizQuestion | dict]
    ) -> QuizSession:
        """Create a quiz session with a fixed question order.

        Raises:
            ValidationError: If the question list is empty or invalid.
        """
        validated = validate_questions(questions)
        session = await self.repository.insert_session(user_id, validated)
        logger.info(
            "Created quiz %s for user %s with %d question(s)",
            session.id,
            user_id,
            len(validated),
        )
        return session

    async def _load_session(self, session_id: str) -> QuizSession:
        session = await self.repository.get_session(session_id)
        if session is None:
            raise NotFoundError(f"Quiz session not found: {session_id}")
        return session

    async def submit_quiz(
        self,
        quiz_id: str,
        answers: list[QuizAnswer | dict],
        *,
        user_id: int | None = None,
    ) -> QuizResult:
        """Score a submission and complete the session.

        The session is only marked completed after the whole submission has
        been validated and scored, so a rejected submission leaves it
        untouched.

        Raises:
            NotFoundError: If the quiz does not exist.
            ValidationError: If the quiz belongs to another user, was already
                completed, or the answers are invalid.
        """
        session = await self._load_session(quiz_id)
        if user_id is not None and session.user_id != user_id:
            logger.warning(
                "User %s submitted quiz %s owned by another user", user_id, quiz_id
            )
            raise ValidationError("Quiz does not belong to this user")
        if session.completed:
            logger.warning("Rejected resubmission of completed quiz %s", quiz_id)
            raise ValidationError(f"Quiz {quiz_id} has already been completed")

        parsed = parse_answers(answers)
        careers = await self.repository.list_careers()
        result = evaluate_quiz(
            session,
            parsed,
            careers,
            quiz_config=self.quiz_config,
            matching_config=self.matching_config,
        )

        completed = await self.repository.complete_session(quiz_id, parsed, result)
        if not completed:
            logger.warning("Quiz %s was completed by a concurrent submission", quiz_id)
            raise ValidationError(f"Quiz {quiz_id} has already been completed")

        logger.info(
            "Completed quiz %s: %d/%d correct, %d career match(es)",
            quiz_id,
            result.total_score,
            result.total_questions,
            len(result.career_matches),
        )
        return result

    async def get_result(
        self, quiz_id: str, *, user_id: int | None = None
    ) -> QuizResult:
        """Return the result recorded when the quiz was submitted.

        Raises:
            NotFoundError: If the quiz does not exist (or belongs to another
                user).
            ValidationError: If the quiz has not been completed.
        """
        session = await self._load_session(quiz_id)
        if user_id is not None and session.user_id != user_id:
            raise NotFoundError(f"Quiz session not found: {quiz_id}")

        result = await self.repository.get_result(quiz_id)
        if result is None:
            raise ValidationError(f"Quiz {quiz_id} has not been completed")
        return result

    async def generate_recommendations(
        self, session_id: str, *, user_id: int | None = None
    ) -> list[Recommendation]:
        """Build, store, and return recommendations for a completed session.

        Raises:
            NotFoundError: If the session does not exist (or belongs to
                another user).
            ValidationError: If the session has not been completed.
        """
        session = await self._load_session(session_id)
        if user_id is not None and session.user_id != user_id:
            raise NotFoundError(f"Quiz session not found: {session_id}")

        careers = await self.repository.list_careers()
        recommendations = recommend_for_session(
            session,
            careers,
            quiz_config=self.quiz_config,
            matching_config=self.matching_config,
        )
        saved = await self.repository.save_recommendations(recommendations)
        logger.info(
            "Stored %d recommendation(s) for user %s from quiz %s",
            len(saved),
            session.user_id,
            session_id,
        )
        return saved

    async def list_recommendations(self, user_id: int) -> list[Recommendation]:
        """Return a user's stored recommendations, best match first."""
        return await self.repository.list_recommendations(user_id)

    async def import_careers(self, careers: list[Career]) -> int:
        """Insert or update catalog careers; returns the number written."""
        for career in careers:
            await self.repository.upsert_career(career)
        return len(careers)

    async def list_careers(self) -> list[Career]:
        """Return the career catalog ordered by name."""
        return await self.repository.list_careers()

    async def get_career(self, career_id: int) -> Career:
        """Return a career by id.

        Raises:
            NotFoundError: If no career has that id.
        """
        career = await self.repository.get_career(career_id)
        if career is None:
            raise NotFoundError(f"Career not found: {career_id}")
        return career

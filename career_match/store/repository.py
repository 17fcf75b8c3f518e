"""Database repository for quiz sessions, careers, and recommendations.

This module provides async SQLite database operations for the
persistence side of the quiz pipeline: sessions are created with a fixed
question list, completed exactly once, and recommendations are upserted
per (user, career).
"""

import json
import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from career_match.matching.models import (
    Career,
    CareerMatch,
    QuizResult,
    Recommendation,
)
from career_match.quiz.models import QuizAnswer, QuizQuestion, QuizSession, SkillScore

CREATE_TABLES_SQL = """
CREATE TABLE IF NOT EXISTS quiz_sessions (
    id TEXT PRIMARY KEY,
    user_id INTEGER NOT NULL,
    questions TEXT NOT NULL,
    total_questions INTEGER NOT NULL,
    answers TEXT,
    skill_scores TEXT,
    career_matches TEXT,
    total_score INTEGER,
    percentage REAL,
    completed INTEGER NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    completed_at TEXT
);

CREATE TABLE IF NOT EXISTS careers (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT,
    required_skills TEXT NOT NULL DEFAULT '[]',
    salary_range TEXT,
    required_education TEXT,
    growth_outlook TEXT
);

CREATE TABLE IF NOT EXISTS recommendations (
    user_id INTEGER NOT NULL,
    career_id INTEGER NOT NULL,
    career_name TEXT NOT NULL,
    match_percentage REAL NOT NULL,
    reasoning TEXT,
    strengths TEXT,
    areas_to_develop TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    PRIMARY KEY (user_id, career_id)
);

CREATE INDEX IF NOT EXISTS idx_quiz_sessions_user ON quiz_sessions(user_id);
CREATE INDEX IF NOT EXISTS idx_recommendations_user ON recommendations(user_id);
"""


def _now() -> str:
    return datetime.now(UTC).isoformat()


def _parse_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)


class QuizRepository:
    """Async SQLite repository for the quiz pipeline.

    Session ids are generated here (uuid4 hex); the scoring core never
    mints identifiers itself.
    """

    def __init__(self, db_path: Path | str):
        """Initialize the repository.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = Path(db_path)
        self._connection: aiosqlite.Connection | None = None

    @asynccontextmanager
    async def _get_connection(self) -> AsyncGenerator[aiosqlite.Connection, None]:
        """Get a database connection.

        Yields:
            An aiosqlite connection.
        """
        if self._connection is None:
            self._connection = await aiosqlite.connect(self.db_path)
            self._connection.row_factory = aiosqlite.Row
        yield self._connection

    async def initialize(self) -> None:
        """Initialize the database, creating tables if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        async with self._get_connection() as conn:
            await conn.executescript(CREATE_TABLES_SQL)
            await conn.commit()

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None

    # Sessions

    async def insert_session(
        self, user_id: int, questions: list[QuizQuestion]
    ) -> QuizSession:
        """Create a new, incomplete quiz session.

        Args:
            user_id: Owner of the session.
            questions: Validated questions in presentation order.

        Returns:
            The stored session, including its generated id.
        """
        session = QuizSession(
            id=uuid.uuid4().hex,
            user_id=user_id,
            questions=questions,
            created_at=datetime.now(UTC),
        )
        async with self._get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO quiz_sessions (
                    id, user_id, questions, total_questions, created_at
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    session.id,
                    session.user_id,
                    json.dumps([q.to_dict() for q in session.questions]),
                    len(session.questions),
                    session.created_at.isoformat(),
                ),
            )
            await conn.commit()
        return session

    async def get_session(self, session_id: str) -> QuizSession | None:
        """Get a session by id.

        Returns:
            The session if found, None otherwise.
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM quiz_sessions WHERE id = ?",
                (session_id,),
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        return self._row_to_session(row)

    async def complete_session(
        self,
        session_id: str,
        answers: list[QuizAnswer],
        result: QuizResult,
    ) -> bool:
        """Atomically mark a session completed with its answers and scores.

        The update only applies while `completed = 0`, so concurrent
        submissions for the same session complete it at most once.

        Returns:
            True if this call completed the session, False if it was
            already completed (or does not exist).
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                """
                UPDATE quiz_sessions
                SET answers = ?, skill_scores = ?, career_matches = ?,
                    total_score = ?, percentage = ?, completed = 1,
                    completed_at = ?
                WHERE id = ? AND completed = 0
                """,
                (
                    json.dumps([a.to_dict() for a in answers]),
                    json.dumps([s.to_dict() for s in result.skill_breakdown]),
                    json.dumps([m.to_dict() for m in result.career_matches]),
                    result.total_score,
                    result.percentage,
                    _now(),
                    session_id,
                ),
            )
            await conn.commit()
            return cursor.rowcount == 1

    async def get_result(self, session_id: str) -> QuizResult | None:
        """Get the result stored when a session was completed.

        Returns:
            The stored result, or None if the session does not exist or
            has not been completed.
        """
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM quiz_sessions WHERE id = ? AND completed = 1",
                (session_id,),
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        return self._row_to_result(row)

    # Careers

    async def upsert_career(self, career: Career) -> None:
        """Insert or replace a catalog career."""
        async with self._get_connection() as conn:
            await conn.execute(
                """
                INSERT INTO careers (
                    id, name, description, required_skills, salary_range,
                    required_education, growth_outlook
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    description = excluded.description,
                    required_skills = excluded.required_skills,
                    salary_range = excluded.salary_range,
                    required_education = excluded.required_education,
                    growth_outlook = excluded.growth_outlook
                """,
                (
                    career.id,
                    career.name,
                    career.description,
                    json.dumps(career.required_skills),
                    career.salary_range,
                    career.required_education,
                    career.growth_outlook,
                ),
            )
            await conn.commit()

    async def get_career(self, career_id: int) -> Career | None:
        """Get a career by id."""
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM careers WHERE id = ?",
                (career_id,),
            )
            row = await cursor.fetchone()

        if row is None:
            return None
        return self._row_to_career(row)

    async def list_careers(self) -> list[Career]:
        """List all careers ordered by name."""
        async with self._get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM careers ORDER BY name, id")
            rows = await cursor.fetchall()

        return [self._row_to_career(row) for row in rows]

    # Recommendations

    async def save_recommendations(
        self, recommendations: list[Recommendation]
    ) -> list[Recommendation]:
        """Upsert recommendations keyed by (user_id, career_id).

        Saving the same recommendation twice leaves a single row; the
        original created_at is kept.

        Returns:
            The recommendations with created_at populated.
        """
        now = _now()
        saved: list[Recommendation] = []

        async with self._get_connection() as conn:
            for rec in recommendations:
                await conn.execute(
                    """
                    INSERT INTO recommendations (
                        user_id, career_id, career_name, match_percentage,
                        reasoning, strengths, areas_to_develop, created_at,
                        updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(user_id, career_id) DO UPDATE SET
                        career_name = excluded.career_name,
                        match_percentage = excluded.match_percentage,
                        reasoning = excluded.reasoning,
                        strengths = excluded.strengths,
                        areas_to_develop = excluded.areas_to_develop,
                        updated_at = excluded.updated_at
                    """,
                    (
                        rec.user_id,
                        rec.career_id,
                        rec.career_name,
                        rec.match_percentage,
                        rec.reasoning,
                        json.dumps(rec.strengths),
                        json.dumps(rec.areas_to_develop),
                        now,
                        now,
                    ),
                )
                cursor = await conn.execute(
                    """
                    SELECT * FROM recommendations
                    WHERE user_id = ? AND career_id = ?
                    """,
                    (rec.user_id, rec.career_id),
                )
                row = await cursor.fetchone()
                saved.append(self._row_to_recommendation(row))
            await conn.commit()

        return saved

    async def list_recommendations(self, user_id: int) -> list[Recommendation]:
        """List a user's recommendations, best match first."""
        async with self._get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM recommendations
                WHERE user_id = ?
                ORDER BY match_percentage DESC, career_name ASC, career_id ASC
                """,
                (user_id,),
            )
            rows = await cursor.fetchall()

        return [self._row_to_recommendation(row) for row in rows]

    # Row mapping

    def _row_to_session(self, row: aiosqlite.Row) -> QuizSession:
        answers = row["answers"]
        return QuizSession(
            id=row["id"],
            user_id=row["user_id"],
            questions=[QuizQuestion.from_dict(q) for q in json.loads(row["questions"])],
            answers=[QuizAnswer.from_dict(a) for a in json.loads(answers)]
            if answers is not None
            else None,
            completed=bool(row["completed"]),
            created_at=_parse_datetime(row["created_at"]) or datetime.now(UTC),
            completed_at=_parse_datetime(row["completed_at"]),
        )

    def _row_to_result(self, row: aiosqlite.Row) -> QuizResult:
        return QuizResult(
            quiz_id=row["id"],
            total_score=row["total_score"] or 0,
            total_questions=row["total_questions"],
            percentage=row["percentage"] or 0.0,
            skill_breakdown=[
                SkillScore.from_dict(s)
                for s in json.loads(row["skill_scores"] or "[]")
            ],
            career_matches=[
                CareerMatch.from_dict(m)
                for m in json.loads(row["career_matches"] or "[]")
            ],
        )

    def _row_to_career(self, row: aiosqlite.Row) -> Career:
        return Career(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            required_skills=json.loads(row["required_skills"] or "[]"),
            salary_range=row["salary_range"],
            required_education=row["required_education"],
            growth_outlook=row["growth_outlook"],
        )

    def _row_to_recommendation(self, row: aiosqlite.Row) -> Recommendation:
        return Recommendation(
            user_id=row["user_id"],
            career_id=row["career_id"],
            career_name=row["career_name"],
            match_percentage=row["match_percentage"],
            reasoning=row["reasoning"] or "",
            strengths=json.loads(row["strengths"] or "[]"),
            areas_to_develop=json.loads(row["areas_to_develop"] or "[]"),
            created_at=_parse_datetime(row["created_at"]),
        )

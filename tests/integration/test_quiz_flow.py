"""End-to-end tests for the quiz submission and recommendation flow."""

import asyncio

import pytest
import yaml


@pytest.fixture
async def service(tmp_path, quiz_config, matching_config):
    from career_match.store.repository import QuizRepository
    from career_match.store.service import QuizService

    repo = QuizRepository(tmp_path / "flow.db")
    await repo.initialize()
    yield QuizService(repo, quiz_config, matching_config)
    await repo.close()


class TestQuizFlow:
    """Exercise catalog import, submission and recommendations together."""

    @pytest.mark.asyncio
    async def test_full_flow_from_files(
        self, service, tmp_path, sample_questions, sample_careers
    ):
        """Loading files, submitting, and recommending should agree end to end."""
        from career_match.matching.catalog import CareerCatalog
        from career_match.quiz.bank import QuestionBank

        questions_file = tmp_path / "questions.yaml"
        questions_file.write_text(yaml.safe_dump(sample_questions), "utf-8")
        catalog_file = tmp_path / "careers.yaml"
        catalog_file.write_text(yaml.safe_dump({"careers": sample_careers}), "utf-8")

        await service.import_careers(CareerCatalog.load(catalog_file).careers)
        session = await service.create_session(
            3, QuestionBank.load(questions_file).questions
        )

        result = await service.submit_quiz(
            session.id,
            [
                {"question_id": 1, "answer": "B"},
                {"question_id": 2, "answer": "where"},
                {"question_id": 3, "answer": "loops"},
            ],
            user_id=3,
        )

        assert result.total_score == 2
        assert [s.skill for s in result.skill_breakdown] == ["Python", "SQL"]
        assert result.skill_breakdown[0].percentage == 50.0
        # Python at 50% is below the match threshold
        assert [(m.career_name, m.match_percentage) for m in result.career_matches] == [
            ("Backend Developer", 50.0),
            ("Data Analyst", 33.33),
        ]

        recs = await service.generate_recommendations(session.id, user_id=3)

        assert recs[0].career_name == "Backend Developer"
        assert recs[0].strengths == ["SQL"]
        assert recs[0].areas_to_develop == ["Python"]
        assert recs[0].reasoning.startswith(
            "You scored strongly in 1 of 2 required skills for Backend Developer"
        )

    @pytest.mark.asyncio
    async def test_concurrent_submissions_complete_once(
        self, service, sample_questions, correct_answers
    ):
        """Only one of several concurrent submissions should succeed."""
        from career_match.errors import ValidationError

        session = await service.create_session(7, sample_questions)

        outcomes = await asyncio.gather(
            *(service.submit_quiz(session.id, correct_answers) for _ in range(3)),
            return_exceptions=True,
        )

        successes = [o for o in outcomes if not isinstance(o, Exception)]
        failures = [o for o in outcomes if isinstance(o, ValidationError)]
        assert len(successes) == 1
        assert len(failures) == 2

    @pytest.mark.asyncio
    async def test_threaded_matching_agrees_with_serial(
        self, sample_session, sample_careers, correct_answers, quiz_config
    ):
        """Parallel career evaluation should give the same ranking."""
        from career_match.matching.config import MatchingConfig
        from career_match.matching.models import Career
        from career_match.pipeline import evaluate_quiz

        careers = [Career.from_dict(c) for c in sample_careers]
        serial = evaluate_quiz(
            sample_session,
            correct_answers,
            careers,
            quiz_config=quiz_config,
            matching_config=MatchingConfig(_env_file=None),  # type: ignore[call-arg]
        )
        threaded = evaluate_quiz(
            sample_session,
            correct_answers,
            careers,
            quiz_config=quiz_config,
            matching_config=MatchingConfig(_env_file=None, max_workers=4),  # type: ignore[call-arg]
        )

        assert [m.to_dict() for m in threaded.career_matches] == [
            m.to_dict() for m in serial.career_matches
        ]

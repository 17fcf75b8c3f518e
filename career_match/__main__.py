"""Main entry point for Career-Match."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from career_match import __version__
from career_match.config.settings import Settings
from career_match.errors import CareerMatchError
from career_match.utils.logging import configure_logging


def _load_json(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def _print_json(payload: object) -> None:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    print(json.dumps(payload, indent=2, default=_default))


def _load_answers(path: Path) -> list:
    """Load answers from a list or a `{answers: [...]}` JSON document."""
    data = _load_json(path)
    if isinstance(data, dict) and "answers" in data:
        data = data["answers"]
    if not isinstance(data, list):
        raise ValueError(f"Answers file must contain a list: {path}")
    return data


def _add_db_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Override database path (defaults to settings)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="career-match",
        description="Career-Match: score skill quizzes and rank matching careers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m career_match evaluate --questions q.yaml --answers a.json --catalog careers.yaml
  python -m career_match careers import careers.yaml
  python -m career_match quiz create --user-id 7 --questions q.yaml
  python -m career_match quiz submit <quiz_id> answers.json
  python -m career_match quiz result <quiz_id>
  python -m career_match recommend <quiz_id>
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from settings",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
        required=True,
    )

    # Offline evaluation: no database involved
    evaluate_parser = subparsers.add_parser(
        "evaluate",
        help="Score answers against a question file and rank careers",
    )
    evaluate_parser.add_argument(
        "--questions", type=Path, required=True, help="Question file (YAML/JSON)"
    )
    evaluate_parser.add_argument(
        "--answers", type=Path, required=True, help="Answers file (JSON)"
    )
    evaluate_parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Career catalog file (defaults to settings)",
    )
    evaluate_parser.add_argument(
        "--user-id",
        type=int,
        default=0,
        help="User id attached to the generated recommendations",
    )
    evaluate_parser.add_argument(
        "--recommend",
        action="store_true",
        help="Also print recommendations for the top matches",
    )

    # Career catalog
    careers_parser = subparsers.add_parser("careers", help="Career catalog utilities")
    careers_subparsers = careers_parser.add_subparsers(
        dest="careers_cmd",
        title="careers",
        description="Catalog operations",
        required=True,
    )
    careers_import = careers_subparsers.add_parser(
        "import", help="Import careers from a YAML/JSON file"
    )
    careers_import.add_argument("path", type=Path, help="Catalog file")
    _add_db_argument(careers_import)
    careers_list = careers_subparsers.add_parser("list", help="List careers")
    _add_db_argument(careers_list)
    careers_show = careers_subparsers.add_parser("show", help="Show one career")
    careers_show.add_argument("career_id", type=int, help="Career id")
    _add_db_argument(careers_show)

    # Quiz sessions
    quiz_parser = subparsers.add_parser("quiz", help="Quiz session operations")
    quiz_subparsers = quiz_parser.add_subparsers(
        dest="quiz_cmd",
        title="quiz",
        description="Quiz operations",
        required=True,
    )
    quiz_create = quiz_subparsers.add_parser("create", help="Create a quiz session")
    quiz_create.add_argument("--user-id", type=int, required=True, help="Owner id")
    quiz_create.add_argument(
        "--questions", type=Path, required=True, help="Question file (YAML/JSON)"
    )
    _add_db_argument(quiz_create)
    quiz_submit = quiz_subparsers.add_parser("submit", help="Submit quiz answers")
    quiz_submit.add_argument("quiz_id", type=str, help="Quiz session id")
    quiz_submit.add_argument("answers", type=Path, help="Answers file (JSON)")
    quiz_submit.add_argument(
        "--user-id", type=int, default=None, help="Submitting user (ownership check)"
    )
    _add_db_argument(quiz_submit)
    quiz_result = quiz_subparsers.add_parser(
        "result", help="Show the stored result of a submitted quiz"
    )
    quiz_result.add_argument("quiz_id", type=str, help="Quiz session id")
    quiz_result.add_argument(
        "--user-id", type=int, default=None, help="Requesting user (ownership check)"
    )
    _add_db_argument(quiz_result)

    # Recommendations
    recommend_parser = subparsers.add_parser(
        "recommend", help="Generate and store recommendations for a completed quiz"
    )
    recommend_parser.add_argument("quiz_id", type=str, help="Quiz session id")
    recommend_parser.add_argument(
        "--user-id", type=int, default=None, help="Requesting user (ownership check)"
    )
    _add_db_argument(recommend_parser)

    recommendations_parser = subparsers.add_parser(
        "recommendations", help="List stored recommendations for a user"
    )
    recommendations_parser.add_argument(
        "--user-id", type=int, required=True, help="User id"
    )
    _add_db_argument(recommendations_parser)

    return parser


def _run_evaluate(parsed: argparse.Namespace, settings: Settings) -> int:
    from career_match.matching.catalog import CareerCatalog
    from career_match.matching.models import recommendations_payload
    from career_match.matching.recommendations import RecommendationGenerator
    from career_match.pipeline import evaluate_quiz
    from career_match.quiz.bank import QuestionBank
    from career_match.quiz.models import QuizSession

    catalog_path = parsed.catalog or settings.catalog_path
    bank = QuestionBank.load(parsed.questions)
    catalog = CareerCatalog.load(catalog_path)
    answers = _load_answers(parsed.answers)

    session = QuizSession(
        id=parsed.questions.stem,
        user_id=parsed.user_id,
        questions=bank.questions,
    )
    result = evaluate_quiz(session, answers, catalog.matchable())
    payload: dict = result.to_dict()
    if parsed.recommend:
        recommendations = RecommendationGenerator().recommend(
            result.career_matches, result.skill_breakdown, user_id=parsed.user_id
        )
        payload.update(recommendations_payload(recommendations))
    _print_json(payload)
    return 0


async def _run_store_command(parsed: argparse.Namespace, settings: Settings) -> int:
    from career_match.matching.catalog import CareerCatalog
    from career_match.matching.models import recommendations_payload
    from career_match.quiz.bank import QuestionBank
    from career_match.store.repository import QuizRepository
    from career_match.store.service import QuizService

    db_path = getattr(parsed, "db", None) or settings.db_path
    repo = QuizRepository(db_path)
    await repo.initialize()
    service = QuizService(repo)

    try:
        if parsed.mode == "careers":
            if parsed.careers_cmd == "import":
                catalog = CareerCatalog.load(parsed.path)
                count = await service.import_careers(catalog.careers)
                print(f"Imported {count} career(s)")
                return 0
            if parsed.careers_cmd == "show":
                career = await service.get_career(parsed.career_id)
                _print_json(career.to_dict())
                return 0
            for career in await service.list_careers():
                skills = ", ".join(career.required_skills) or "-"
                print(f"{career.id}\t{career.name}\t{skills}")
            return 0

        if parsed.mode == "quiz":
            if parsed.quiz_cmd == "create":
                bank = QuestionBank.load(parsed.questions)
                session = await service.create_session(parsed.user_id, bank.questions)
                _print_json(
                    {
                        "quiz_id": session.id,
                        "questions": [q.to_dict() for q in session.questions],
                    }
                )
                return 0
            if parsed.quiz_cmd == "result":
                result = await service.get_result(
                    parsed.quiz_id, user_id=parsed.user_id
                )
                _print_json(result.to_dict())
                return 0
            answers = _load_answers(parsed.answers)
            result = await service.submit_quiz(
                parsed.quiz_id, answers, user_id=parsed.user_id
            )
            _print_json(result.to_dict())
            return 0

        if parsed.mode == "recommend":
            recommendations = await service.generate_recommendations(
                parsed.quiz_id, user_id=parsed.user_id
            )
            _print_json(recommendations_payload(recommendations))
            return 0

        if parsed.mode == "recommendations":
            recommendations = await service.list_recommendations(parsed.user_id)
            _print_json(recommendations_payload(recommendations))
            return 0

        print(f"Unknown command: {parsed.mode}", file=sys.stderr)
        return 1
    finally:
        await repo.close()


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    try:
        if parsed.mode == "evaluate":
            return _run_evaluate(parsed, settings)
        return asyncio.run(_run_store_command(parsed, settings))
    except CareerMatchError as e:
        logger.error("%s failed: %s", parsed.mode, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

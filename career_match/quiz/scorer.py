"""Answer scoring for quiz submissions."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from pydantic import ValidationError as PydanticValidationError

from career_match.errors import ValidationError
from career_match.quiz.config import QuizConfig, get_quiz_config
from career_match.quiz.models import (
    QuestionType,
    QuizAnswer,
    QuizQuestion,
    QuizSession,
    ScoredAnswer,
)
from career_match.utils.logging import get_logger

logger = get_logger("quiz.scorer")

OpenEndedStrategy = Callable[[str, str, QuizConfig], bool]

_KEYWORD_SPLIT = re.compile(r"[,;]")
_OPTION_LABEL = re.compile(r"^\s*([A-Za-z])\s*[\).:]\s+")
_BARE_LABEL = re.compile(r"^\s*([A-Za-z])\s*[\).:]?\s*$")


def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text.strip()).casefold()


def _strip_label(option: str) -> str:
    return _OPTION_LABEL.sub("", option, count=1)


def _label_for(index: int) -> str:
    return chr(ord("a") + index)


def parse_keywords(correct_answer: str) -> list[str]:
    """Split an open_ended keyword list into normalized keywords."""
    keywords: list[str] = []
    for chunk in _KEYWORD_SPLIT.split(correct_answer or ""):
        keyword = _normalize(chunk)
        if keyword and keyword not in keywords:
            keywords.append(keyword)
    return keywords


def score_open_ended(answer: str, correct_answer: str, config: QuizConfig) -> bool:
    """Keyword policy for open_ended questions.

    The answer is correct when it mentions at least `min_keyword_hits` of the
    comma/semicolon separated keywords as case-insensitive substrings. The
    requirement is capped at the number of keywords available.
    """
    keywords = parse_keywords(correct_answer)
    if not keywords:
        return False

    text = _normalize(answer)
    hits = sum(1 for keyword in keywords if keyword in text)
    return hits >= min(config.min_keyword_hits, len(keywords))


def canonical_option_index(question: QuizQuestion) -> int | None:
    """Return the index of the option that `correct_answer` designates."""
    options = question.options or []
    expected = _normalize(question.correct_answer)
    if not expected:
        return None

    for index, option in enumerate(options):
        if expected in {_normalize(option), _normalize(_strip_label(option))}:
            return index

    label = _BARE_LABEL.match(question.correct_answer)
    if label:
        index = ord(label.group(1).lower()) - ord("a")
        if 0 <= index < len(options):
            return index

    if expected.isdigit() and int(expected) < len(options):
        return int(expected)

    return None


def _other_option_texts(options: list[str], index: int) -> set[str]:
    texts: set[str] = set()
    for position, option in enumerate(options):
        if position != index:
            texts.add(_normalize(option))
            texts.add(_normalize(_strip_label(option)))
    return texts


def accepted_choices(question: QuizQuestion) -> set[str]:
    """Return every normalized submission accepted for a multiple_choice question.

    The label letter of the correct option is accepted unless another
    option reads as that letter.
    """
    accepted: set[str] = set()
    expected = _normalize(question.correct_answer)
    if expected:
        accepted.add(expected)

    index = canonical_option_index(question)
    if index is not None:
        option = (question.options or [])[index]
        accepted.add(_normalize(option))
        accepted.add(_normalize(_strip_label(option)))
        label = _label_for(index)
        if label not in _other_option_texts(question.options or [], index):
            accepted.add(label)

    accepted.discard("")
    return accepted


class AnswerScorer:
    """Judge answers against their questions' expected answers."""

    def __init__(
        self,
        config: QuizConfig | None = None,
        open_ended: OpenEndedStrategy = score_open_ended,
    ) -> None:
        self.config = config or get_quiz_config()
        self.open_ended = open_ended

    def is_correct(self, question: QuizQuestion, answer: str | None) -> bool:
        """Return True when `answer` is an accepted answer for `question`."""
        if answer is None or not answer.strip():
            return False

        if question.type == QuestionType.MULTIPLE_CHOICE:
            submitted = _normalize(answer)
            if submitted in accepted_choices(question):
                return True
            label = _BARE_LABEL.match(answer)
            return bool(label) and label.group(1).lower() in accepted_choices(question)

        return self.open_ended(answer, question.correct_answer, self.config)

    def score(self, question: QuizQuestion, answer: str | None) -> ScoredAnswer:
        """Score a single answer."""
        return ScoredAnswer(
            question_id=question.id,
            skill_category=question.skill_category,
            is_correct=self.is_correct(question, answer),
        )

    def score_submission(
        self, session: QuizSession, answers: Iterable[QuizAnswer | dict]
    ) -> list[ScoredAnswer]:
        """Score every answer of a submission.

        The whole submission is validated before anything is scored: an
        answer for an unknown question id, a duplicate answer, or a payload
        that does not parse raises ValidationError.

        Returns:
            Scored answers in the session's question order. Questions
            without an answer are not included.
        """
        parsed = parse_answers(answers)
        questions = session.question_map()

        by_question: dict[int, QuizAnswer] = {}
        for answer in parsed:
            if answer.question_id not in questions:
                raise ValidationError(
                    f"Answer references question {answer.question_id}, "
                    f"which is not part of quiz {session.id}"
                )
            if answer.question_id in by_question:
                raise ValidationError(
                    f"Question {answer.question_id} was answered more than once"
                )
            by_question[answer.question_id] = answer

        scored = [
            self.score(question, by_question[question.id].answer)
            for question in session.questions
            if question.id in by_question
        ]
        logger.debug(
            "Scored %d answer(s) for quiz %s (%d correct)",
            len(scored),
            session.id,
            sum(1 for item in scored if item.is_correct),
        )
        return scored


def parse_answers(answers: Iterable[QuizAnswer | dict]) -> list[QuizAnswer]:
    """Coerce a raw answer payload into QuizAnswer models."""
    if answers is None:
        raise ValidationError("Answers payload is missing")
    if isinstance(answers, (str, bytes, dict)):
        raise ValidationError("Answers payload must be a list of answers")

    parsed: list[QuizAnswer] = []
    for position, item in enumerate(answers):
        if isinstance(item, QuizAnswer):
            parsed.append(item)
            continue
        if not isinstance(item, dict):
            raise ValidationError(f"Answer #{position} must be an object")
        try:
            parsed.append(QuizAnswer.model_validate(item))
        except PydanticValidationError as e:
            raise ValidationError(f"Answer #{position} is malformed: {e}", e) from e
    return parsed

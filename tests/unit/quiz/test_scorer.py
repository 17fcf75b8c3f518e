"""Tests for quiz answer scoring."""

import pytest


def _question(**overrides):
    from career_match.quiz.models import QuizQuestion

    data = {
        "id": 1,
        "question": "Which clause filters rows?",
        "type": "multiple_choice",
        "options": ["SELECT", "WHERE", "ORDER BY"],
        "skill_category": "SQL",
        "correct_answer": "WHERE",
    }
    data.update(overrides)
    return QuizQuestion.model_validate(data)


class TestMultipleChoice:
    """Test multiple_choice scoring."""

    def test_exact_text_is_case_insensitive_and_trimmed(self, quiz_config):
        """The correct answer text should match regardless of case and padding."""
        from career_match.quiz.scorer import AnswerScorer

        scorer = AnswerScorer(quiz_config)
        question = _question()

        assert scorer.is_correct(question, "WHERE") is True
        assert scorer.is_correct(question, "  where ") is True
        assert scorer.is_correct(question, "SELECT") is False

    def test_option_label_is_accepted_for_text_answer(self, quiz_config):
        """The label of the correct option should be accepted."""
        from career_match.quiz.scorer import AnswerScorer

        scorer = AnswerScorer(quiz_config)
        question = _question()

        assert scorer.is_correct(question, "B") is True
        assert scorer.is_correct(question, "b)") is True
        assert scorer.is_correct(question, "A") is False

    def test_label_is_rejected_when_another_option_reads_as_it(self, quiz_config):
        """Choosing option "C" must not pass as the label of the third option."""
        from career_match.quiz.scorer import AnswerScorer, accepted_choices

        scorer = AnswerScorer(quiz_config)
        question = _question(
            options=["C", "Go", "Rust"],
            correct_answer="Rust",
            skill_category="Programming",
        )

        assert scorer.is_correct(question, "C") is False
        assert scorer.is_correct(question, "c)") is False
        assert scorer.is_correct(question, "Go") is False
        assert scorer.is_correct(question, "rust") is True
        assert accepted_choices(question) == {"rust"}

    def test_option_text_is_accepted_for_label_answer(self, quiz_config):
        """When the correct answer is a label, the option text should match too."""
        from career_match.quiz.scorer import AnswerScorer

        scorer = AnswerScorer(quiz_config)
        question = _question(
            options=["A) def", "B) func", "C) lambda"],
            correct_answer="A",
            skill_category="Python",
        )

        assert scorer.is_correct(question, "A") is True
        assert scorer.is_correct(question, "def") is True
        assert scorer.is_correct(question, "A) def") is True
        assert scorer.is_correct(question, "func") is False
        assert scorer.is_correct(question, "C") is False

    def test_digit_correct_answer_refers_to_option_index(self, quiz_config):
        """A digit correct answer should designate a zero-based option index."""
        from career_match.quiz.scorer import AnswerScorer, canonical_option_index

        question = _question(correct_answer="2")

        assert canonical_option_index(question) == 2
        assert AnswerScorer(quiz_config).is_correct(question, "order by") is True

    def test_empty_answer_is_incorrect(self, quiz_config):
        """Empty or missing answers should be incorrect, not errors."""
        from career_match.quiz.scorer import AnswerScorer

        scorer = AnswerScorer(quiz_config)
        question = _question()

        assert scorer.is_correct(question, "") is False
        assert scorer.is_correct(question, "   ") is False
        assert scorer.is_correct(question, None) is False


class TestOpenEnded:
    """Test the open_ended keyword policy."""

    def test_parse_keywords_splits_on_commas_and_semicolons(self):
        """Keywords should be split, trimmed, lowercased, and de-duplicated."""
        from career_match.quiz.scorer import parse_keywords

        assert parse_keywords("List, loop; Expression,, list") == [
            "list",
            "loop",
            "expression",
        ]

    def test_single_keyword_hit_is_enough_by_default(self, quiz_config):
        """One keyword hit should be enough with the default config."""
        from career_match.quiz.scorer import score_open_ended

        assert score_open_ended("I LOOP over items", "list, loop", quiz_config)
        assert not score_open_ended("no idea", "list, loop", quiz_config)

    def test_min_keyword_hits_is_respected(self):
        """min_keyword_hits should raise the number of required keywords."""
        from career_match.quiz.config import QuizConfig
        from career_match.quiz.scorer import score_open_ended

        config = QuizConfig(_env_file=None, min_keyword_hits=2)  # type: ignore[call-arg]

        assert score_open_ended("a list", "list, loop, expression", config) is False
        assert score_open_ended("a list loop", "list, loop, expression", config)

    def test_min_keyword_hits_is_capped_at_keyword_count(self):
        """A single-keyword answer key should not become impossible to answer."""
        from career_match.quiz.config import QuizConfig
        from career_match.quiz.scorer import score_open_ended

        config = QuizConfig(_env_file=None, min_keyword_hits=3)  # type: ignore[call-arg]

        assert score_open_ended("uses recursion", "recursion", config) is True

    def test_blank_keyword_spec_is_never_correct(self, quiz_config):
        """A question without keywords cannot be answered correctly."""
        from career_match.quiz.scorer import score_open_ended

        assert score_open_ended("anything", " ; , ", quiz_config) is False

    def test_strategy_can_be_swapped(self, quiz_config):
        """AnswerScorer should delegate open_ended questions to its strategy."""
        from career_match.quiz.scorer import AnswerScorer

        calls = []

        def strategy(answer, correct_answer, config):
            calls.append((answer, correct_answer))
            return True

        question = _question(type="open_ended", options=None, correct_answer="x")
        scorer = AnswerScorer(quiz_config, open_ended=strategy)

        assert scorer.is_correct(question, "whatever") is True
        assert calls == [("whatever", "x")]


class TestScoreSubmission:
    """Test whole-submission scoring."""

    def test_returns_results_in_question_order(self, sample_session, quiz_config):
        """Scored answers should follow the session's question order."""
        from career_match.quiz.scorer import AnswerScorer

        scored = AnswerScorer(quiz_config).score_submission(
            sample_session,
            [
                {"question_id": 3, "answer": "loop"},
                {"question_id": 1, "answer": "B"},
                {"question_id": 2, "answer": "WHERE"},
            ],
        )

        assert [s.question_id for s in scored] == [1, 2, 3]
        assert [s.is_correct for s in scored] == [False, True, True]
        assert [s.skill_category for s in scored] == ["Python", "SQL", "Python"]

    def test_unanswered_questions_are_skipped(self, sample_session, quiz_config):
        """Questions without an answer should not be scored."""
        from career_match.quiz.scorer import AnswerScorer

        scored = AnswerScorer(quiz_config).score_submission(
            sample_session, [{"question_id": 2, "answer": "WHERE"}]
        )

        assert [s.question_id for s in scored] == [2]

    def test_unknown_question_id_fails_whole_submission(
        self, sample_session, quiz_config
    ):
        """An answer for a question outside the session should raise."""
        from career_match.errors import ValidationError
        from career_match.quiz.scorer import AnswerScorer

        with pytest.raises(ValidationError, match="999"):
            AnswerScorer(quiz_config).score_submission(
                sample_session,
                [
                    {"question_id": 1, "answer": "A"},
                    {"question_id": 999, "answer": "A"},
                ],
            )

    def test_duplicate_answers_are_rejected(self, sample_session, quiz_config):
        """Answering the same question twice should raise."""
        from career_match.errors import ValidationError
        from career_match.quiz.scorer import AnswerScorer

        with pytest.raises(ValidationError):
            AnswerScorer(quiz_config).score_submission(
                sample_session,
                [
                    {"question_id": 1, "answer": "A"},
                    {"question_id": 1, "answer": "B"},
                ],
            )

    def test_malformed_answer_is_rejected(self, sample_session, quiz_config):
        """An answer without a question_id should raise ValidationError."""
        from career_match.errors import ValidationError
        from career_match.quiz.scorer import AnswerScorer

        with pytest.raises(ValidationError, match="malformed"):
            AnswerScorer(quiz_config).score_submission(
                sample_session, [{"answer": "A"}]
            )

    def test_non_list_payload_is_rejected(self):
        """parse_answers should reject a mapping payload."""
        from career_match.errors import ValidationError
        from career_match.quiz.scorer import parse_answers

        with pytest.raises(ValidationError):
            parse_answers({"question_id": 1, "answer": "A"})

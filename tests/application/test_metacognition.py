import pytest

from cardwise.application.metacognition import (
    mid_study_checklist,
    post_study_checklist,
    pre_study_checklist,
    score,
)
from cardwise.domain.checklist import ChecklistPhase, MetacognitionQuestion, QuestionType


@pytest.fixture
def pre_questions():
    return pre_study_checklist().questions


class TestChecklists:
    def test_pre_study(self):
        checklist = pre_study_checklist(topic="Organic chemistry")

        assert checklist.phase is ChecklistPhase.PRE
        assert checklist.context == "Organic chemistry"
        assert [q.id for q in checklist.questions] == ["pre-1", "pre-2", "pre-3", "pre-4"]
        assert [q.type for q in checklist.questions] == [
            QuestionType.RATING,
            QuestionType.YES_NO,
            QuestionType.SINGLE_SELECT,
            QuestionType.FREE_TEXT,
        ]

    def test_mid_study(self):
        checklist = mid_study_checklist()
        assert checklist.phase is ChecklistPhase.MID
        assert [q.id for q in checklist.questions] == ["mid-1", "mid-2", "mid-3"]

    def test_post_study_mentions_session_numbers(self):
        checklist = post_study_checklist(12, 0.125)

        assert checklist.phase is ChecklistPhase.POST
        assert checklist.context == "12 cards studied, 13% correct"
        assert "12 cards" in checklist.questions[0].text
        assert "13%" in checklist.questions[2].text

    def test_each_call_builds_a_fresh_checklist(self):
        assert pre_study_checklist() is not pre_study_checklist()


class TestScore:
    def test_no_answers_scores_zero(self, pre_questions):
        assert score({}, pre_questions) == 0

    def test_best_answers_score_100(self, pre_questions):
        answers = {
            "pre-1": 5,
            "pre-2": True,
            "pre-3": "Fully focused",
            "pre-4": "Reaction mechanisms",
        }
        assert score(answers, pre_questions) == 100

    def test_unanswered_questions_are_left_out(self, pre_questions):
        assert score({"pre-1": 3, "pre-2": None, "pre-4": ""}, pre_questions) == 60

    def test_single_select_scores_by_position(self, pre_questions):
        assert score({"pre-3": "Somewhat focused"}, pre_questions) == 67
        assert score({"pre-3": "Finding it hard to focus"}, pre_questions) == 33

    def test_unknown_option_counts_as_zero(self, pre_questions):
        assert score({"pre-3": "Sleepy"}, pre_questions) == 0

    def test_no_and_non_numeric_rating_score_nothing(self, pre_questions):
        assert score({"pre-2": False}, pre_questions) == 0
        assert score({"pre-1": "high"}, pre_questions) == 0

    def test_mixed_answers(self, pre_questions):
        # (4 + 0) / (5 + 1)
        assert score({"pre-1": 4, "pre-2": False}, pre_questions) == 67

    def test_custom_scale_and_half_up_rounding(self):
        question = MetacognitionQuestion(
            id="q", text="Rate it", type=QuestionType.RATING, scale=8
        )
        # 1 / 8 = 12.5%
        assert score({"q": 1}, [question]) == 13

    def test_answers_for_unknown_questions_are_ignored(self, pre_questions):
        assert score({"other": 5}, pre_questions) == 0

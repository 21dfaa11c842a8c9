"""
Metacognition checklists and confidence scoring.

Checklists are generated fresh per call; answers arrive separately as a
mapping of question id -> answer and are scored without touching the checklist.
"""

from collections.abc import Iterable, Mapping
from numbers import Real
from typing import Any

from cardwise.application.utils.rounding import round_half_up
from cardwise.domain.checklist import (
    ChecklistPhase,
    MetacognitionChecklist,
    MetacognitionQuestion,
    QuestionType,
)
from cardwise.domain.constants import DEFAULT_RATING_SCALE


def pre_study_checklist(topic: str | None = None) -> MetacognitionChecklist:
    questions = (
        MetacognitionQuestion(
            id="pre-1",
            text="How well do you think you already know today's topic?",
            type=QuestionType.RATING,
            scale=DEFAULT_RATING_SCALE,
        ),
        MetacognitionQuestion(
            id="pre-2",
            text="Can you state your learning goal for today?",
            type=QuestionType.YES_NO,
        ),
        MetacognitionQuestion(
            id="pre-3",
            text="How focused are you right now?",
            type=QuestionType.SINGLE_SELECT,
            options=("Fully focused", "Somewhat focused", "Finding it hard to focus"),
        ),
        MetacognitionQuestion(
            id="pre-4",
            text="Write down anything you expect to find difficult today.",
            type=QuestionType.FREE_TEXT,
        ),
    )
    return MetacognitionChecklist(phase=ChecklistPhase.PRE, questions=questions, context=topic)


def mid_study_checklist() -> MetacognitionChecklist:
    questions = (
        MetacognitionQuestion(
            id="mid-1",
            text="How well do you think you have understood the material so far?",
            type=QuestionType.RATING,
            scale=DEFAULT_RATING_SCALE,
        ),
        MetacognitionQuestion(
            id="mid-2",
            text="Are you still focused?",
            type=QuestionType.YES_NO,
        ),
        MetacognitionQuestion(
            id="mid-3",
            text="Can you name the hardest concept so far?",
            type=QuestionType.SINGLE_SELECT,
            options=("Clearly", "Roughly", "Not at all"),
        ),
    )
    return MetacognitionChecklist(phase=ChecklistPhase.MID, questions=questions)


def post_study_checklist(cards_studied: int, correct_rate: float) -> MetacognitionChecklist:
    """
    Args:
        cards_studied: Number of cards reviewed in the session.
        correct_rate: Share of correct reviews, 0-1.
    """
    percent = round_half_up(correct_rate * 100)
    questions = (
        MetacognitionQuestion(
            id="post-1",
            text=(
                f"How well do you think you will remember the {cards_studied} cards "
                "you studied today?"
            ),
            type=QuestionType.RATING,
            scale=DEFAULT_RATING_SCALE,
        ),
        MetacognitionQuestion(
            id="post-2",
            text="Do you feel you reached today's learning goal?",
            type=QuestionType.YES_NO,
        ),
        MetacognitionQuestion(
            id="post-3",
            text=f"Your accuracy was {percent}%. Are you satisfied with this result?",
            type=QuestionType.SINGLE_SELECT,
            options=("Very satisfied", "Neutral", "Not satisfied"),
        ),
        MetacognitionQuestion(
            id="post-4",
            text="Write down anything to improve next time.",
            type=QuestionType.FREE_TEXT,
        ),
    )
    return MetacognitionChecklist(
        phase=ChecklistPhase.POST,
        questions=questions,
        context=f"{cards_studied} cards studied, {percent}% correct",
    )


def score(answers: Mapping[str, Any], questions: Iterable[MetacognitionQuestion]) -> int:
    """
    Convert self-report answers into a 0-100 confidence score.

    Per answered question (points / possible):
        rating         answer / scale (scale defaults to 5)
        yes/no         1 / 1 if True, else 0 / 1
        single-select  (n - index) / n for a known option, else 0 / n
        free text      1 / 1

    Unanswered questions (missing, None or "") are left out of both totals.
    Returns 0 when nothing was answered.
    """
    points = 0.0
    possible = 0

    for question in questions:
        answer = answers.get(question.id)
        if answer is None or answer == "":
            continue

        if question.type is QuestionType.RATING:
            possible += question.scale or DEFAULT_RATING_SCALE
            if isinstance(answer, Real) and not isinstance(answer, bool):
                points += float(answer)
        elif question.type is QuestionType.YES_NO:
            possible += 1
            points += 1 if answer is True else 0
        elif question.type is QuestionType.SINGLE_SELECT:
            options = list(question.options)
            possible += len(options)
            if answer in options:
                points += len(options) - options.index(answer)
        elif question.type is QuestionType.FREE_TEXT:
            possible += 1
            points += 1

    if possible == 0:
        return 0
    return round_half_up(points / possible * 100)

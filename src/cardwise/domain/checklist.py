"""Domain models for metacognition checklists."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .models import utcnow


class ChecklistPhase(str, Enum):
    PRE = "pre"
    MID = "mid"
    POST = "post"


class QuestionType(str, Enum):
    RATING = "rating"
    YES_NO = "yes_no"
    SINGLE_SELECT = "single_select"
    FREE_TEXT = "free_text"


@dataclass(frozen=True)
class MetacognitionQuestion:
    """
    A self-report question.

    Attributes:
        id: Stable key used in the answers mapping.
        text: Prompt shown to the learner.
        type: How the answer is scored.
        scale: Maximum value for rating questions (defaults to 5 when scoring).
        options: Choices for single-select questions, best answer first.
    """

    id: str
    text: str
    type: QuestionType
    scale: int | None = None
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class MetacognitionChecklist:
    phase: ChecklistPhase
    questions: tuple[MetacognitionQuestion, ...]
    generated_at: datetime = field(default_factory=utcnow)
    context: str | None = None

"""
Domain models for cards, decks and review events.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum

from .constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
)
from .errors import InvalidArgumentError


def utcnow() -> datetime:
    return datetime.now(UTC)


class Difficulty(str, Enum):
    """Difficulty label attached to a card after each review."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(f"Unknown difficulty label: {value!r}") from None


class StudyMode(str, Enum):
    NORMAL = "normal"
    INTERLEAVED = "interleaved"
    DELIBERATE = "deliberate"
    DUAL_CODING = "dual-coding"


@dataclass(frozen=True)
class ReviewState:
    """
    SM-2 review state for a card.

    Attributes:
        ease_factor: Multiplier applied to the interval on success (>= 1.3).
        interval: Days until the next review (>= 1).
        repetitions: Consecutive successful reviews (>= 0).
        next_due: When the card becomes due.
        last_reviewed: When the card was last reviewed, if ever.
        difficulty: Label derived from the last quality score.
    """

    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = DEFAULT_INTERVAL_DAYS
    repetitions: int = 0
    next_due: datetime = field(default_factory=utcnow)
    last_reviewed: datetime | None = None
    difficulty: Difficulty = Difficulty.MEDIUM

    def __post_init__(self) -> None:
        if self.ease_factor < MIN_EASE_FACTOR:
            raise InvalidArgumentError(
                f"ease_factor must be >= {MIN_EASE_FACTOR}, got {self.ease_factor}"
            )
        if self.interval < 1:
            raise InvalidArgumentError(f"interval must be >= 1, got {self.interval}")
        if self.repetitions < 0:
            raise InvalidArgumentError(f"repetitions must be >= 0, got {self.repetitions}")
        if not isinstance(self.difficulty, Difficulty):
            object.__setattr__(self, "difficulty", Difficulty.parse(self.difficulty))


@dataclass(eq=False)
class Card:
    """
    A flashcard.

    Cards compare by identity: derived decks hold the same instances as their
    source decks, and the review state is replaced (never mutated) on review.
    """

    id: str
    front: str
    back: str
    tags: list[str] = field(default_factory=list)
    category: str | None = None
    state: ReviewState = field(default_factory=ReviewState)


@dataclass
class Deck:
    """An ordered collection of cards plus metadata."""

    id: str
    name: str
    cards: list[Card] = field(default_factory=list)
    description: str = ""
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # Populated only on derived decks (deliberate practice, interleaved)
    source_deck_ids: list[str] = field(default_factory=list)

    @property
    def topic(self) -> str:
        """Effective topic label: category, falling back to the deck name."""
        return self.category or self.name


@dataclass(frozen=True)
class ReviewEvent:
    """
    One learner review of one card.

    Attributes:
        card_id: The reviewed card.
        quality: Self-assessed recall grade (0-5).
        reviewed_at: When the review happened.
        response_time_ms: Time taken to answer, if measured.
        is_correct: Explicit correctness flag; derived from quality when absent.
    """

    card_id: str
    quality: int
    reviewed_at: datetime = field(default_factory=utcnow)
    response_time_ms: int | None = None
    is_correct: bool | None = None

    def __post_init__(self) -> None:
        validate_quality(self.quality)

    @property
    def correct(self) -> bool:
        if self.is_correct is not None:
            return self.is_correct
        return self.quality >= PASSING_QUALITY


@dataclass
class StudySession:
    id: str
    deck_id: str
    started_at: datetime = field(default_factory=utcnow)
    ended_at: datetime | None = None
    results: list[ReviewEvent] = field(default_factory=list)
    mode: StudyMode = StudyMode.NORMAL


def validate_quality(quality: int) -> int:
    """Reject anything that is not an integer grade in 0..5."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidArgumentError(f"quality must be an integer, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidArgumentError(
            f"quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}"
        )
    return quality

"""
Domain models for learning statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from enum import Enum


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


@dataclass(frozen=True)
class TopicStat:
    """
    Aggregated review counts for one topic.

    Recomputed on every analysis; has no persisted identity.

    Attributes:
        topic: Deck category, or deck name when the deck has no category.
        attempted: Sum of repetition counts across the topic's cards.
        correct: Estimated successful reviews (ease-factor heuristic).
        accuracy: correct / attempted.
        priority: Remediation tier; None for strong topics.
    """

    topic: str
    attempted: int
    correct: int
    accuracy: float
    priority: Priority | None = None


@dataclass(frozen=True)
class WeakTopic:
    topic: str
    error_rate: float
    priority: Priority
    recommended_actions: list[str] = field(default_factory=list)


@dataclass
class WeaknessReport:
    """Result of a weakness analysis across decks."""

    overall_accuracy: float
    strong_topics: list[str]
    weak_topics: list[WeakTopic]  # Ordered high -> medium -> low
    trend: Trend
    recommendations: list[str]
    topic_stats: list[TopicStat] = field(default_factory=list)


@dataclass
class SessionStatistics:
    """Summary of one study session's review events."""

    total_reviews: int = 0
    correct_count: int = 0
    incorrect_count: int = 0
    average_quality: float = 0.0
    completion_rate: float = 0.0  # Percent correct, 0-100
    average_time_ms: int = 0
    streak_count: int = 0  # Trailing consecutive correct reviews
    hard_card_ids: list[str] = field(default_factory=list)

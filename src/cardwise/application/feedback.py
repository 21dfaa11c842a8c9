"""Adaptive feedback for a single review outcome."""

from dataclasses import dataclass
from enum import Enum

from cardwise.domain.constants import (
    DEFAULT_RESPONSE_TIME_MS,
    EXCELLENT_STREAK,
    FAST_RESPONSE_MS,
)
from cardwise.domain.models import Difficulty


class FeedbackTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_REVIEW = "needs_review"
    STRUGGLING = "struggling"


@dataclass(frozen=True)
class AdaptiveFeedback:
    tier: FeedbackTier
    message: str
    suggested_action: str
    adjustment: Difficulty


_EXCELLENT = AdaptiveFeedback(
    tier=FeedbackTier.EXCELLENT,
    message="Excellent! Fast and accurate.",
    suggested_action="You can lengthen the review interval for this card.",
    adjustment=Difficulty.EASY,
)
_GOOD_FAST = AdaptiveFeedback(
    tier=FeedbackTier.GOOD,
    message="Well done! That's correct.",
    suggested_action="Keep the current review interval.",
    adjustment=Difficulty.EASY,
)
_GOOD_SLOW = AdaptiveFeedback(
    tier=FeedbackTier.GOOD,
    message="Correct. Review it again to recall it faster.",
    suggested_action="Shorten the review interval slightly to practice quick recall.",
    adjustment=Difficulty.MEDIUM,
)
_STRUGGLING = AdaptiveFeedback(
    tier=FeedbackTier.STRUGGLING,
    message="This concept still looks difficult.",
    suggested_action="Check the answer, then review it again tomorrow.",
    adjustment=Difficulty.HARD,
)
_NEEDS_REVIEW = AdaptiveFeedback(
    tier=FeedbackTier.NEEDS_REVIEW,
    message="Missed, but you've answered this well before. Review it again.",
    suggested_action="Look over the card and review it again in 24 hours.",
    adjustment=Difficulty.MEDIUM,
)


def classify(
    is_correct: bool,
    response_time_ms: int | None = DEFAULT_RESPONSE_TIME_MS,
    current_streak: int | None = 0,
) -> AdaptiveFeedback:
    """
    Classify one review into a feedback tier.

    Rules are checked in order; the first match wins:
        correct, fast, streak >= 2  -> excellent / easy
        correct, fast               -> good / easy
        correct                     -> good / medium
        incorrect, streak == 0      -> struggling / hard
        incorrect                   -> needs_review / medium

    "Fast" means under 8 seconds. A missing response time counts as 10 seconds
    and a missing streak as 0.
    """
    if response_time_ms is None:
        response_time_ms = DEFAULT_RESPONSE_TIME_MS
    if current_streak is None:
        current_streak = 0

    fast = response_time_ms < FAST_RESPONSE_MS

    if is_correct and fast and current_streak >= EXCELLENT_STREAK:
        return _EXCELLENT
    if is_correct and fast:
        return _GOOD_FAST
    if is_correct:
        return _GOOD_SLOW
    if current_streak == 0:
        return _STRUGGLING
    return _NEEDS_REVIEW

"""
SM-2 review scheduler.

Maps (card, quality) to the card's next review state:
1. Failed recall (quality < 3) resets repetitions and the interval
2. Successful recall grows the interval 1 -> 6 -> interval x ease
3. Ease factor moves by the SM-2 formula, floored at 1.3
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from cardwise.application.utils.rounding import round_half_up
from cardwise.domain.constants import (
    DEFAULT_INTERVAL_DAYS,
    EASY_QUALITY,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
)
from cardwise.domain.models import Card, Difficulty, ReviewState, utcnow, validate_quality

logger = logging.getLogger(__name__)


def next_state(card: Card, quality: int, now: datetime | None = None) -> ReviewState:
    """
    Compute the review state that follows grading `card` with `quality`.

    The card is not modified; persisting the returned state is the caller's job.

    Args:
        card: The reviewed card (its current state is read).
        quality: Recall grade, 0 (blank) to 5 (perfect).
        now: Review time (default: current UTC time).

    Returns:
        A new ReviewState.

    Raises:
        InvalidArgumentError: If quality is not an integer in 0..5.
    """
    validate_quality(quality)
    now = now or utcnow()
    state = card.state

    if quality < PASSING_QUALITY:
        repetitions = 0
        interval = DEFAULT_INTERVAL_DAYS
    else:
        if state.repetitions == 0:
            interval = DEFAULT_INTERVAL_DAYS
        elif state.repetitions == 1:
            interval = SECOND_INTERVAL_DAYS
        else:
            interval = round_half_up(state.interval * state.ease_factor)
        repetitions = state.repetitions + 1

    return replace(
        state,
        ease_factor=next_ease_factor(state.ease_factor, quality),
        interval=interval,
        repetitions=repetitions,
        next_due=now + timedelta(days=interval),
        last_reviewed=now,
        difficulty=difficulty_for_quality(quality),
    )


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3."""
    miss = MAX_QUALITY - quality
    updated = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    return max(MIN_EASE_FACTOR, updated)


def difficulty_for_quality(quality: int) -> Difficulty:
    if quality >= EASY_QUALITY:
        return Difficulty.EASY
    if quality >= PASSING_QUALITY:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def apply_review(card: Card, quality: int, now: datetime | None = None) -> ReviewState:
    """Replace the card's state with its next state and return it."""
    card.state = next_state(card, quality, now)
    logger.debug(
        f"[review] card={card.id} q={quality} interval={card.state.interval} "
        f"ease={card.state.ease_factor:.2f} reps={card.state.repetitions}"
    )
    return card.state

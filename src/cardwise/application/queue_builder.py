"""
Queue builder for due-card study sessions.

Builds ordered study queues by:
1. Filtering cards whose next review is due
2. Sorting by due date, then difficulty severity, then ease factor
3. Capping the queue at a maximum size
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from cardwise.domain.constants import DEFAULT_MAX_CARDS
from cardwise.domain.errors import InvalidArgumentError
from cardwise.domain.models import Card, Difficulty, utcnow

logger = logging.getLogger(__name__)

# Lower sorts first: hard cards are studied before easy ones on the same day
_SEVERITY = {Difficulty.HARD: 0, Difficulty.MEDIUM: 1, Difficulty.EASY: 2}


@dataclass
class QueueBuildResult:
    """Result of queue building operation."""

    queue: list[Card]  # Due cards in study order, capped
    due_count: int  # Due cards before capping
    deferred: list[Card]  # Due cards cut by the cap, in study order


def due_cards(cards: Iterable[Card], now: datetime | None = None) -> list[Card]:
    """
    Return the cards whose next review is at or before `now`, in input order.
    """
    now = now or utcnow()
    return [card for card in cards if card.state.next_due <= now]


def prioritize(cards: Iterable[Card]) -> list[Card]:
    """
    Order cards for study.

    Sort keys: oldest due date first, then hard > medium > easy, then lowest
    ease factor. The sort is stable, so fully tied cards keep their input order.
    """
    return sorted(cards, key=_study_key)


def _study_key(card: Card) -> tuple[datetime, int, float]:
    state = card.state
    return (state.next_due, _SEVERITY.get(state.difficulty, 1), state.ease_factor)


def build_study_queue(
    cards: Iterable[Card],
    now: datetime | None = None,
    max_cards: int | None = DEFAULT_MAX_CARDS,
) -> QueueBuildResult:
    """
    Build a prioritized queue of due cards.

    Args:
        cards: Candidate cards (any order)
        now: Reference time for due-ness (default: current UTC time)
        max_cards: Maximum queue size; None for no cap

    Returns:
        QueueBuildResult with the capped queue and the deferred remainder
    """
    if max_cards is not None and max_cards < 0:
        raise InvalidArgumentError(f"max_cards must be >= 0, got {max_cards}")

    ordered = prioritize(due_cards(cards, now))
    limit = len(ordered) if max_cards is None else max_cards

    logger.debug(f"[queue] due={len(ordered)} limit={limit}")

    return QueueBuildResult(
        queue=ordered[:limit],
        due_count=len(ordered),
        deferred=ordered[limit:],
    )

"""
Study Service: Application layer orchestrator.

Coordinates the deck store, the scheduler, the queue builder, the composers
and adaptive feedback for one learner's deck collection.
"""

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from cardwise.application.composer import (
    DeliberatePracticeConfig,
    InterleavedConfig,
    compose_deliberate_practice,
    compose_interleaved,
)
from cardwise.application.config import AppConfig
from cardwise.application.deck_loading import load_decks_safely
from cardwise.application.factory import get_shuffle_rng
from cardwise.application.feedback import AdaptiveFeedback, classify
from cardwise.application.queue_builder import QueueBuildResult, build_study_queue
from cardwise.application.scheduler import apply_review
from cardwise.application.stats.session_metrics import current_streak
from cardwise.domain.errors import DeckStoreError, InvalidArgumentError
from cardwise.domain.models import Card, Deck, Difficulty, ReviewEvent, ReviewState, StudySession
from cardwise.domain.ports import DeckStore

logger = logging.getLogger(__name__)


@dataclass
class ReviewOutcome:
    """Result of recording one review."""

    card: Card  # The canonical card, already carrying the new state
    state: ReviewState
    feedback: AdaptiveFeedback


class StudyService:
    """
    Application service for studying a deck collection.

    Depends on the DeckStore abstraction, so tests can inject an
    in-memory store.
    """

    def __init__(
        self,
        store: DeckStore,
        config: AppConfig | None = None,
        rng: random.Random | None = None,
    ):
        """
        Args:
            store: The repository (port) for loading and saving decks.
            config: Composer defaults; resolved from the environment if not provided.
            rng: Random source for shuffled decks; seeded from config if not provided.
        """
        self._store = store
        self._config = config or AppConfig()
        self._rng = rng if rng is not None else get_shuffle_rng(self._config)

    def load(self) -> list[Deck]:
        return load_decks_safely(self._store)

    def save(self, decks: list[Deck]) -> bool:
        """
        Persist decks. Returns False (after logging) if the store failed.
        """
        try:
            self._store.save_decks(decks)
        except DeckStoreError as e:
            logger.error(f"Could not save {len(decks)} decks: {e}")
            return False
        return True

    def study_queue(
        self,
        decks: Iterable[Deck],
        now: datetime | None = None,
        max_cards: int | None = None,
    ) -> QueueBuildResult:
        """
        Build the prioritized queue of due cards across all decks.

        A card reachable through several decks is queued once.
        """
        limit = self._config.default_max_cards if max_cards is None else max_cards
        return build_study_queue(_unique_cards(decks), now=now, max_cards=limit)

    def record_review(
        self,
        decks: Iterable[Deck],
        event: ReviewEvent,
        session: StudySession | None = None,
    ) -> ReviewOutcome:
        """
        Apply a review to the canonical card and classify the outcome.

        The streak used for feedback is the session's correct streak before
        this review (0 without a session). The event is appended to the session.

        Raises:
            InvalidArgumentError: If no deck contains `event.card_id`.
        """
        decks = list(decks)
        card, owner = _find_canonical(decks, event.card_id)
        if card is None:
            raise InvalidArgumentError(f"Unknown card id: {event.card_id!r}")

        streak = current_streak(session.results) if session else 0
        state = apply_review(card, event.quality, now=event.reviewed_at)
        if owner is not None:
            owner.updated_at = event.reviewed_at

        feedback = classify(event.correct, event.response_time_ms, streak)
        if session is not None:
            session.results.append(event)

        logger.info(
            f"Reviewed {card.id}: q={event.quality} next in {state.interval}d "
            f"({feedback.tier.value})"
        )
        return ReviewOutcome(card=card, state=state, feedback=feedback)

    def deliberate_practice(
        self,
        decks: list[Deck],
        focus_topics: list[str] | None = None,
        target_difficulty: Difficulty | str | None = None,
        max_cards: int | None = None,
        tolerance: int = 0,
        now: datetime | None = None,
    ) -> Deck:
        config = DeliberatePracticeConfig(
            focus_topics=list(focus_topics or []),
            target_difficulty=target_difficulty,
            max_cards=self._config.default_max_cards if max_cards is None else max_cards,
            tolerance=tolerance,
        )
        return compose_deliberate_practice(decks, config, now=now)

    def interleaved(
        self,
        decks: list[Deck],
        deck_ids: list[str] | None = None,
        cards_per_deck: int | None = None,
        shuffle_mode: str | None = None,
        now: datetime | None = None,
    ) -> Deck:
        config = InterleavedConfig(
            deck_ids=list(deck_ids or []),
            cards_per_deck=(
                self._config.default_cards_per_deck if cards_per_deck is None else cards_per_deck
            ),
            shuffle_mode=shuffle_mode or self._config.default_shuffle_mode,
        )
        return compose_interleaved(decks, config, rng=self._rng, now=now)


def _unique_cards(decks: Iterable[Deck]) -> list[Card]:
    seen: set[int] = set()
    cards: list[Card] = []
    for deck in decks:
        for card in deck.cards:
            if id(card) not in seen:
                seen.add(id(card))
                cards.append(card)
    return cards


def _find_canonical(decks: list[Deck], card_id: str) -> tuple[Card | None, Deck | None]:
    """
    Locate a card by id, preferring source decks over derived decks.
    """
    fallback: Card | None = None
    for deck in decks:
        for card in deck.cards:
            if card.id != card_id:
                continue
            if not deck.source_deck_ids:
                return card, deck
            fallback = fallback or card
    return fallback, None

import random
from datetime import UTC, datetime, timedelta

import pytest

from cardwise.application.config import AppConfig
from cardwise.domain.models import Card, Deck, Difficulty, ReviewState

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """A fixed reference time so due-date assertions are reproducible."""
    return NOW


@pytest.fixture
def make_card():
    """Factory for cards with a custom review state."""

    def _make(
        card_id: str,
        ease: float = 2.5,
        interval: int = 1,
        reps: int = 0,
        due_in_days: float = 0,
        difficulty: Difficulty = Difficulty.MEDIUM,
        tags: list[str] | None = None,
        category: str | None = None,
    ) -> Card:
        state = ReviewState(
            ease_factor=ease,
            interval=interval,
            repetitions=reps,
            next_due=NOW + timedelta(days=due_in_days),
            difficulty=difficulty,
        )
        return Card(
            id=card_id,
            front=f"Front {card_id}",
            back=f"Back {card_id}",
            tags=tags or [],
            category=category,
            state=state,
        )

    return _make


@pytest.fixture
def make_deck(make_card):
    """Factory for a deck of `size` default cards with ids `<deck_id>-<n>`."""

    def _make(
        deck_id: str,
        size: int = 0,
        name: str | None = None,
        category: str | None = None,
        cards: list[Card] | None = None,
    ) -> Deck:
        if cards is None:
            cards = [make_card(f"{deck_id}-{i}") for i in range(size)]
        return Deck(
            id=deck_id,
            name=name or deck_id.title(),
            cards=cards,
            category=category,
            created_at=NOW,
            updated_at=NOW,
        )

    return _make


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def app_config(tmp_path):
    """Config isolated from the user's environment and home directory."""
    return AppConfig(store_backend="memory", deck_dir=tmp_path / "decks")

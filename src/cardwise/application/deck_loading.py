"""Loading decks from a store without letting storage failures escape."""

import logging

from cardwise.domain.errors import DeckStoreError
from cardwise.domain.models import Card, Deck
from cardwise.domain.ports import DeckStore

logger = logging.getLogger(__name__)


def load_decks_safely(store: DeckStore) -> list[Deck]:
    """
    Load decks, treating store failures as an empty collection.
    """
    try:
        decks = store.load_decks()
    except DeckStoreError as e:
        logger.warning(f"Could not load decks, continuing with none: {e}")
        return []
    return relink_derived_decks(decks)


def relink_derived_decks(decks: list[Deck]) -> list[Deck]:
    """
    Point derived decks at the canonical Card instances of their source decks.

    Stores persist each deck's cards separately, so after a reload a derived
    deck holds detached copies. Cards are matched by id, the first source deck
    holding an id wins; a card with no canonical counterpart is left as loaded.
    """
    canonical: dict[str, Card] = {}
    for deck in decks:
        if not deck.source_deck_ids:
            for card in deck.cards:
                canonical.setdefault(card.id, card)
    for deck in decks:
        if deck.source_deck_ids:
            deck.cards = [canonical.get(card.id, card) for card in deck.cards]
    return decks

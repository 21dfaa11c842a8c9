"""
In-memory Deck Store: Infrastructure adapter holding decks in process memory.

Used by tests and by callers that do not need persistence.
"""

import copy
import logging

from cardwise.domain.errors import DeckStoreError
from cardwise.domain.models import Deck
from cardwise.domain.ports import DeckStore

logger = logging.getLogger(__name__)


class InMemoryDeckStore(DeckStore):
    """
    Keeps deep copies of saved decks, so callers never share state with the store.

    Set `fail_on_load` / `fail_on_save` to simulate an unavailable backend.
    """

    def __init__(self, decks: list[Deck] | None = None):
        self._decks: list[Deck] = copy.deepcopy(decks or [])
        self.fail_on_load = False
        self.fail_on_save = False
        self.save_count = 0

    def load_decks(self) -> list[Deck]:
        if self.fail_on_load:
            raise DeckStoreError("in-memory store is unavailable")
        return copy.deepcopy(self._decks)

    def save_decks(self, decks: list[Deck]) -> None:
        if self.fail_on_save:
            raise DeckStoreError("in-memory store is unavailable")
        self._decks = copy.deepcopy(decks)
        self.save_count += 1
        logger.debug(f"Stored {len(decks)} decks in memory")

import pytest

from cardwise.domain.errors import DeckStoreError
from cardwise.infrastructure.stores.memory import InMemoryDeckStore


def test_starts_empty():
    assert InMemoryDeckStore().load_decks() == []


def test_loaded_decks_are_copies(make_deck):
    deck = make_deck("a", size=2)
    store = InMemoryDeckStore([deck])

    loaded = store.load_decks()
    loaded[0].cards.clear()

    assert len(deck.cards) == 2
    assert len(store.load_decks()[0].cards) == 2


def test_save_counts_and_replaces(make_deck):
    store = InMemoryDeckStore([make_deck("a", size=1)])

    store.save_decks([make_deck("b", size=1)])

    assert store.save_count == 1
    assert [d.id for d in store.load_decks()] == ["b"]


def test_failure_flags(make_deck):
    store = InMemoryDeckStore()
    store.fail_on_load = True
    store.fail_on_save = True

    with pytest.raises(DeckStoreError):
        store.load_decks()
    with pytest.raises(DeckStoreError):
        store.save_decks([make_deck("a")])

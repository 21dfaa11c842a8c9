"""
Deck Store Factory
Centralizes the logic for selecting the deck store adapter.
"""

import random

from cardwise.application.config import AppConfig
from cardwise.domain.ports import DeckStore
from cardwise.infrastructure.stores.memory import InMemoryDeckStore
from cardwise.infrastructure.stores.yaml_store import YamlDeckStore


def get_deck_store(config: AppConfig) -> DeckStore:
    """
    Returns the DeckStore implementation selected by `config.store_backend`.
    """
    if config.store_backend == "memory":
        return InMemoryDeckStore()

    return YamlDeckStore(root=config.deck_dir)


def get_shuffle_rng(config: AppConfig) -> random.Random | None:
    """
    Returns a seeded generator when `config.shuffle_seed` is set, else None
    (composers then fall back to the process-wide generator).
    """
    if config.shuffle_seed is None:
        return None
    return random.Random(config.shuffle_seed)

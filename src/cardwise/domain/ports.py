"""
Ports (interfaces) for deck persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import Deck


class DeckStore(ABC):
    """
    Port for loading and saving the full deck collection.

    Implementations:
        - YamlDeckStore: Deck index plus one card file per deck on disk.
        - InMemoryDeckStore: Process-local store used by tests.
    """

    @abstractmethod
    def load_decks(self) -> list[Deck]:
        """
        Load every stored deck with its cards.

        Raises:
            DeckStoreError: If the backing storage is unavailable or corrupt.
        """
        pass

    @abstractmethod
    def save_decks(self, decks: list[Deck]) -> None:
        """
        Replace the stored deck collection.

        Raises:
            DeckStoreError: If the backing storage cannot be written.
        """
        pass

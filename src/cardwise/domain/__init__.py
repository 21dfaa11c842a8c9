# Domain Package
from .errors import CardwiseError, DeckStoreError, InvalidArgumentError
from .models import Card, Deck, Difficulty, ReviewEvent, ReviewState, StudyMode, StudySession
from .ports import DeckStore

__all__ = [
    "Card",
    "Deck",
    "Difficulty",
    "ReviewEvent",
    "ReviewState",
    "StudyMode",
    "StudySession",
    "DeckStore",
    "CardwiseError",
    "DeckStoreError",
    "InvalidArgumentError",
]

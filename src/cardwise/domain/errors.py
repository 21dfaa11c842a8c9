"""Exception hierarchy for cardwise."""


class CardwiseError(Exception):
    """Base class for all cardwise errors."""


class InvalidArgumentError(CardwiseError, ValueError):
    """An argument is outside its documented domain (quality, mode, label...)."""


class DeckStoreError(CardwiseError):
    """A deck store could not load or save decks."""

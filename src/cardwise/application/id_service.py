"""Service for generating stable ids for derived decks."""

from ulid import ULID


def generate_deck_id(prefix: str) -> str:
    """Generate a sortable, unique deck id using ULID, e.g. `interleaved_01J...`."""
    return f"{prefix}_{ULID()}"

"""
Deck composer for derived study sets.

Two algorithms build a new Deck from a pool of existing decks:
1. Deliberate practice: filter by focus topic and target difficulty, then cap
2. Interleaved: mix cards from several decks, round-robin or shuffled

Derived decks hold the same Card instances as their source decks, so a review
recorded through a derived deck updates the canonical card.
"""

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from cardwise.application.id_service import generate_deck_id
from cardwise.domain.constants import (
    DEFAULT_MAX_CARDS,
    DELIBERATE_PRACTICE_CATEGORY,
    HIGH_EASE_THRESHOLD,
    INTERLEAVED_CATEGORY,
    MID_EASE_THRESHOLD,
    UNKNOWN_ORIGIN,
)
from cardwise.domain.errors import InvalidArgumentError
from cardwise.domain.models import Card, Deck, Difficulty, utcnow

logger = logging.getLogger(__name__)

_default_rng = random.Random()

_DIFFICULTY_RANK = {Difficulty.EASY: 1, Difficulty.MEDIUM: 2, Difficulty.HARD: 3}


class ShuffleMode(str, Enum):
    ROUND_ROBIN = "round-robin"
    RANDOM = "random"

    @classmethod
    def parse(cls, value: "ShuffleMode | str") -> "ShuffleMode":
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(f"Unknown shuffle mode: {value!r}") from None


@dataclass
class DeliberatePracticeConfig:
    """
    Settings for a deliberate-practice deck.

    Attributes:
        focus_topics: Topics to keep; empty keeps every card.
        target_difficulty: Keep cards near this difficulty; None keeps all.
        max_cards: Maximum cards in the derived deck.
        tolerance: Allowed distance between card and target difficulty ranks.
        source_deck_ids: Restrict the pool to these decks; empty uses all.
    """

    focus_topics: list[str] = field(default_factory=list)
    target_difficulty: Difficulty | None = None
    max_cards: int = DEFAULT_MAX_CARDS
    tolerance: int = 0
    source_deck_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.target_difficulty is not None:
            self.target_difficulty = Difficulty.parse(self.target_difficulty)
        if self.max_cards < 0:
            raise InvalidArgumentError(f"max_cards must be >= 0, got {self.max_cards}")
        if self.tolerance < 0:
            raise InvalidArgumentError(f"tolerance must be >= 0, got {self.tolerance}")


@dataclass
class InterleavedConfig:
    """
    Settings for an interleaved deck.

    Attributes:
        deck_ids: Decks to mix; empty mixes every deck in the pool.
        cards_per_deck: Take at most this many cards from each deck; None takes all.
        shuffle_mode: round-robin or random.
    """

    deck_ids: list[str] = field(default_factory=list)
    cards_per_deck: int | None = None
    shuffle_mode: ShuffleMode = ShuffleMode.RANDOM

    def __post_init__(self) -> None:
        self.shuffle_mode = ShuffleMode.parse(self.shuffle_mode)
        if self.cards_per_deck is not None and self.cards_per_deck < 0:
            raise InvalidArgumentError(
                f"cards_per_deck must be >= 0, got {self.cards_per_deck}"
            )


def difficulty_rank(difficulty: Difficulty | str) -> int:
    """easy=1, medium=2, hard=3."""
    return _DIFFICULTY_RANK[Difficulty.parse(difficulty)]


def ease_rank(ease_factor: float) -> int:
    """Synthetic difficulty rank from an ease factor (< 2.0 hard, < 2.5 medium)."""
    if ease_factor < MID_EASE_THRESHOLD:
        return 3
    if ease_factor < HIGH_EASE_THRESHOLD:
        return 2
    return 1


def compose_deliberate_practice(
    decks: Sequence[Deck],
    config: DeliberatePracticeConfig,
    now: datetime | None = None,
) -> Deck:
    """
    Build a deck focused on the given topics and difficulty.

    Cards are kept in encounter order (deck order, then card order) and the
    result is truncated to `config.max_cards`. An empty result is a valid,
    empty deck.
    """
    now = now or utcnow()
    pool = _select_decks(decks, config.source_deck_ids)
    focus = [topic.lower() for topic in config.focus_topics]
    target_rank = (
        difficulty_rank(config.target_difficulty)
        if config.target_difficulty is not None
        else None
    )

    selected: list[Card] = []
    contributing: list[str] = []
    seen: set[int] = set()

    for deck in pool:
        for card in deck.cards:
            if len(selected) >= config.max_cards:
                break
            if id(card) in seen:
                continue
            if focus and not _matches_focus(card, deck, focus):
                continue
            if target_rank is not None and (
                abs(ease_rank(card.state.ease_factor) - target_rank) > config.tolerance
            ):
                continue
            seen.add(id(card))
            selected.append(card)
            if deck.id not in contributing:
                contributing.append(deck.id)

    topics_label = ", ".join(config.focus_topics) or "all topics"
    difficulty_label = config.target_difficulty.value if config.target_difficulty else "any"

    logger.debug(
        f"[compose] deliberate practice: {len(selected)} cards from {len(contributing)} decks"
    )

    return Deck(
        id=generate_deck_id("deliberate"),
        name=f"Deliberate practice ({topics_label})",
        cards=selected,
        description=f"{difficulty_label} difficulty / {len(selected)} cards",
        category=DELIBERATE_PRACTICE_CATEGORY,
        created_at=now,
        updated_at=now,
        source_deck_ids=contributing,
    )


def _matches_focus(card: Card, deck: Deck, focus: list[str]) -> bool:
    """
    A card matches when a tag equals a focus topic or its category contains one.

    The card's own category wins over the deck's; comparisons ignore case.
    """
    tags = [tag.lower() for tag in card.tags]
    category = (card.category or deck.category or "").lower()
    return any(topic in tags or topic in category for topic in focus)


def compose_interleaved(
    decks: Sequence[Deck],
    config: InterleavedConfig,
    rng: random.Random | None = None,
    now: datetime | None = None,
) -> Deck:
    """
    Mix cards from several decks into one study sequence.

    Round-robin takes card i from each deck in turn, so consecutive cards come
    from different decks until only one deck has cards left. Random mode
    concatenates the groups and applies a uniform Fisher-Yates shuffle using
    `rng` (default: a process-wide generator).
    """
    now = now or utcnow()
    targets = _select_decks(decks, config.deck_ids)
    groups = [_take(deck.cards, config.cards_per_deck) for deck in targets]

    if config.shuffle_mode is ShuffleMode.ROUND_ROBIN:
        cards = _round_robin(groups)
    else:
        cards = [card for group in groups for card in group]
        # random.Random.shuffle is Fisher-Yates
        (rng if rng is not None else _default_rng).shuffle(cards)

    logger.debug(
        f"[compose] interleaved ({config.shuffle_mode.value}): "
        f"{len(cards)} cards from {len(targets)} decks"
    )

    return Deck(
        id=generate_deck_id("interleaved"),
        name="Interleaved practice",
        cards=cards,
        description=f"{len(targets)} decks mixed / {len(cards)} cards",
        category=INTERLEAVED_CATEGORY,
        created_at=now,
        updated_at=now,
        source_deck_ids=[deck.id for deck in targets],
    )


def _take(cards: list[Card], limit: int | None) -> list[Card]:
    return list(cards) if limit is None else cards[:limit]


def _round_robin(groups: list[list[Card]]) -> list[Card]:
    longest = max((len(group) for group in groups), default=0)
    return [group[i] for i in range(longest) for group in groups if i < len(group)]


def _select_decks(decks: Sequence[Deck], deck_ids: Iterable[str]) -> list[Deck]:
    """All decks, or only those named in `deck_ids` (pool order is kept)."""
    wanted = set(deck_ids)
    if not wanted:
        return list(decks)
    return [deck for deck in decks if deck.id in wanted]


def distribution_of(derived: Deck, originals: Iterable[Deck]) -> dict[str, int]:
    """
    Count a derived deck's cards per originating deck id.

    Cards are traced by card id; when a card id appears in several originals the
    first deck wins. Cards with no origin are counted under "unknown".
    """
    origin: dict[str, str] = {}
    for deck in originals:
        for card in deck.cards:
            origin.setdefault(card.id, deck.id)

    counts: dict[str, int] = {}
    for card in derived.cards:
        deck_id = origin.get(card.id, UNKNOWN_ORIGIN)
        counts[deck_id] = counts.get(deck_id, 0) + 1
    return counts

"""
YAML Deck Store: Infrastructure adapter for decks kept as YAML files.

Implements DeckStore with a key-value layout in one directory:
    user_decks.yaml           deck metadata (id, name, card_count, ...)
    deck_cards_<deck id>.yaml the deck's cards with their review state
"""

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import yaml

from cardwise.domain.constants import DECK_CARDS_KEY_PREFIX, DECK_INDEX_KEY
from cardwise.domain.errors import CardwiseError, DeckStoreError
from cardwise.domain.models import Card, Deck, Difficulty, ReviewState, utcnow
from cardwise.domain.ports import DeckStore

logger = logging.getLogger(__name__)


class YamlDeckStore(DeckStore):
    """
    Reads and writes decks under `root`.

    A missing index means no decks yet; a deck whose card file is missing
    loads with no cards.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @property
    def index_path(self) -> Path:
        return self.root / f"{DECK_INDEX_KEY}.yaml"

    def cards_path(self, deck_id: str) -> Path:
        filename = f"{DECK_CARDS_KEY_PREFIX}{deck_id}.yaml"
        if Path(filename).name != filename:
            raise DeckStoreError(f"Deck id cannot be used as a file name: {deck_id!r}")
        return self.root / filename

    def load_decks(self) -> list[Deck]:
        metas = self._read(self.index_path)
        if metas is None:
            return []
        if not isinstance(metas, list):
            raise DeckStoreError(f"{self.index_path} does not contain a list of decks")

        decks: list[Deck] = []
        for meta in metas:
            if not isinstance(meta, dict):
                raise DeckStoreError(f"Malformed deck record in {self.index_path}: {meta!r}")
            try:
                path = self.cards_path(meta["id"])
                records = self._read(path) or []
                if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
                    raise DeckStoreError(f"{path} does not contain a list of card records")
                decks.append(_deck_from_record(meta, records))
            except DeckStoreError:
                raise
            except (KeyError, TypeError, ValueError, CardwiseError) as e:
                raise DeckStoreError(f"Malformed deck record in {self.root}: {e}") from e

        logger.debug(f"Loaded {len(decks)} decks from {self.root}")
        return decks

    def save_decks(self, decks: list[Deck]) -> None:
        """
        Replace the stored collection.

        Every file is staged next to its target first, so a failed save leaves
        the previous collection readable. Staged card files are moved into place
        before the index, then card files of decks no longer indexed are removed.
        """
        files = [
            (self.cards_path(deck.id), [_card_to_record(c) for c in deck.cards])
            for deck in decks
        ]
        files.append((self.index_path, [_deck_meta(deck) for deck in decks]))

        staged: list[tuple[Path, Path]] = []
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            for path, data in files:
                staged.append((self._stage(path, data), path))
            for tmp, path in staged:
                tmp.replace(path)
        except OSError as e:
            for tmp, _ in staged:
                tmp.unlink(missing_ok=True)
            raise DeckStoreError(f"Could not write decks to {self.root}: {e}") from e

        self._remove_stale_card_files({path for path, _ in files})
        logger.debug(f"Saved {len(decks)} decks to {self.root}")

    def _read(self, path: Path) -> Any:
        if not path.exists():
            return None
        try:
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise DeckStoreError(f"Could not read {path}: {e}") from e

    def _stage(self, path: Path, data: Any) -> Path:
        """Write `data` to a temporary sibling of `path` and return it."""
        tmp = path.with_name(f"{path.name}.tmp")
        text = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)
        try:
            tmp.write_text(text, encoding="utf-8")
        except OSError:
            tmp.unlink(missing_ok=True)
            raise
        return tmp

    def _remove_stale_card_files(self, keep: set[Path]) -> None:
        for path in self.root.glob(f"{DECK_CARDS_KEY_PREFIX}*.yaml"):
            if path in keep:
                continue
            try:
                path.unlink()
            except OSError as e:
                logger.warning(f"Could not remove stale card file {path}: {e}")


# ---------- Record mapping ----------


def _deck_meta(deck: Deck) -> dict[str, Any]:
    return {
        "id": deck.id,
        "name": deck.name,
        "description": deck.description,
        "card_count": len(deck.cards),
        "created_at": deck.created_at.isoformat(),
        "updated_at": deck.updated_at.isoformat(),
        "tags": list(deck.tags),
        "category": deck.category,
        "source_deck_ids": list(deck.source_deck_ids),
    }


def _deck_from_record(meta: dict[str, Any], records: list[dict[str, Any]]) -> Deck:
    return Deck(
        id=str(meta["id"]),
        name=str(meta["name"]),
        cards=[_card_from_record(r) for r in records],
        description=meta.get("description") or "",
        category=meta.get("category"),
        tags=list(meta.get("tags") or []),
        created_at=_parse_time(meta.get("created_at")) or utcnow(),
        updated_at=_parse_time(meta.get("updated_at")) or utcnow(),
        source_deck_ids=list(meta.get("source_deck_ids") or []),
    )


def _card_to_record(card: Card) -> dict[str, Any]:
    state = card.state
    return {
        "id": card.id,
        "front": card.front,
        "back": card.back,
        "tags": list(card.tags),
        "category": card.category,
        "ease_factor": state.ease_factor,
        "interval": state.interval,
        "repetitions": state.repetitions,
        "next_due": state.next_due.isoformat(),
        "last_reviewed": state.last_reviewed.isoformat() if state.last_reviewed else None,
        "difficulty": state.difficulty.value,
    }


def _card_from_record(record: dict[str, Any]) -> Card:
    defaults = ReviewState()
    state = ReviewState(
        ease_factor=float(record.get("ease_factor", defaults.ease_factor)),
        interval=int(record.get("interval", defaults.interval)),
        repetitions=int(record.get("repetitions", defaults.repetitions)),
        next_due=_parse_time(record.get("next_due")) or defaults.next_due,
        last_reviewed=_parse_time(record.get("last_reviewed")),
        difficulty=Difficulty.parse(record.get("difficulty", defaults.difficulty)),
    )
    return Card(
        id=str(record["id"]),
        front=record.get("front") or "",
        back=record.get("back") or "",
        tags=list(record.get("tags") or []),
        category=record.get("category"),
        state=state,
    )


def _parse_time(value: Any) -> datetime | None:
    """Accept ISO strings or YAML-native timestamps; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed

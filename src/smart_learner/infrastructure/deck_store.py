"""
YAML deck store.

Each deck lives in its own ``<name>.sdeck`` file inside the storage folder:

    name: Spanish
    cards:
    - front: {text: hola, audio: null}
      back: {text: hello, audio: hola.mp3}
      tier: 2
      due: {day: 19, month: 10, year: 2026}
"""

import logging
from pathlib import Path
from typing import Any

import yaml  # type: ignore

from smart_learner.domain.constants import DECK_FILE_SUFFIX
from smart_learner.domain.date import CalendarDate
from smart_learner.domain.deck import Deck
from smart_learner.domain.errors import DeckError, DeckFileError
from smart_learner.domain.interfaces import DeckStore, StoredDeck
from smart_learner.domain.models import Card, Field

logger = logging.getLogger(__name__)


class _LiteralDumper(yaml.SafeDumper):
    """Dumps multiline strings as literal blocks so card text stays readable."""


def _str_presenter(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


_LiteralDumper.add_representer(str, _str_presenter)


# ---------- Encoding ----------


def _field_to_dict(f: Field) -> dict[str, Any]:
    return {"text": f.text, "audio": f.audio}


def _field_from_dict(raw: Any) -> Field:
    if not isinstance(raw, dict):
        raise DeckFileError(f"Expected a mapping for a card side, got {type(raw).__name__}")
    audio = raw.get("audio")
    return Field(text=str(raw.get("text", "")), audio=str(audio) if audio is not None else None)


def _date_from_dict(raw: Any) -> CalendarDate:
    if not isinstance(raw, dict):
        raise DeckFileError(f"Expected a mapping for a due date, got {type(raw).__name__}")
    try:
        return CalendarDate(year=int(raw["year"]), month=int(raw["month"]), day=int(raw["day"]))
    except (KeyError, TypeError, ValueError) as e:
        raise DeckFileError(f"Invalid due date {raw!r}: {e}") from e


def deck_to_dict(deck: Deck) -> dict[str, Any]:
    return {
        "name": deck.name,
        "cards": [
            {
                "front": _field_to_dict(card.front),
                "back": _field_to_dict(card.back),
                "tier": card.tier,
                "due": {
                    "day": card.due_date.day,
                    "month": card.due_date.month,
                    "year": card.due_date.year,
                },
            }
            for card in deck.cards
        ],
    }


def deck_from_dict(data: Any) -> Deck:
    if not isinstance(data, dict):
        raise DeckFileError("Deck file does not contain a mapping")

    try:
        deck = Deck(name=str(data.get("name") or ""))
    except DeckError as e:
        raise DeckFileError(str(e)) from e

    cards = data.get("cards") or []
    if not isinstance(cards, list):
        raise DeckFileError("'cards' must be a list")

    for i, raw in enumerate(cards):
        if not isinstance(raw, dict):
            raise DeckFileError(f"Card #{i} is not a mapping")
        try:
            tier = int(raw.get("tier", 0))
        except (TypeError, ValueError) as e:
            raise DeckFileError(f"Card #{i} has an invalid tier: {e}") from e
        if tier < 0:
            raise DeckFileError(f"Card #{i} has a negative tier")
        deck.add(
            Card(
                front=_field_from_dict(raw.get("front")),
                back=_field_from_dict(raw.get("back")),
                due_date=_date_from_dict(raw.get("due")),
                tier=tier,
            )
        )
    return deck


# ---------- Store ----------


class YamlDeckStore(DeckStore):
    def __init__(self, folder: Path):
        self.folder = folder

    def new_location(self, name: str) -> Path:
        return self.folder / f"{name}{DECK_FILE_SUFFIX}"

    def load(self, path: Path) -> StoredDeck:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise DeckFileError(f"{path.name}: invalid YAML: {e}") from e
        return StoredDeck(deck=deck_from_dict(data), path=path)

    def fetch_decks(self) -> list[StoredDeck]:
        if not self.folder.is_dir():
            logger.debug(f"Deck folder {self.folder} does not exist yet")
            return []

        decks = []
        for path in sorted(self.folder.glob(f"*{DECK_FILE_SUFFIX}")):
            try:
                decks.append(self.load(path))
            except (DeckFileError, OSError) as e:
                logger.warning(f"Skipping deck file {path}: {e}")
                continue

        logger.debug(f"Loaded {len(decks)} decks from {self.folder}")
        return decks

    def save(self, stored: StoredDeck) -> None:
        stored.path.parent.mkdir(parents=True, exist_ok=True)
        text = yaml.dump(
            deck_to_dict(stored.deck),
            Dumper=_LiteralDumper,
            sort_keys=False,
            allow_unicode=True,
        )
        stored.path.write_text(text, encoding="utf-8")
        logger.debug(f"Saved deck {stored.deck.name!r} ({len(stored.deck)} cards) to {stored.path}")

    def delete(self, stored: StoredDeck) -> None:
        stored.path.unlink(missing_ok=True)
        logger.info(f"Deleted deck file {stored.path}")

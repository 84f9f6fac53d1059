"""
Study session: Application layer orchestrator.

Holds the loaded decks, the deck being studied and the card currently on
screen, and coordinates the scheduling core with the deck store, the clock
and the audio collaborators. A presentation layer (the CLI) drives it.

The current card is tracked by position. Positions are not durable: after
``delete_card`` the current card is cleared, and results from ``search``
must be fetched again.
"""

import logging
from pathlib import Path

from smart_learner.domain.constants import (
    NO_DECKS_LABEL,
    PLACEHOLDER_BACK,
    PLACEHOLDER_FRONT,
)
from smart_learner.domain.deck import Deck, SearchHit
from smart_learner.domain.errors import (
    AudioError,
    DeckError,
    NoCardSelectedError,
    NoDeckError,
)
from smart_learner.domain.interfaces import (
    AudioPlayer,
    AudioStore,
    Clock,
    DeckStore,
    StoredDeck,
)
from smart_learner.domain.models import Card, Field, Grade, IntervalSchedule, Side

logger = logging.getLogger(__name__)


class StudySession:
    def __init__(
        self,
        store: DeckStore,
        clock: Clock,
        schedule: IntervalSchedule,
        audio: AudioStore | None = None,
        player: AudioPlayer | None = None,
    ):
        """
        Args:
            store: Where decks are loaded from and saved to.
            clock: Source of "today" for scheduling.
            schedule: Interval table used by reviews.
            audio: Optional audio library; audio commands fail without it.
            player: Optional player; playback is skipped without it.
        """
        self.store = store
        self.clock = clock
        self.schedule = schedule
        self.audio = audio
        self.player = player

        self.decks: list[StoredDeck] = store.fetch_decks()
        self.current_deck = 0
        self.current_card: int | None = None
        # Set by review so next_card skips the card just answered
        self._just_reviewed = False

    # ---------- Decks ----------

    def new_deck(self, name: str) -> StoredDeck:
        name = name.strip()
        if "/" in name or "\\" in name:
            raise DeckError(f"Deck name {name!r} must not contain path separators")
        if any(d.deck.name == name for d in self.decks):
            raise DeckError(f"A deck named {name!r} already exists")

        stored = StoredDeck(deck=Deck(name=name), path=self.store.new_location(name))
        self.decks.append(stored)
        self.store.save(stored)
        logger.info(f"Created deck {name!r}")
        return stored

    def select_deck(self, deck: str | int) -> StoredDeck:
        """Make a deck current, by name or by index."""
        if isinstance(deck, int):
            if not 0 <= deck < len(self.decks):
                raise DeckError(f"No deck at index {deck}")
            index = deck
        else:
            matches = [i for i, d in enumerate(self.decks) if d.deck.name == deck]
            if not matches:
                raise DeckError(f"Unknown deck {deck!r}")
            index = matches[0]

        if index != self.current_deck:
            self.current_card = None
            self._just_reviewed = False
        self.current_deck = index
        return self.decks[index]

    def remove_deck(self, name: str) -> None:
        stored = self.select_deck(name)
        self.store.delete(stored)
        self.decks.remove(stored)
        self.current_deck = 0
        self.current_card = None
        self._just_reviewed = False

    def current_deck_name(self) -> str:
        if len(self.decks) > self.current_deck:
            return self.decks[self.current_deck].deck.name
        return NO_DECKS_LABEL

    def _stored(self) -> StoredDeck:
        if not self.decks:
            raise NoDeckError("Create a deck first")
        return self.decks[self.current_deck]

    def _deck(self) -> Deck:
        return self._stored().deck

    def _card(self) -> Card:
        if self.current_card is None:
            raise NoCardSelectedError("No card is selected")
        return self._deck().card(self.current_card)

    def save(self) -> None:
        self.store.save(self._stored())

    # ---------- Reviewing ----------

    def next_card(self) -> int | None:
        """
        Select the next due card and return its position, or None.

        The card just reviewed is only offered again once nothing else is due.
        A card that was only selected or created is not skipped.
        """
        after = self.current_card if self._just_reviewed else None
        self._just_reviewed = False
        if not self.decks:
            self.current_card = None
            return None

        self.current_card = self._deck().due_card(self.clock.today(), after=after)
        return self.current_card

    def question(self) -> str:
        if self.current_card is None or not self.decks:
            return ""
        return self._card().front.text

    def answer(self) -> str:
        if self.current_card is None or not self.decks:
            return ""
        return self._card().back.text

    def review(self, grade: Grade) -> Card:
        card = self._card()
        card.review(grade, self.clock.today(), self.schedule)
        self._just_reviewed = True
        self.save()
        return card

    # ---------- Editing ----------

    def create_card(self) -> int | None:
        """Append a placeholder card to the current deck and select it."""
        if not self.decks:
            self.current_card = None
            return None

        card = Card.new(Field(PLACEHOLDER_FRONT), Field(PLACEHOLDER_BACK), self.clock.today())
        self.current_card = self._deck().add(card)
        self._just_reviewed = False
        self.save()
        return self.current_card

    def select_card(self, position: int) -> Card:
        card = self._deck().card(position)
        self.current_card = position
        self._just_reviewed = False
        return card

    def edit_card(self, front: str, back: str) -> None:
        self._card().edit(front, back)
        self.save()

    def delete_card(self) -> Card:
        if self.current_card is None:
            raise NoCardSelectedError("No card is selected")
        removed = self._deck().remove(self.current_card)
        self.current_card = None
        self._just_reviewed = False
        self.save()
        logger.info(f"Deleted card {removed.front.text[:30]!r} from {self.current_deck_name()!r}")
        return removed

    def search(self, query: str, back: bool = False) -> list[SearchHit]:
        if not self.decks:
            return []
        return self._deck().search(Side.BACK if back else Side.FRONT, query)

    # ---------- Audio ----------

    def set_audio(self, side: Side, source: Path) -> str:
        if self.audio is None:
            raise AudioError("No audio library is configured")
        card = self._card()
        handle = self.audio.import_file(source)
        card.set_audio(side, handle)
        self.save()
        return handle

    def clear_audio(self, side: Side) -> None:
        self._card().clear_audio(side)
        self.save()

    def audio_exists(self, side: Side) -> bool:
        return self._card().has_audio(side)

    def play_audio(self, side: Side) -> bool:
        """Start playing a side's audio. Returns False when there is nothing to play."""
        card = self._card()
        handle = card.field(side).audio
        if handle is None or self.audio is None or self.player is None:
            return False
        if not self.audio.exists(handle):
            logger.warning(f"Audio file {handle!r} is missing from the library")
            return False

        self.player.play(self.audio.resolve(handle))
        return True

"""
Deck: an ordered collection of cards with due selection and text search.

Card positions are transient. ``remove`` swaps the last card into the freed
slot, so any position obtained before a removal must be re-resolved with
``due_card`` or ``search`` afterwards.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from smart_learner.domain.date import CalendarDate
from smart_learner.domain.errors import DeckError, InvalidPositionError
from smart_learner.domain.models import Card, Side


@dataclass(frozen=True)
class SearchHit:
    position: int
    text: str


@dataclass
class Deck:
    name: str
    cards: list[Card] = field(default_factory=list)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise DeckError("Deck name must not be empty")

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __getitem__(self, position: int) -> Card:
        return self.card(position)

    def _check_position(self, position: int) -> None:
        if position < 0 or position >= len(self.cards):
            raise InvalidPositionError(position, len(self.cards))

    def card(self, position: int) -> Card:
        self._check_position(position)
        return self.cards[position]

    def add(self, card: Card) -> int:
        """Append a card and return its position at insertion time."""
        self.cards.append(card)
        return len(self.cards) - 1

    def remove(self, position: int) -> Card:
        """
        Remove the card at ``position`` by swapping the last card into its slot.

        All previously obtained positions are invalid after this call.
        """
        self._check_position(position)
        last = len(self.cards) - 1
        if position != last:
            self.cards[position], self.cards[last] = self.cards[last], self.cards[position]
        return self.cards.pop()

    def due_card(self, today: CalendarDate, after: int | None = None) -> int | None:
        """
        Position of the next card to review, or None when nothing is due.

        Cards are scanned in sequence order and the first due one wins. The
        card at ``after`` (the one just reviewed) is skipped while any other
        card is due, and offered again only once it is the last one left.
        """
        if after is not None:
            self._check_position(after)

        for position, card in enumerate(self.cards):
            if position != after and card.is_due(today):
                return position

        if after is not None and self.cards[after].is_due(today):
            return after
        return None

    def due_count(self, today: CalendarDate) -> int:
        return sum(1 for card in self.cards if card.is_due(today))

    def search(self, side: Side, query: str) -> list[SearchHit]:
        """
        Case-insensitive substring search over one side of every card.

        An empty query matches nothing. Hits are in sequence order.
        """
        if not query:
            return []

        needle = query.casefold()
        hits = []
        for position, card in enumerate(self.cards):
            text = card.field(side).text
            if needle in text.casefold():
                hits.append(SearchHit(position=position, text=text))
        return hits

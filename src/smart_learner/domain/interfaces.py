"""
Ports (interfaces) for the collaborators around the scheduling core.

Application services depend on these abstractions, not on concrete adapters,
so tests can swap in a fixed clock or an in-memory store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from smart_learner.domain.date import CalendarDate
from smart_learner.domain.deck import Deck


@dataclass
class StoredDeck:
    """A deck paired with the location it is persisted to."""

    deck: Deck
    path: Path


class Clock(ABC):
    @abstractmethod
    def today(self) -> CalendarDate:
        pass


class DeckStore(ABC):
    """
    Port for loading and persisting decks.

    Implementations:
        - YamlDeckStore: one YAML file per deck in the storage folder.
    """

    @abstractmethod
    def fetch_decks(self) -> list[StoredDeck]:
        """Load every deck found in storage."""
        pass

    @abstractmethod
    def new_location(self, name: str) -> Path:
        """Where a new deck called ``name`` should be written."""
        pass

    @abstractmethod
    def save(self, stored: StoredDeck) -> None:
        pass

    @abstractmethod
    def delete(self, stored: StoredDeck) -> None:
        pass


class AudioStore(ABC):
    """Port for the audio files referenced by card fields."""

    @abstractmethod
    def import_file(self, source: Path) -> str:
        """
        Copy an audio file into storage.

        Returns:
            The handle to store on the card field.
        """
        pass

    @abstractmethod
    def resolve(self, handle: str) -> Path:
        pass

    @abstractmethod
    def exists(self, handle: str) -> bool:
        pass


class AudioPlayer(ABC):
    @abstractmethod
    def play(self, path: Path) -> None:
        """Start playback without blocking the caller."""
        pass

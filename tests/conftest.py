import pytest

from smart_learner.domain.date import CalendarDate
from smart_learner.domain.deck import Deck
from smart_learner.domain.models import Card, Field, IntervalSchedule
from smart_learner.infrastructure.clock import FixedClock

TODAY = CalendarDate(year=2024, month=3, day=15)


def _make_card(front: str, back: str = "", due: CalendarDate = TODAY, tier: int = 0) -> Card:
    return Card(front=Field(front), back=Field(back), due_date=due, tier=tier)


@pytest.fixture
def make_card():
    return _make_card


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FixedClock(TODAY)


@pytest.fixture
def schedule():
    return IntervalSchedule((0, 1, 3, 7, 14, 30))


@pytest.fixture
def deck():
    """A(due today), B(due in 5 days), C(due today)."""
    d = Deck(name="Spanish")
    d.add(_make_card("hola", "hello"))
    d.add(_make_card("adios", "goodbye", due=TODAY.plus_days(5), tier=2))
    d.add(_make_card("gracias", "thank you"))
    return d


@pytest.fixture
def deck_folder(tmp_path):
    """Creates a temporary directory for deck files."""
    d = tmp_path / "decks"
    d.mkdir()
    return d


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config files and environment from the developer's machine
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "SMART_LEARNER_FOLDER_PATH",
        "SMART_LEARNER_INTERVALS",
        "SMART_LEARNER_AUDIO_COMMAND",
    ):
        monkeypatch.delenv(var, raising=False)
    return home

"""Exception hierarchy for smart-learner.

Every error raised by the package derives from SmartLearnerError so the
presentation layer can catch one type and render a message.
"""


class SmartLearnerError(Exception):
    """Base class for all smart-learner errors."""


class InvalidPositionError(SmartLearnerError, IndexError):
    """A card position is out of range, usually because it went stale after a removal."""

    def __init__(self, position: int, size: int):
        super().__init__(f"Card position {position} is out of range for a deck of {size} cards")
        self.position = position
        self.size = size


class DeckError(SmartLearnerError):
    """Invalid deck name, duplicate deck or unknown deck."""


class ScheduleError(SmartLearnerError, ValueError):
    """Invalid interval table or a tier outside of it."""


class NoDeckError(SmartLearnerError):
    """An operation needs a deck but none exists."""


class NoCardSelectedError(SmartLearnerError):
    """An operation needs a current card but none is selected."""


class AudioError(SmartLearnerError):
    """An audio file could not be imported."""


class DeckFileError(SmartLearnerError):
    """A deck file could not be decoded."""


class ConfigError(SmartLearnerError):
    """The config file could not be read or written."""

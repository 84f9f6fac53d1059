"""
Domain models for cards and their review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from smart_learner.domain.date import CalendarDate
from smart_learner.domain.errors import ScheduleError

logger = logging.getLogger(__name__)


class Side(str, Enum):
    FRONT = "front"
    BACK = "back"


class Grade(str, Enum):
    """Review outcome chosen by the user."""

    WRONG = "wrong"
    DIFFICULT = "difficult"
    EASY = "easy"


@dataclass(frozen=True)
class IntervalSchedule:
    """
    Day-count table indexed by tier.

    Attributes:
        intervals: Days until the next review for each tier. Must start at 0
            and never decrease. Tier 1 must be above 0 so any passing grade
            moves the card past today.
    """

    intervals: tuple[int, ...]

    def __post_init__(self):
        # Accept any sequence, store an immutable tuple
        object.__setattr__(self, "intervals", tuple(self.intervals))

        if not self.intervals:
            raise ScheduleError("Interval table must contain at least one tier")
        if self.intervals[0] != 0:
            raise ScheduleError(f"Tier 0 interval must be 0, got {self.intervals[0]}")
        for prev, cur in zip(self.intervals, self.intervals[1:]):
            if cur < 0 or cur < prev:
                raise ScheduleError(
                    f"Interval table must be non-decreasing, got {list(self.intervals)}"
                )
        if len(self.intervals) < 2 or self.intervals[1] == 0:
            raise ScheduleError(
                f"Tier 1 interval must be above 0, got {list(self.intervals)}"
            )

    @property
    def max_tier(self) -> int:
        return len(self.intervals) - 1

    def interval(self, tier: int) -> int:
        if tier < 0 or tier > self.max_tier:
            raise ScheduleError(f"Tier {tier} is outside 0..{self.max_tier}")
        return self.intervals[tier]


@dataclass
class Field:
    """
    One side of a card.

    The audio handle is owned by the audio library; the domain only stores it.
    """

    text: str
    audio: str | None = None


@dataclass
class Card:
    """
    A study item with its scheduling state.

    Attributes:
        front: Question side.
        back: Answer side.
        tier: Index into the interval table. Only a Wrong review lowers it.
        due_date: First day the card is due for review.
    """

    front: Field
    back: Field
    due_date: CalendarDate
    tier: int = 0

    @classmethod
    def new(cls, front: Field, back: Field, today: CalendarDate) -> "Card":
        """A fresh card sits at tier 0 and is due today."""
        return cls(front=front, back=back, due_date=today, tier=0)

    def is_due(self, today: CalendarDate) -> bool:
        return self.due_date <= today

    def field(self, side: Side) -> Field:
        return self.front if side == Side.FRONT else self.back

    def edit(self, front_text: str, back_text: str) -> None:
        self.front.text = front_text
        self.back.text = back_text

    def set_audio(self, side: Side, handle: str) -> None:
        self.field(side).audio = handle

    def clear_audio(self, side: Side) -> None:
        self.field(side).audio = None

    def has_audio(self, side: Side) -> bool:
        return self.field(side).audio is not None

    def review(self, grade: Grade, today: CalendarDate, schedule: IntervalSchedule) -> None:
        """
        Apply a review outcome and reschedule.

        Wrong resets to tier 0, due today. Difficult keeps the tier, but a
        tier 0 card moves to tier 1 so the answer pushes it past today. Easy
        advances one tier, capped at the schedule's last tier. Only Wrong
        lowers the tier.
        """
        if grade == Grade.WRONG:
            tier = 0
        elif grade == Grade.DIFFICULT:
            tier = max(self.tier, 1)
        elif grade == Grade.EASY:
            tier = max(self.tier, min(self.tier + 1, schedule.max_tier))
        else:
            raise ValueError(f"Unknown grade: {grade!r}")

        # A tier stored under a longer table keeps its value; only the lookup is clamped
        self.tier = tier
        self.due_date = today.plus_days(schedule.interval(min(tier, schedule.max_tier)))
        logger.debug(
            f"Reviewed {self.front.text[:30]!r} as {grade.value}: tier={tier} due={self.due_date}"
        )

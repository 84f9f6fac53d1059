import datetime

from smart_learner.domain.date import CalendarDate
from smart_learner.domain.interfaces import Clock


class SystemClock(Clock):
    """Reads the local calendar date."""

    def today(self) -> CalendarDate:
        return CalendarDate.from_date(datetime.date.today())


class FixedClock(Clock):
    """A clock that always returns the date it was given. Used for tests and replays."""

    def __init__(self, today: CalendarDate):
        self.current = today

    def today(self) -> CalendarDate:
        return self.current

    def advance(self, days: int) -> CalendarDate:
        self.current = self.current.plus_days(days)
        return self.current

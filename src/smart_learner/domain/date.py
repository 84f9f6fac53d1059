"""
Calendar day arithmetic for scheduling.

CalendarDate is a plain value object. It does not validate day-of-month
bounds: callers are expected to construct well-formed dates, and arithmetic on
malformed ones is deterministic but not meaningful.
"""

import datetime
from dataclasses import dataclass

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def year_length(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def month_length(month: int, year: int) -> int:
    if month == 2 and is_leap_year(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


@dataclass(frozen=True, order=True)
class CalendarDate:
    """
    A single calendar day.

    Field order is year, month, day so the generated comparisons give the
    calendar's total order.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: datetime.date) -> "CalendarDate":
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def parse(cls, text: str) -> "CalendarDate":
        """Parse an ISO ``YYYY-MM-DD`` string."""
        try:
            year, month, day = (int(part) for part in text.strip().split("-"))
        except ValueError as e:
            raise ValueError(f"Invalid date {text!r}, expected YYYY-MM-DD") from e
        return cls(year=year, month=month, day=day)

    def to_date(self) -> datetime.date:
        return datetime.date(self.year, self.month, self.day)

    def day_of_year(self) -> int:
        return sum(month_length(m, self.year) for m in range(1, self.month)) + self.day

    def plus_days(self, days: int) -> "CalendarDate":
        """Return the date ``days`` days after this one."""
        if days < 0:
            raise ValueError(f"Cannot add a negative day count ({days})")

        year, month, day = self.year, self.month, self.day
        remaining = days
        while True:
            left_in_month = month_length(month, year) - day
            if remaining <= left_in_month:
                return CalendarDate(year=year, month=month, day=day + remaining)

            # Step to the first of the next month
            remaining -= left_in_month + 1
            day = 1
            month += 1
            if month > 12:
                month = 1
                year += 1

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def days_between(a: CalendarDate, b: CalendarDate) -> int:
    """
    Number of days between two dates, regardless of argument order.

    Sums whole-year lengths across the year span, then adds the difference of
    the two days-of-year (month lengths before each month plus the day).
    """
    lo, hi = (a, b) if a <= b else (b, a)
    total = sum(year_length(y) for y in range(lo.year, hi.year))
    # abs() keeps the result unsigned for malformed days past the month end
    return abs(total + hi.day_of_year() - lo.day_of_year())

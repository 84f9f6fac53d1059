# Domain Package
from .date import CalendarDate, days_between, is_leap_year, month_length
from .deck import Deck, SearchHit
from .models import Card, Field, Grade, IntervalSchedule, Side

__all__ = [
    "CalendarDate",
    "days_between",
    "is_leap_year",
    "month_length",
    "Deck",
    "SearchHit",
    "Card",
    "Field",
    "Grade",
    "IntervalSchedule",
    "Side",
]

"""Tests for calendar day arithmetic."""

import datetime

import pytest

from smart_learner.domain.date import CalendarDate, days_between, is_leap_year, month_length


@pytest.mark.parametrize(
    "year,expected",
    [(1900, False), (2000, True), (2023, False), (2024, True), (2100, False), (2400, True)],
)
def test_is_leap_year(year, expected):
    assert is_leap_year(year) is expected


def test_month_length_february():
    assert month_length(2, 2024) == 29
    assert month_length(2, 2023) == 28
    assert month_length(2, 1900) == 28
    assert month_length(12, 2023) == 31
    assert month_length(4, 2023) == 30


# ---------- Ordering ----------


def test_ordering_year_then_month_then_day():
    assert CalendarDate(2023, 12, 31) < CalendarDate(2024, 1, 1)
    assert CalendarDate(2024, 1, 31) < CalendarDate(2024, 2, 1)
    assert CalendarDate(2024, 2, 1) < CalendarDate(2024, 2, 2)
    assert CalendarDate(2024, 2, 2) == CalendarDate(year=2024, month=2, day=2)
    assert max(CalendarDate(2024, 5, 1), CalendarDate(2023, 12, 31)) == CalendarDate(2024, 5, 1)


# ---------- days_between ----------


def test_days_between_year_boundary():
    assert days_between(CalendarDate(2023, 12, 31), CalendarDate(2024, 1, 1)) == 1


def test_days_between_same_date_is_zero():
    d = CalendarDate(2024, 2, 29)
    assert days_between(d, d) == 0


def test_days_between_is_symmetric():
    a = CalendarDate(2019, 7, 4)
    b = CalendarDate(2024, 2, 29)
    assert days_between(a, b) == days_between(b, a)


def test_days_between_whole_years():
    assert days_between(CalendarDate(2023, 1, 1), CalendarDate(2024, 1, 1)) == 365
    assert days_between(CalendarDate(2024, 1, 1), CalendarDate(2025, 1, 1)) == 366


def test_days_between_across_leap_february():
    assert days_between(CalendarDate(2024, 1, 1), CalendarDate(2024, 3, 1)) == 60
    assert days_between(CalendarDate(2023, 1, 1), CalendarDate(2023, 3, 1)) == 59


@pytest.mark.parametrize(
    "a,b",
    [
        ((1899, 12, 31), (1900, 3, 1)),
        ((1999, 2, 28), (2000, 3, 1)),
        ((2020, 6, 15), (2024, 1, 20)),
        ((2024, 12, 1), (2024, 1, 31)),
    ],
)
def test_days_between_matches_datetime(a, b):
    expected = abs((datetime.date(*b) - datetime.date(*a)).days)
    assert days_between(CalendarDate(*a), CalendarDate(*b)) == expected


def test_days_between_malformed_date_is_deterministic():
    # 31 April does not exist; the result is defined but not meaningful
    odd = CalendarDate(2024, 4, 31)
    other = CalendarDate(2024, 5, 1)
    assert days_between(odd, other) == days_between(odd, other)
    assert days_between(odd, other) >= 0


# ---------- plus_days ----------


def test_plus_days_zero_is_identity():
    d = CalendarDate(2024, 3, 15)
    assert d.plus_days(0) == d


def test_plus_days_rolls_over_month_and_year():
    assert CalendarDate(2023, 12, 31).plus_days(1) == CalendarDate(2024, 1, 1)
    assert CalendarDate(2024, 1, 30).plus_days(3) == CalendarDate(2024, 2, 2)


def test_plus_days_leap_february():
    assert CalendarDate(2000, 2, 28).plus_days(1) == CalendarDate(2000, 2, 29)
    assert CalendarDate(1900, 2, 28).plus_days(1) == CalendarDate(1900, 3, 1)


def test_plus_days_long_interval():
    assert CalendarDate(2024, 3, 15).plus_days(365) == CalendarDate(2025, 3, 15)


def test_plus_days_agrees_with_days_between():
    start = CalendarDate(2023, 11, 20)
    for n in (1, 7, 30, 90, 400):
        assert days_between(start, start.plus_days(n)) == n


def test_plus_days_negative_rejected():
    with pytest.raises(ValueError):
        CalendarDate(2024, 1, 1).plus_days(-1)


# ---------- Conversions ----------


def test_iso_round_trip_and_bridges():
    d = CalendarDate.parse("2024-02-09")
    assert d == CalendarDate(2024, 2, 9)
    assert str(d) == "2024-02-09"
    assert d.to_date() == datetime.date(2024, 2, 9)
    assert CalendarDate.from_date(datetime.date(1999, 12, 31)) == CalendarDate(1999, 12, 31)


def test_parse_rejects_garbage():
    with pytest.raises(ValueError):
        CalendarDate.parse("yesterday")

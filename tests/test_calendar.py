"""Tests for the four-day working week calendar classifier."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from desiderata.domain.calendar import (
    date_key,
    is_public_holiday,
    is_weekend_day,
    is_working_day,
    iter_days,
    to_date,
)
from desiderata.domain.models import Holiday


# 2024-01-01 is a Monday.
WEEK = [date(2024, 1, day) for day in range(1, 8)]


def test_monday_to_thursday_are_working_days() -> None:
    assert [is_working_day(day) for day in WEEK] == [True, True, True, True, False, False, False]


def test_friday_to_sunday_are_weekend_days() -> None:
    assert [is_weekend_day(day) for day in WEEK] == [False, False, False, False, True, True, True]


def test_public_holiday_matches_exact_date_only() -> None:
    holidays = [Holiday(date="2024-01-02", name="Test")]

    assert is_public_holiday(date(2024, 1, 2), holidays)
    assert is_public_holiday("2024-01-02", holidays)
    assert not is_public_holiday(date(2024, 1, 3), holidays)
    assert not is_public_holiday(date(2024, 1, 2), [])


def test_public_holiday_ignores_weekday() -> None:
    holidays = [Holiday(date="2024-01-06", name="Saturday holiday")]
    assert is_public_holiday(date(2024, 1, 6), holidays)


def test_public_holiday_matches_datetime_and_timestamp_inputs() -> None:
    holidays = [Holiday(date="2024-01-02", name="Test")]

    assert is_public_holiday(datetime(2024, 1, 2, 23, 30), holidays)
    assert is_public_holiday("2024-01-02T08:00:00", holidays)
    assert not is_public_holiday(datetime(2024, 1, 1, 23, 59), holidays)


def test_late_evening_datetime_keeps_calendar_day() -> None:
    late = datetime(2024, 1, 1, 23, 45)

    assert to_date(late) == date(2024, 1, 1)
    assert date_key(late) == "2024-01-01"
    assert date_key("2024-01-01T23:45:00Z") == "2024-01-01"
    assert is_working_day(late)


def test_malformed_date_string_raises() -> None:
    with pytest.raises(ValueError):
        to_date("2024-13-45")


def test_iter_days_is_inclusive() -> None:
    assert list(iter_days("2024-01-05", "2024-01-07")) == [
        date(2024, 1, 5),
        date(2024, 1, 6),
        date(2024, 1, 7),
    ]
    assert list(iter_days("2024-01-05", "2024-01-05")) == [date(2024, 1, 5)]
    assert list(iter_days("2024-01-06", "2024-01-05")) == []

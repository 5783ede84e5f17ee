"""Tests for mandatory weekend windows and auto-extension."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from desiderata.domain.models import Holiday, Period
from desiderata.services.mandatory_service import (
    auto_extend_for_mandatory_weekend,
    check_mandatory_weekend_end,
    check_mandatory_weekend_start,
    should_auto_extend_date,
)


def _period(start: str, end: str) -> Period:
    return Period(
        id="p-1",
        name="Test period",
        start_date=start,
        end_date=end,
        editing_status="open-desiderata",
    )


def _holidays(*dates: str) -> list[Holiday]:
    return [Holiday(date=value, name=f"Holiday {value}") for value in dates]


# --- Period boundary windows ---

def test_period_starting_on_friday_requires_first_weekend() -> None:
    window = check_mandatory_weekend_start(_period("2024-01-05", "2024-01-31"), [])

    assert window.required
    assert window.extended_start_date == date(2024, 1, 5)
    assert window.extended_end_date == date(2024, 1, 7)
    assert window.reason == "Period starts on Friday - entire weekend must be selected"


def test_period_starting_on_monday_has_no_start_window() -> None:
    window = check_mandatory_weekend_start(_period("2024-01-01", "2024-01-31"), _holidays("2023-12-31"))

    assert not window.required
    assert window.extended_start_date is None


def test_period_ending_on_sunday_requires_last_weekend() -> None:
    window = check_mandatory_weekend_end(_period("2024-01-01", "2024-01-07"), [])

    assert window.required
    assert window.extended_start_date == date(2024, 1, 5)
    assert window.extended_end_date == date(2024, 1, 7)
    assert window.reason == "Period ends on Sunday - entire weekend must be selected"


def test_period_ending_on_friday_has_no_end_window() -> None:
    window = check_mandatory_weekend_end(_period("2024-01-01", "2024-01-05"), _holidays("2024-01-08"))
    assert not window.required


# --- Single date extension rules ---

@pytest.mark.parametrize(
    ("picked", "expected_start", "expected_end"),
    [
        ("2024-01-05", date(2024, 1, 5), date(2024, 1, 7)),  # Friday
        ("2024-01-06", date(2024, 1, 5), date(2024, 1, 7)),  # Saturday
        ("2024-01-07", date(2024, 1, 5), date(2024, 1, 7)),  # Sunday
    ],
)
def test_weekend_days_always_extend_to_friday_sunday(
    picked: str,
    expected_start: date,
    expected_end: date,
) -> None:
    extension = should_auto_extend_date(picked, [])

    assert extension.extend
    assert extension.start_date == expected_start
    assert extension.end_date == expected_end
    assert extension.reason


def test_thursday_before_holiday_friday_extends_to_sunday() -> None:
    extension = should_auto_extend_date("2024-01-04", _holidays("2024-01-05"))

    assert extension.extend
    assert extension.start_date == date(2024, 1, 4)
    assert extension.end_date == date(2024, 1, 7)


def test_late_evening_thursday_before_holiday_friday_extends() -> None:
    extension = should_auto_extend_date(datetime(2024, 1, 4, 23, 30), _holidays("2024-01-05"))

    assert extension.extend
    assert extension.end_date == date(2024, 1, 7)


def test_plain_thursday_does_not_extend() -> None:
    assert not should_auto_extend_date("2024-01-04", []).extend


def test_monday_holiday_after_sunday_holiday_extends_back_to_friday() -> None:
    extension = should_auto_extend_date("2024-01-08", _holidays("2024-01-07", "2024-01-08"))

    assert extension.extend
    assert extension.start_date == date(2024, 1, 5)
    assert extension.end_date == date(2024, 1, 8)


def test_monday_holiday_alone_does_not_extend() -> None:
    assert not should_auto_extend_date("2024-01-08", _holidays("2024-01-08")).extend
    assert not should_auto_extend_date("2024-01-08", _holidays("2024-01-07")).extend


def test_tuesday_holiday_chain_extends_back_to_friday() -> None:
    holidays = _holidays("2024-01-07", "2024-01-08", "2024-01-09")
    extension = should_auto_extend_date("2024-01-09", holidays)

    assert extension.extend
    assert extension.start_date == date(2024, 1, 5)
    assert extension.end_date == date(2024, 1, 9)


def test_tuesday_chain_without_sunday_does_not_extend() -> None:
    assert not should_auto_extend_date("2024-01-09", _holidays("2024-01-08", "2024-01-09")).extend


def test_wednesday_never_extends() -> None:
    assert not should_auto_extend_date("2024-01-03", _holidays("2024-01-03", "2024-01-04")).extend


# --- Selection auto-extension ---

def test_lone_saturday_extends_to_full_weekend() -> None:
    result = auto_extend_for_mandatory_weekend(
        date(2024, 1, 6),
        date(2024, 1, 6),
        _period("2024-01-01", "2024-01-31"),
        [],
    )

    assert result.start_date == date(2024, 1, 5)
    assert result.end_date == date(2024, 1, 7)
    assert result.extended
    assert result.reason is not None and "Saturday" in result.reason


def test_weekday_selection_is_left_unchanged() -> None:
    result = auto_extend_for_mandatory_weekend(
        "2024-01-01",
        "2024-01-03",
        _period("2024-01-01", "2024-01-31"),
        [],
    )

    assert result.start_date == date(2024, 1, 1)
    assert result.end_date == date(2024, 1, 3)
    assert not result.extended
    assert result.reason is None


def test_both_boundaries_are_extended_independently() -> None:
    result = auto_extend_for_mandatory_weekend(
        "2024-01-07",
        "2024-01-12",
        _period("2024-01-01", "2024-01-31"),
        [],
    )

    assert result.start_date == date(2024, 1, 5)
    assert result.end_date == date(2024, 1, 14)
    assert result.extended
    assert result.reason is not None and result.reason.startswith("Selected Sunday")


def test_selection_ending_on_saturday_keeps_its_start() -> None:
    result = auto_extend_for_mandatory_weekend(
        "2024-01-03",
        "2024-01-06",
        _period("2024-01-01", "2024-01-31"),
        [],
    )

    assert result.start_date == date(2024, 1, 3)
    assert result.end_date == date(2024, 1, 7)


def test_end_window_of_period_is_merged_and_first_reason_kept() -> None:
    result = auto_extend_for_mandatory_weekend(
        "2024-01-24",
        "2024-01-26",
        _period("2024-01-01", "2024-01-28"),
        [],
    )

    assert result.start_date == date(2024, 1, 24)
    assert result.end_date == date(2024, 1, 28)
    assert result.extended
    assert result.reason is not None and result.reason.startswith("Selected Friday")


def test_start_window_of_period_is_merged() -> None:
    result = auto_extend_for_mandatory_weekend(
        "2024-01-05",
        "2024-01-05",
        _period("2024-01-05", "2024-01-31"),
        [],
    )

    assert result.start_date == date(2024, 1, 5)
    assert result.end_date == date(2024, 1, 7)
    assert result.extended

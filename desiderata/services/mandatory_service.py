"""Mandatory weekend windows and automatic extension of raw date picks.

A mandatory window is a Friday-Sunday block, possibly bridged to an adjacent
public holiday, that has to be requested as a whole. Windows come from two
places: the period boundaries and the weekday of each end of a selection.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional, Sequence

from desiderata.domain.calendar import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    DateLike,
    is_public_holiday,
    to_date,
)
from desiderata.domain.models import (
    NOT_REQUIRED,
    DateExtension,
    ExtendedSelection,
    Holiday,
    MandatoryWeekendExtension,
    Period,
)
from desiderata.utils.logger import get_logger


logger = get_logger(__name__)


NO_EXTENSION = DateExtension(extend=False)


def _days(count: int) -> timedelta:
    return timedelta(days=count)


def _within(target: date, start: date, end: date) -> bool:
    return start <= target <= end


def check_mandatory_weekend_start(
    period: Period,
    holidays: Sequence[Holiday],
) -> MandatoryWeekendExtension:
    period_start = period.start
    if period_start.weekday() == FRIDAY:
        return MandatoryWeekendExtension(
            required=True,
            reason="Period starts on Friday - entire weekend must be selected",
            extended_start_date=period_start,
            extended_end_date=period_start + _days(2),
        )

    day_before = period_start - _days(1)
    if day_before.weekday() == THURSDAY and is_public_holiday(day_before, holidays):
        period_length = (period.end - period_start).days
        return MandatoryWeekendExtension(
            required=True,
            reason="Thursday before period is a public holiday - entire weekend must be selected",
            extended_start_date=period_start,
            extended_end_date=period_start + _days(min(2, period_length)),
        )

    return NOT_REQUIRED


def check_mandatory_weekend_end(
    period: Period,
    holidays: Sequence[Holiday],
) -> MandatoryWeekendExtension:
    period_end = period.end
    if period_end.weekday() == SUNDAY:
        return MandatoryWeekendExtension(
            required=True,
            reason="Period ends on Sunday - entire weekend must be selected",
            extended_start_date=period_end - _days(2),
            extended_end_date=period_end,
        )

    day_after = period_end + _days(1)
    if day_after.weekday() == MONDAY and is_public_holiday(day_after, holidays):
        return MandatoryWeekendExtension(
            required=True,
            reason="Monday after period is a public holiday - must extend through holiday",
            extended_start_date=period_end,
            extended_end_date=day_after,
        )

    two_days_after = period_end + _days(2)
    if two_days_after.weekday() == TUESDAY and is_public_holiday(two_days_after, holidays):
        return MandatoryWeekendExtension(
            required=True,
            reason="Tuesday after period is a public holiday - must extend through holiday",
            extended_start_date=period_end,
            extended_end_date=two_days_after,
        )

    return NOT_REQUIRED


def should_auto_extend_date(value: DateLike, holidays: Sequence[Holiday]) -> DateExtension:
    """Decide how a single selection boundary grows to cover its weekend."""
    day = to_date(value)
    weekday = day.weekday()

    if weekday == FRIDAY:
        return DateExtension(
            extend=True,
            start_date=day,
            end_date=day + _days(2),
            reason="Selected Friday - automatically extending to Sunday",
        )

    if weekday == SATURDAY:
        return DateExtension(
            extend=True,
            start_date=day - _days(1),
            end_date=day + _days(1),
            reason="Selected Saturday - automatically including full weekend (Friday-Sunday)",
        )

    if weekday == SUNDAY:
        return DateExtension(
            extend=True,
            start_date=day - _days(2),
            end_date=day,
            reason="Selected Sunday - automatically including full weekend (Friday-Sunday)",
        )

    if weekday == THURSDAY and is_public_holiday(day + _days(1), holidays):
        return DateExtension(
            extend=True,
            start_date=day,
            end_date=day + _days(3),
            reason="Selected Thursday before bank holiday Friday - automatically extending to Sunday",
        )

    if (
        weekday == MONDAY
        and is_public_holiday(day, holidays)
        and is_public_holiday(day - _days(1), holidays)
    ):
        return DateExtension(
            extend=True,
            start_date=day - _days(3),
            end_date=day,
            reason=(
                "Selected Monday holiday following Sunday holiday - automatically "
                "including previous weekend (Friday-Monday)"
            ),
        )

    if (
        weekday == TUESDAY
        and is_public_holiday(day, holidays)
        and is_public_holiday(day - _days(1), holidays)
        and is_public_holiday(day - _days(2), holidays)
    ):
        return DateExtension(
            extend=True,
            start_date=day - _days(4),
            end_date=day,
            reason=(
                "Selected Tuesday holiday following Monday and Sunday holidays - "
                "automatically including full weekend (Friday-Tuesday)"
            ),
        )

    return NO_EXTENSION


def auto_extend_for_mandatory_weekend(
    start: DateLike,
    end: DateLike,
    period: Period,
    holidays: Sequence[Holiday],
) -> ExtendedSelection:
    """Grow a raw selection until every mandatory window it touches is whole."""
    new_start = to_date(start)
    new_end = to_date(end)
    extended = False
    reason: Optional[str] = None

    for boundary in (new_start, new_end):
        extension = should_auto_extend_date(boundary, holidays)
        if not extension.extend:
            continue
        if extension.start_date is not None:
            new_start = min(new_start, extension.start_date)
        if extension.end_date is not None:
            new_end = max(new_end, extension.end_date)
        extended = True
        reason = reason or extension.reason

    weekend_start = check_mandatory_weekend_start(period, holidays)
    if weekend_start.required and weekend_start.extended_start_date and weekend_start.extended_end_date:
        window_start = weekend_start.extended_start_date
        window_end = weekend_start.extended_end_date
        if _within(window_start, new_start, new_end) or _within(new_start, window_start, window_end):
            new_start = min(new_start, window_start)
            new_end = max(new_end, window_end)
            extended = True
            reason = reason or weekend_start.reason

    weekend_end = check_mandatory_weekend_end(period, holidays)
    if weekend_end.required and weekend_end.extended_start_date and weekend_end.extended_end_date:
        window_start = weekend_end.extended_start_date
        window_end = weekend_end.extended_end_date
        if _within(window_end, new_start, new_end) or _within(new_end, window_start, window_end):
            new_start = min(new_start, window_start)
            new_end = max(new_end, window_end)
            extended = True
            reason = reason or weekend_end.reason

    if extended:
        logger.debug(
            "Selection auto-extended | period_id=%s | start=%s | end=%s | reason=%s",
            period.id,
            new_start.isoformat(),
            new_end.isoformat(),
            reason,
        )
    return ExtendedSelection(
        start_date=new_start,
        end_date=new_end,
        extended=extended,
        reason=reason,
    )

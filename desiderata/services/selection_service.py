"""Selection tallies and cumulative quota validation."""

from __future__ import annotations

from datetime import date
from typing import Sequence

from desiderata.domain.calendar import DateLike, is_weekend_day, is_working_day, iter_days, to_date
from desiderata.domain.constraints import DEFAULT_QUOTA_POLICY, QuotaPolicy
from desiderata.domain.models import (
    DesiderataSelection,
    Holiday,
    MandatoryWeekendExtension,
    Period,
    SelectionValidation,
    sum_selections,
)
from desiderata.services.availability_service import (
    calculate_period_availability,
    calculate_priority_limits,
)
from desiderata.services.mandatory_service import (
    check_mandatory_weekend_end,
    check_mandatory_weekend_start,
)
from desiderata.utils.logger import get_logger


logger = get_logger(__name__)


DEFAULT_MANDATORY_REASON = "Mandatory weekend selection required"


def count_selection_days(
    start: DateLike,
    end: DateLike,
    holidays: Sequence[Holiday] = (),
) -> DesiderataSelection:
    """Tally working and weekend days in [start, end].

    Holidays are not excluded: a selection spanning a holiday still spends a
    day of quota. Only the available pool is holiday-adjusted.
    """
    del holidays
    working_days_used = 0
    weekend_days_used = 0
    for day in iter_days(start, end):
        if is_working_day(day):
            working_days_used += 1
        elif is_weekend_day(day):
            weekend_days_used += 1

    return DesiderataSelection(
        working_days_used=working_days_used,
        weekend_days_used=weekend_days_used,
        total_days_used=working_days_used + weekend_days_used,
    )


def _start_window_violated(
    window: MandatoryWeekendExtension,
    start: date,
    end: date,
) -> bool:
    if not (window.required and window.extended_start_date and window.extended_end_date):
        return False
    if not start <= window.extended_start_date <= end:
        return False
    return start != window.extended_start_date or end < window.extended_end_date


def _end_window_violated(
    window: MandatoryWeekendExtension,
    start: date,
    end: date,
) -> bool:
    if not (window.required and window.extended_start_date and window.extended_end_date):
        return False
    if not start <= window.extended_end_date <= end:
        return False
    return end != window.extended_end_date or start > window.extended_start_date


def validate_selection(
    start: DateLike,
    end: DateLike,
    period: Period,
    holidays: Sequence[Holiday],
    priority: int,
    existing_selections: Sequence[DesiderataSelection] = (),
    policy: QuotaPolicy = DEFAULT_QUOTA_POLICY,
) -> SelectionValidation:
    """Check a candidate range against the tier limits and mandatory windows.

    Business-rule violations are reported through ``errors``; nothing here
    raises except date parsing on malformed input.
    """
    start_date = to_date(start)
    end_date = to_date(end)
    errors: list[str] = []
    warnings: list[str] = []

    availability = calculate_period_availability(period, holidays)
    limits = calculate_priority_limits(availability, priority, period, policy=policy)

    selection = count_selection_days(start_date, end_date, holidays)
    total_used = sum_selections(existing_selections, start=selection)

    if total_used.working_days_used > limits.max_working_days:
        errors.append(
            f"Working days limit exceeded: {total_used.working_days_used}/"
            f"{limits.max_working_days} days"
        )
    elif total_used.working_days_used == limits.max_working_days:
        warnings.append("Working days limit reached")

    if total_used.weekend_days_used > limits.max_weekend_days:
        errors.append(
            f"Weekend days limit exceeded: {total_used.weekend_days_used}/"
            f"{limits.max_weekend_days} days"
        )
    elif total_used.weekend_days_used == limits.max_weekend_days:
        warnings.append("Weekend days limit reached")

    weekend_start = check_mandatory_weekend_start(period, holidays)
    if _start_window_violated(weekend_start, start_date, end_date):
        errors.append(weekend_start.reason or DEFAULT_MANDATORY_REASON)

    weekend_end = check_mandatory_weekend_end(period, holidays)
    if _end_window_violated(weekend_end, start_date, end_date):
        errors.append(weekend_end.reason or DEFAULT_MANDATORY_REASON)

    result = SelectionValidation(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        selection=selection,
        limits=limits,
        remaining_working_days=limits.max_working_days - total_used.working_days_used,
        remaining_weekend_days=limits.max_weekend_days - total_used.weekend_days_used,
    )
    logger.debug(
        (
            "Selection validated | period_id=%s | start=%s | end=%s | priority=%s | "
            "is_valid=%s | errors=%s"
        ),
        period.id,
        start_date.isoformat(),
        end_date.isoformat(),
        priority,
        result.is_valid,
        len(errors),
    )
    return result

"""Period availability and priority quota derivation."""

from __future__ import annotations

from typing import Optional, Sequence

from desiderata.domain.calendar import (
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    WEDNESDAY,
    is_weekend_day,
    is_working_day,
    iter_days,
    to_date,
)
from desiderata.domain.constraints import DEFAULT_QUOTA_POLICY, QuotaPolicy
from desiderata.domain.models import DesiderataAvailability, Holiday, Period, PriorityLimits
from desiderata.utils.logger import get_logger


logger = get_logger(__name__)


# (working days, weekend days) removed from the budget per holiday weekday.
HOLIDAY_ADJUSTMENTS: dict[int, tuple[int, int]] = {
    MONDAY: (1, 1),
    TUESDAY: (2, 1),
    WEDNESDAY: (1, 1),
    THURSDAY: (2, 1),
    FRIDAY: (0, 1),
    SATURDAY: (0, 1),
    SUNDAY: (0, 1),
}


def _holidays_in_period(period: Period, holidays: Sequence[Holiday]) -> list[Holiday]:
    first_by_date: dict[str, Holiday] = {}
    for holiday in holidays:
        first_by_date.setdefault(holiday.date, holiday)

    collected: list[Holiday] = []
    for day in iter_days(period.start_date, period.end_date):
        holiday = first_by_date.get(day.isoformat())
        if holiday is not None:
            collected.append(holiday)
    return collected


def calculate_period_availability(
    period: Period,
    holidays: Sequence[Holiday],
) -> DesiderataAvailability:
    """Count raw working/weekend days in the period and deduct holiday bridges."""
    raw_working_days = 0
    raw_weekend_days = 0
    for day in iter_days(period.start_date, period.end_date):
        if is_working_day(day):
            raw_working_days += 1
        elif is_weekend_day(day):
            raw_weekend_days += 1

    public_holidays = _holidays_in_period(period, holidays)

    working_adjustment = 0
    weekend_adjustment = 0
    for holiday in public_holidays:
        working_delta, weekend_delta = HOLIDAY_ADJUSTMENTS[to_date(holiday.date).weekday()]
        working_adjustment += working_delta
        weekend_adjustment += weekend_delta

    available_working_days = max(0, raw_working_days - working_adjustment)
    available_weekend_days = max(0, raw_weekend_days - weekend_adjustment)

    quotas = period.quotas
    logger.debug(
        (
            "Period availability computed | period_id=%s | raw_working=%s | raw_weekend=%s | "
            "holidays=%s | available_working=%s | available_weekend=%s"
        ),
        period.id,
        raw_working_days,
        raw_weekend_days,
        len(public_holidays),
        available_working_days,
        available_weekend_days,
    )
    return DesiderataAvailability(
        available_working_days=available_working_days,
        available_weekend_days=available_weekend_days,
        total_available_days=available_working_days + available_weekend_days,
        public_holidays=tuple(public_holidays),
        raw_working_days=raw_working_days,
        raw_weekend_days=raw_weekend_days,
        total_weekends=quotas.total_weekends if quotas else None,
        weekends_with_holidays=quotas.weekends_with_public_holidays if quotas else None,
        net_weekends=quotas.net_weekends if quotas else None,
        net_working_days=quotas.net_working_days if quotas else None,
    )


def calculate_priority_limits(
    availability: DesiderataAvailability,
    priority: int,
    period: Optional[Period] = None,
    policy: QuotaPolicy = DEFAULT_QUOTA_POLICY,
) -> PriorityLimits:
    """Derive the working/weekend ceiling for a priority tier.

    Quotas configured on the period are authoritative. Otherwise the senior
    tier receives a quarter of the available days and every other tier half.
    """
    if period is not None and period.quotas is not None:
        return PriorityLimits(
            max_working_days=period.quotas.allowed_working_day_desiderata,
            max_weekend_days=period.quotas.allowed_weekend_desiderata,
            priority=priority,
        )

    divisor = policy.divisor_for(priority)
    return PriorityLimits(
        max_working_days=availability.available_working_days // divisor,
        max_weekend_days=availability.available_weekend_days // divisor,
        priority=priority,
    )

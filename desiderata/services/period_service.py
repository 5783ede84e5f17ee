"""Period selectability rules driven by each period's editing status."""

from __future__ import annotations

from typing import Optional, Sequence

from desiderata.domain.calendar import DateLike, iter_days, to_date
from desiderata.domain.models import (
    EDITING_STATUS_CLOSED,
    EDITING_STATUS_OPEN_DESIDERATA,
    EDITING_STATUS_OPEN_HOLIDAY,
    EDITING_STATUS_UNDEFINED,
    EVENT_TYPE_REQUESTED_DESIDERATA,
    EVENT_TYPE_REQUESTED_LEAVE,
    DayCellSelectability,
    Period,
)


ALLOWED_EVENT_TYPE_BY_STATUS = {
    EDITING_STATUS_OPEN_HOLIDAY: EVENT_TYPE_REQUESTED_LEAVE,
    EDITING_STATUS_OPEN_DESIDERATA: EVENT_TYPE_REQUESTED_DESIDERATA,
}


def find_period_for_date(value: DateLike, periods: Sequence[Period]) -> Optional[Period]:
    target = to_date(value)
    for period in periods:
        if period.start <= target <= period.end:
            return period
    return None


def get_day_cell_selectability(
    value: DateLike,
    periods: Sequence[Period],
) -> DayCellSelectability:
    """Resolve whether a day can be requested, and as which event type.

    Days outside every period or inside a closed period are not selectable.
    Open-holiday periods accept leave requests, open-desiderata periods accept
    desiderata requests.
    """
    period = find_period_for_date(value, periods)
    if period is None:
        return DayCellSelectability(
            is_selectable=False,
            allowed_event_type=None,
            editing_status=EDITING_STATUS_UNDEFINED,
            period=None,
        )

    allowed_event_type = ALLOWED_EVENT_TYPE_BY_STATUS.get(period.editing_status)
    if allowed_event_type is None:
        return DayCellSelectability(
            is_selectable=False,
            allowed_event_type=None,
            editing_status=EDITING_STATUS_CLOSED,
            period=period,
        )

    return DayCellSelectability(
        is_selectable=True,
        allowed_event_type=allowed_event_type,
        editing_status=period.editing_status,
        period=period,
    )


def is_event_type_allowed(value: DateLike, event_type: str, periods: Sequence[Period]) -> bool:
    selectability = get_day_cell_selectability(value, periods)
    if not selectability.is_selectable:
        return False
    return selectability.allowed_event_type == event_type


def get_allowed_event_type_for_range(
    start: DateLike,
    end: DateLike,
    periods: Sequence[Period],
) -> Optional[str]:
    """Return the event type allowed on every day of the range, if consistent."""
    allowed_event_type: Optional[str] = None
    for day in iter_days(start, end):
        selectability = get_day_cell_selectability(day, periods)
        if not selectability.is_selectable:
            return None
        if allowed_event_type is None:
            allowed_event_type = selectability.allowed_event_type
        elif allowed_event_type != selectability.allowed_event_type:
            return None
    return allowed_event_type

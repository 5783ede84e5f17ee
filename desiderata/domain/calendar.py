"""Calendar classification on the four-day working week.

Working days run Monday to Thursday; Friday, Saturday and Sunday form the
weekend. Every predicate normalizes its input to a calendar ``date`` and holiday
lookups compare ``yyyy-MM-dd`` keys, so a datetime late in the evening never
lands on the neighbouring day.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Union

from desiderata.domain.models import Holiday


DateLike = Union[date, datetime, str]

MONDAY = 0
TUESDAY = 1
WEDNESDAY = 2
THURSDAY = 3
FRIDAY = 4
SATURDAY = 5
SUNDAY = 6

ONE_DAY = timedelta(days=1)


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar date.

    Raises ``ValueError`` for strings that are not ISO dates.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if "T" in text:
        text = text.split("T", 1)[0]
    return date.fromisoformat(text)


def date_key(value: DateLike) -> str:
    return to_date(value).isoformat()


def holiday_dates(holidays: Iterable[Holiday]) -> frozenset[str]:
    return frozenset(holiday.date for holiday in holidays)


def is_working_day(value: DateLike) -> bool:
    return MONDAY <= to_date(value).weekday() <= THURSDAY


def is_weekend_day(value: DateLike) -> bool:
    return to_date(value).weekday() in (FRIDAY, SATURDAY, SUNDAY)


def is_public_holiday(value: DateLike, holidays: Iterable[Holiday]) -> bool:
    return date_key(value) in holiday_dates(holidays)


def iter_days(start: DateLike, end: DateLike) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = to_date(start)
    last = to_date(end)
    while current <= last:
        yield current
        current = current + ONE_DAY

"""Domain models for desiderata quotas, mandatory windows and selections."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional


EDITING_STATUS_CLOSED = "closed"
EDITING_STATUS_OPEN_HOLIDAY = "open-holiday"
EDITING_STATUS_OPEN_DESIDERATA = "open-desiderata"
EDITING_STATUS_UNDEFINED = "undefined"

EDITING_STATUSES = (
    EDITING_STATUS_CLOSED,
    EDITING_STATUS_OPEN_HOLIDAY,
    EDITING_STATUS_OPEN_DESIDERATA,
)

EVENT_TYPE_REQUESTED_LEAVE = "requestedLeave"
EVENT_TYPE_REQUESTED_DESIDERATA = "requestedDesiderata"
EVENT_TYPE_DESIDERATA = "desiderata"

EVENT_STATUS_PENDING = "pending"


@dataclass(frozen=True)
class PeriodQuotas:
    """Server-authoritative quota figures attached to a period."""

    total_weekends: int
    weekends_with_public_holidays: int
    net_weekends: int
    allowed_weekend_desiderata: int
    net_working_days: int
    allowed_working_day_desiderata: int
    total_working_days: int = 0
    working_days_with_public_holidays: int = 0


@dataclass(frozen=True)
class Period:
    id: str
    name: str
    start_date: str
    end_date: str
    editing_status: str
    quotas: Optional[PeriodQuotas] = None

    @property
    def start(self) -> date:
        return date.fromisoformat(self.start_date)

    @property
    def end(self) -> date:
        return date.fromisoformat(self.end_date)

    @property
    def is_open_for_desiderata(self) -> bool:
        return self.editing_status == EDITING_STATUS_OPEN_DESIDERATA


@dataclass(frozen=True)
class Holiday:
    date: str
    name: str
    type: str = "public"


@dataclass(frozen=True)
class DesiderataAvailability:
    available_working_days: int
    available_weekend_days: int
    total_available_days: int
    public_holidays: tuple[Holiday, ...]
    raw_working_days: int
    raw_weekend_days: int
    total_weekends: Optional[int] = None
    weekends_with_holidays: Optional[int] = None
    net_weekends: Optional[int] = None
    net_working_days: Optional[int] = None


@dataclass(frozen=True)
class PriorityLimits:
    max_working_days: int
    max_weekend_days: int
    priority: int


@dataclass(frozen=True)
class DesiderataSelection:
    """Day-type tally for one date range."""

    working_days_used: int = 0
    weekend_days_used: int = 0
    total_days_used: int = 0

    def __add__(self, other: DesiderataSelection) -> DesiderataSelection:
        if not isinstance(other, DesiderataSelection):
            return NotImplemented
        return DesiderataSelection(
            working_days_used=self.working_days_used + other.working_days_used,
            weekend_days_used=self.weekend_days_used + other.weekend_days_used,
            total_days_used=self.total_days_used + other.total_days_used,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "working_days_used": self.working_days_used,
            "weekend_days_used": self.weekend_days_used,
            "total_days_used": self.total_days_used,
        }


def sum_selections(
    selections: Iterable[DesiderataSelection],
    start: Optional[DesiderataSelection] = None,
) -> DesiderataSelection:
    total = start if start is not None else DesiderataSelection()
    for selection in selections:
        total = total + selection
    return total


@dataclass(frozen=True)
class MandatoryWeekendExtension:
    required: bool
    reason: Optional[str] = None
    extended_start_date: Optional[date] = None
    extended_end_date: Optional[date] = None


NOT_REQUIRED = MandatoryWeekendExtension(required=False)


@dataclass(frozen=True)
class DateExtension:
    extend: bool
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class ExtendedSelection:
    start_date: date
    end_date: date
    extended: bool
    reason: Optional[str] = None


@dataclass(frozen=True)
class SelectionValidation:
    is_valid: bool
    errors: list[str]
    warnings: list[str]
    selection: DesiderataSelection
    limits: PriorityLimits
    remaining_working_days: int
    remaining_weekend_days: int

    def to_dict(self) -> dict[str, object]:
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "selection": self.selection.to_dict(),
            "limits": {
                "max_working_days": self.limits.max_working_days,
                "max_weekend_days": self.limits.max_weekend_days,
                "priority": self.limits.priority,
            },
            "remaining_working_days": self.remaining_working_days,
            "remaining_weekend_days": self.remaining_weekend_days,
        }


@dataclass(frozen=True)
class DesiderataEvent:
    """Event-store projection of a leave or desiderata entry."""

    id: str
    user_id: str
    type: str
    date: str
    end_date: Optional[str] = None
    status: Optional[str] = None

    @property
    def last_date(self) -> str:
        return self.end_date or self.date


@dataclass(frozen=True)
class DayCellSelectability:
    is_selectable: bool
    allowed_event_type: Optional[str]
    editing_status: str
    period: Optional[Period] = field(default=None)

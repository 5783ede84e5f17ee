"""Parsing of period, holiday and event store payloads into domain models.

Store records use the camelCase JSON of the calendar backend. Payload models
validate dates and editing status before anything reaches the engine, which
assumes well-formed input.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from desiderata.domain.models import (
    EDITING_STATUSES,
    DesiderataEvent,
    Holiday,
    Period,
    PeriodQuotas,
)


class PayloadValidationError(Exception):
    """Raised when a store payload cannot be converted into domain models."""


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class QuotasPayload(_CamelModel):
    total_weekends: int = Field(default=0, ge=0, alias="totalWeekends")
    weekends_with_public_holidays: int = Field(
        default=0, ge=0, alias="weekendsWithPublicHolidays"
    )
    net_weekends: int = Field(default=0, ge=0, alias="netWeekends")
    allowed_weekend_desiderata: int = Field(ge=0, alias="allowedWeekendDesiderata")
    total_working_days: int = Field(default=0, ge=0, alias="totalWorkingDays")
    working_days_with_public_holidays: int = Field(
        default=0, ge=0, alias="workingDaysWithPublicHolidays"
    )
    net_working_days: int = Field(default=0, ge=0, alias="netWorkingDays")
    allowed_working_day_desiderata: int = Field(ge=0, alias="allowedWorkingDayDesiderata")

    def to_domain(self) -> PeriodQuotas:
        return PeriodQuotas(
            total_weekends=self.total_weekends,
            weekends_with_public_holidays=self.weekends_with_public_holidays,
            net_weekends=self.net_weekends,
            allowed_weekend_desiderata=self.allowed_weekend_desiderata,
            net_working_days=self.net_working_days,
            allowed_working_day_desiderata=self.allowed_working_day_desiderata,
            total_working_days=self.total_working_days,
            working_days_with_public_holidays=self.working_days_with_public_holidays,
        )


class PeriodPayload(_CamelModel):
    id: str = Field(min_length=1)
    name: str = ""
    start_date: dt.date = Field(alias="startDate")
    end_date: dt.date = Field(alias="endDate")
    editing_status: str = Field(alias="editingStatus")
    quotas: Optional[QuotasPayload] = None

    @field_validator("editing_status")
    @classmethod
    def validate_editing_status(cls, value: str) -> str:
        if value not in EDITING_STATUSES:
            raise ValueError(f"editingStatus must be one of {', '.join(EDITING_STATUSES)}")
        return value

    @model_validator(mode="after")
    def validate_date_order(self) -> "PeriodPayload":
        if self.start_date > self.end_date:
            raise ValueError("startDate must be on or before endDate")
        return self

    def to_domain(self) -> Period:
        return Period(
            id=self.id,
            name=self.name,
            start_date=self.start_date.isoformat(),
            end_date=self.end_date.isoformat(),
            editing_status=self.editing_status,
            quotas=self.quotas.to_domain() if self.quotas is not None else None,
        )


class HolidayPayload(_CamelModel):
    date: dt.date
    name: str = ""
    type: str = "public"

    def to_domain(self) -> Holiday:
        return Holiday(date=self.date.isoformat(), name=self.name, type=self.type)


class EventPayload(_CamelModel):
    id: str = Field(min_length=1)
    user_id: str = Field(min_length=1, alias="userId")
    type: str
    date: dt.date
    end_date: Optional[dt.date] = Field(default=None, alias="endDate")
    status: Optional[str] = None

    def to_domain(self) -> DesiderataEvent:
        return DesiderataEvent(
            id=self.id,
            user_id=self.user_id,
            type=self.type,
            date=self.date.isoformat(),
            end_date=self.end_date.isoformat() if self.end_date is not None else None,
            status=self.status,
        )


def parse_period(raw: dict[str, Any]) -> Period:
    try:
        return PeriodPayload.model_validate(raw).to_domain()
    except ValidationError as exc:
        raise PayloadValidationError(f"Invalid period payload: {exc}") from exc


def parse_periods(raw: dict[str, Any] | Iterable[dict[str, Any]]) -> list[Period]:
    """Parse a list of periods or a ``{"periods": [...]}`` year document."""
    items = raw.get("periods", []) if isinstance(raw, dict) else raw
    return [parse_period(item) for item in items]


def parse_holidays(raw: Iterable[dict[str, Any]]) -> list[Holiday]:
    try:
        return [HolidayPayload.model_validate(item).to_domain() for item in raw]
    except ValidationError as exc:
        raise PayloadValidationError(f"Invalid holiday payload: {exc}") from exc


def parse_events(raw: Iterable[dict[str, Any]], user_id: Optional[str] = None) -> list[DesiderataEvent]:
    """Parse event records; ``user_id`` fills in records stored per user without one."""
    events: list[DesiderataEvent] = []
    try:
        for item in raw:
            if user_id is not None and "userId" not in item and "user_id" not in item:
                item = {**item, "userId": user_id}
            events.append(EventPayload.model_validate(item).to_domain())
    except ValidationError as exc:
        raise PayloadValidationError(f"Invalid event payload: {exc}") from exc
    return events

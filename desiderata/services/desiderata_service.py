"""Desiderata planning workflow over the period, holiday and event stores."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from desiderata.domain.calendar import DateLike, date_key, iter_days, to_date
from desiderata.domain.constraints import QuotaPolicy, validate_quota_policy
from desiderata.domain.models import (
    EVENT_STATUS_PENDING,
    EVENT_TYPE_DESIDERATA,
    EVENT_TYPE_REQUESTED_DESIDERATA,
    DesiderataAvailability,
    DesiderataEvent,
    DesiderataSelection,
    ExtendedSelection,
    Holiday,
    Period,
    PriorityLimits,
    SelectionValidation,
)
from desiderata.repository.stores import EventStore, HolidayDirectory, PeriodStore
from desiderata.services.availability_service import (
    calculate_period_availability,
    calculate_priority_limits,
)
from desiderata.services.mandatory_service import auto_extend_for_mandatory_weekend
from desiderata.services.period_service import find_period_for_date
from desiderata.services.selection_service import count_selection_days, validate_selection
from desiderata.utils.config import Settings, get_settings
from desiderata.utils.logger import get_logger


logger = get_logger(__name__)


GRID_MARK = "X"


class DesiderataServiceError(Exception):
    """Base exception for planning workflow failures."""


class PeriodNotFoundError(DesiderataServiceError):
    """Raised when a period id does not exist for the requested site and year."""


@dataclass(frozen=True)
class SelectionSummary:
    period: Period
    availability: DesiderataAvailability
    limits: PriorityLimits
    selection: DesiderataSelection


@dataclass(frozen=True)
class PendingDesiderataRequest:
    user_id: str
    event_id: str
    start_date: str
    end_date: str


@dataclass(frozen=True)
class PendingDesiderataReport:
    period: Period
    requests: list[PendingDesiderataRequest]
    grid: pd.DataFrame


def _is_counted_desiderata(event: DesiderataEvent) -> bool:
    if event.type == EVENT_TYPE_DESIDERATA:
        return True
    return event.type == EVENT_TYPE_REQUESTED_DESIDERATA and event.status == EVENT_STATUS_PENDING


def build_pending_grid(
    period: Period,
    requests: list[PendingDesiderataRequest],
    user_ids: list[str],
) -> pd.DataFrame:
    """One row per period day, one ``X``/blank column per user, plus a total."""
    marked: set[tuple[str, str]] = set()
    for request in requests:
        for day in iter_days(request.start_date, request.end_date):
            marked.add((request.user_id, day.isoformat()))

    days = [day.isoformat() for day in iter_days(period.start_date, period.end_date)]
    frame = pd.DataFrame(
        {
            user_id: [GRID_MARK if (user_id, day) in marked else "" for day in days]
            for user_id in user_ids
        },
        index=pd.Index(days, name="date"),
    )
    frame["total"] = (frame[user_ids] == GRID_MARK).sum(axis=1) if user_ids else 0
    return frame


class DesiderataPlanningService:
    """Feeds store data through the quota engine for one site.

    Every call reads fresh records, so the service never caches availability
    or usage between requests.
    """

    def __init__(
        self,
        period_store: PeriodStore,
        holiday_directory: HolidayDirectory,
        event_store: EventStore,
        settings: Optional[Settings] = None,
        location: Optional[str] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._period_store = period_store
        self._holiday_directory = holiday_directory
        self._event_store = event_store
        self._location = location or self._settings.default_holiday_location
        self._policy = QuotaPolicy(
            senior_priority_tier=self._settings.senior_priority_tier,
            senior_quota_divisor=self._settings.senior_quota_divisor,
            standard_quota_divisor=self._settings.standard_quota_divisor,
        )
        validate_quota_policy(self._policy)

    def _periods_around(self, site: str, target: date) -> list[Period]:
        # A period crossing New Year may be filed under its start year or its end year.
        periods: list[Period] = []
        seen: set[str] = set()
        for year in (target.year - 1, target.year, target.year + 1):
            for period in self._period_store.list_periods(site, year):
                if period.id not in seen:
                    seen.add(period.id)
                    periods.append(period)
        return periods

    def _holidays_for(self, period: Period) -> list[Holiday]:
        # Mandatory windows look up to two days beyond each boundary.
        first_year = period.start.year - (1 if period.start.month == 1 else 0)
        last_year = period.end.year + (1 if period.end.month == 12 else 0)
        holidays: list[Holiday] = []
        for year in range(first_year, last_year + 1):
            holidays.extend(self._holiday_directory.list_holidays(year, self._location))
        return holidays

    def _resolve_priority(self, priority: Optional[int]) -> int:
        return priority if priority is not None else self._settings.default_user_priority

    def get_period_for_date(self, site: str, target: DateLike) -> Optional[Period]:
        target_date = to_date(target)
        return find_period_for_date(target_date, self._periods_around(site, target_date))

    def get_open_period(self, site: str, target: DateLike) -> Optional[Period]:
        period = self.get_period_for_date(site, target)
        if period is None or not period.is_open_for_desiderata:
            logger.info(
                "No open desiderata period | site=%s | date=%s | status=%s",
                site,
                date_key(target),
                period.editing_status if period else None,
            )
            return None
        return period

    def existing_selections(
        self,
        site: str,
        user_id: str,
        period: Period,
        exclude_event_id: Optional[str] = None,
    ) -> list[DesiderataSelection]:
        """Tally the user's approved and pending desiderata starting in the period."""
        selections: list[DesiderataSelection] = []
        for event in self._event_store.list_events(site, user_id):
            if exclude_event_id is not None and event.id == exclude_event_id:
                continue
            if not _is_counted_desiderata(event):
                continue
            if not period.start <= to_date(event.date) <= period.end:
                continue
            selections.append(count_selection_days(event.date, event.last_date))
        return selections

    def summarize(
        self,
        site: str,
        start: DateLike,
        end: DateLike,
        priority: Optional[int] = None,
    ) -> Optional[SelectionSummary]:
        period = self.get_open_period(site, start)
        if period is None:
            return None

        holidays = self._holidays_for(period)
        availability = calculate_period_availability(period, holidays)
        limits = calculate_priority_limits(
            availability,
            self._resolve_priority(priority),
            period,
            policy=self._policy,
        )
        return SelectionSummary(
            period=period,
            availability=availability,
            limits=limits,
            selection=count_selection_days(start, end, holidays),
        )

    def validate_new_selection(
        self,
        site: str,
        user_id: str,
        start: DateLike,
        end: DateLike,
        priority: Optional[int] = None,
        exclude_event_id: Optional[str] = None,
    ) -> Optional[SelectionValidation]:
        period = self.get_open_period(site, start)
        if period is None:
            return None

        resolved_priority = self._resolve_priority(priority)
        existing = self.existing_selections(
            site,
            user_id,
            period,
            exclude_event_id=exclude_event_id,
        )
        result = validate_selection(
            start,
            end,
            period,
            self._holidays_for(period),
            resolved_priority,
            existing,
            policy=self._policy,
        )
        logger.info(
            (
                "Desiderata selection validated | site=%s | user_id=%s | period_id=%s | "
                "priority=%s | is_valid=%s | remaining_working=%s | remaining_weekend=%s"
            ),
            site,
            user_id,
            period.id,
            resolved_priority,
            result.is_valid,
            result.remaining_working_days,
            result.remaining_weekend_days,
        )
        return result

    def apply_mandatory_extension(
        self,
        site: str,
        start: DateLike,
        end: DateLike,
    ) -> Optional[ExtendedSelection]:
        period = self.get_open_period(site, start)
        if period is None:
            return None
        return auto_extend_for_mandatory_weekend(start, end, period, self._holidays_for(period))

    def pending_desiderata_grid(self, site: str, year: int, period_id: str) -> PendingDesiderataReport:
        """Collect pending desiderata inside a period and lay them out per day."""
        period = next(
            (item for item in self._period_store.list_periods(site, year) if item.id == period_id),
            None,
        )
        if period is None:
            raise PeriodNotFoundError(f"Period {period_id} not found for year {year}")

        user_ids = self._event_store.list_user_ids(site)
        requests: list[PendingDesiderataRequest] = []
        for user_id in user_ids:
            for event in self._event_store.list_events(site, user_id):
                if event.type != EVENT_TYPE_REQUESTED_DESIDERATA or event.status != EVENT_STATUS_PENDING:
                    continue
                if to_date(event.date) < period.start or to_date(event.last_date) > period.end:
                    continue
                requests.append(
                    PendingDesiderataRequest(
                        user_id=user_id,
                        event_id=event.id,
                        start_date=event.date,
                        end_date=event.last_date,
                    )
                )

        logger.info(
            "Pending desiderata collected | site=%s | period_id=%s | users=%s | requests=%s",
            site,
            period_id,
            len(user_ids),
            len(requests),
        )
        return PendingDesiderataReport(
            period=period,
            requests=requests,
            grid=build_pending_grid(period, requests, user_ids),
        )

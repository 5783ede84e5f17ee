"""Collaborator interfaces supplying periods, holidays and events.

The engine never loads or mutates these records itself; the planning service
reads them through the protocols below. The in-memory implementations back
tests and embedders that already hold the data.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Protocol

from desiderata.domain.models import DesiderataEvent, Holiday, Period


class PeriodStore(Protocol):
    def list_periods(self, site: str, year: int) -> list[Period]:
        ...


class HolidayDirectory(Protocol):
    def list_holidays(self, year: int, location: str) -> list[Holiday]:
        ...


class EventStore(Protocol):
    def list_events(self, site: str, user_id: str) -> list[DesiderataEvent]:
        ...

    def list_user_ids(self, site: str) -> list[str]:
        ...


class InMemoryPeriodStore:
    """Periods keyed by (site, year), where year is the file the period lives in."""

    def __init__(self) -> None:
        self._periods: dict[tuple[str, int], list[Period]] = defaultdict(list)

    def add_periods(self, site: str, year: int, periods: Iterable[Period]) -> None:
        self._periods[(site, year)].extend(periods)

    def list_periods(self, site: str, year: int) -> list[Period]:
        return list(self._periods.get((site, year), []))


class InMemoryHolidayDirectory:
    def __init__(self) -> None:
        self._holidays: dict[tuple[int, str], list[Holiday]] = defaultdict(list)

    def add_holidays(self, location: str, holidays: Iterable[Holiday]) -> None:
        for holiday in holidays:
            year = int(holiday.date[:4])
            self._holidays[(year, location)].append(holiday)

    def list_holidays(self, year: int, location: str) -> list[Holiday]:
        return list(self._holidays.get((year, location), []))


class InMemoryEventStore:
    def __init__(self) -> None:
        self._events: dict[tuple[str, str], list[DesiderataEvent]] = defaultdict(list)
        self._users: dict[str, list[str]] = defaultdict(list)

    def add_user(self, site: str, user_id: str) -> None:
        if user_id not in self._users[site]:
            self._users[site].append(user_id)

    def add_events(self, site: str, events: Iterable[DesiderataEvent]) -> None:
        for event in events:
            self.add_user(site, event.user_id)
            self._events[(site, event.user_id)].append(event)

    def list_events(self, site: str, user_id: str) -> list[DesiderataEvent]:
        return list(self._events.get((site, user_id), []))

    def list_user_ids(self, site: str) -> list[str]:
        return list(self._users.get(site, []))

"""
Domain entities returned by the date-context use-cases.
Zero external dependencies — pure Python dataclasses only.

Every value here is request-scoped: built once by a use-case, serialized by the
entrypoint layer and discarded.
"""

from dataclasses import dataclass
from datetime import datetime

from src.domain.entities.calendar_date import CalendarDate
from src.domain.entities.holiday import HolidayRecord
from src.domain.entities.on_this_day import HistoricalEvent, NotableBirth


@dataclass(frozen=True)
class TodayOverview:
    date: CalendarDate
    holidays: list[HolidayRecord]
    fetched_at: datetime
    free_endpoints: tuple[str, ...] = ()
    paid_endpoints: tuple[str, ...] = ()


@dataclass(frozen=True)
class HolidayLookup:
    country: str
    year: int
    holidays: list[HolidayRecord]
    fetched_at: datetime

    @property
    def count(self) -> int:
        return len(self.holidays)


@dataclass(frozen=True)
class EventsLookup:
    month_day: str
    events: list[HistoricalEvent]
    fetched_at: datetime


@dataclass(frozen=True)
class BirthsLookup:
    month_day: str
    births: list[NotableBirth]
    fetched_at: datetime


@dataclass(frozen=True)
class DateContext:
    date: CalendarDate
    country: str
    holidays: list[HolidayRecord]
    events: list[HistoricalEvent]
    births: list[NotableBirth]
    fetched_at: datetime


@dataclass(frozen=True)
class DateComparison:
    date: str
    day_of_week: str
    is_weekend: bool
    holidays: list[str]

    @property
    def is_holiday(self) -> bool:
        return bool(self.holidays)


@dataclass(frozen=True)
class ComparisonSummary:
    weekends: int
    holidays: int
    all_weekends: bool
    all_holidays: bool
    no_weekends: bool


@dataclass(frozen=True)
class DateComparisonReport:
    country: str
    comparisons: list[DateComparison]
    fetched_at: datetime

    @property
    def summary(self) -> ComparisonSummary:
        total = len(self.comparisons)
        weekends = sum(1 for c in self.comparisons if c.is_weekend)
        holidays = sum(1 for c in self.comparisons if c.is_holiday)
        return ComparisonSummary(
            weekends=weekends,
            holidays=holidays,
            all_weekends=weekends == total,
            all_holidays=holidays == total,
            no_weekends=weekends == 0,
        )

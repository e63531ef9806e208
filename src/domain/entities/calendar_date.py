"""
Domain entity for a calendar date and its derived attributes.
Zero external dependencies — pure Python dataclass and datetime only.

All arithmetic runs on naive calendar dates: a date string is never shifted
through a timezone, and "today" is whatever local date the caller supplies.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True)
class CalendarDate:
    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Raises ValueError for month 13, Feb 30, etc.
        date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, value: date) -> "CalendarDate":
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def from_iso(cls, value: str) -> "CalendarDate":
        """Parse a strict ``YYYY-MM-DD`` string.

        Raises:
            ValueError: if *value* is not a valid ISO calendar date.
        """
        if not ISO_DATE_PATTERN.fullmatch(value):
            raise ValueError(f"Expected a YYYY-MM-DD date, got {value!r}")
        return cls.from_date(date.fromisoformat(value))

    @property
    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def iso(self) -> str:
        return self.as_date.isoformat()

    @property
    def month_day(self) -> str:
        """``MM-DD``, the year-independent key used by on-this-day feeds."""
        return f"{self.month:02d}-{self.day:02d}"

    @property
    def day_of_week(self) -> str:
        return WEEKDAY_NAMES[self.as_date.weekday()]

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def is_weekend(self) -> bool:
        return self.as_date.weekday() >= 5

    @property
    def day_of_year(self) -> int:
        return self.as_date.timetuple().tm_yday

    @property
    def iso_week(self) -> int:
        return self.as_date.isocalendar()[1]

    @property
    def quarter(self) -> int:
        return (self.month - 1) // 3 + 1


def decompose_date(value: Optional[str] = None, today: Optional[date] = None) -> CalendarDate:
    """Build a CalendarDate from an ISO string, or from *today* when no string is given.

    Args:
        value: ``YYYY-MM-DD`` string (optional).
        today: Local date to fall back on; defaults to ``date.today()``.

    Raises:
        ValueError: if *value* is given but is not a valid ISO date.
    """
    if value:
        return CalendarDate.from_iso(value)
    return CalendarDate.from_date(today or date.today())

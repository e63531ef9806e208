"""
Use-case: compare 2–5 dates by weekday, weekend and public-holiday status.
Depends only on Domain ports and entities — no infrastructure imports.
"""

import logging

from src.application.services.clock import Clock, local_now, utc
from src.application.services.fan_out import settle_all
from src.domain.entities.calendar_date import CalendarDate
from src.domain.entities.date_context import DateComparison, DateComparisonReport
from src.domain.ports.holiday_provider_port import IHolidayProvider

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "US"


class CompareDatesUseCase:
    MIN_DATES: int = 2
    MAX_DATES: int = 5

    def __init__(self, holiday_provider: IHolidayProvider, clock: Clock = local_now) -> None:
        self._holiday_provider = holiday_provider
        self._clock = clock

    async def execute(self, dates: list[str], country: str = DEFAULT_COUNTRY) -> DateComparisonReport:
        """Compare *dates* against each other and against *country*'s holidays.

        One holiday request is issued per distinct year, concurrently. A year
        whose request fails contributes no holidays; the batch still completes.

        Raises:
            ValueError: on fewer than 2 or more than 5 dates, or a malformed date.
        """
        if not self.MIN_DATES <= len(dates) <= self.MAX_DATES:
            raise ValueError(f"between {self.MIN_DATES} and {self.MAX_DATES} dates are required")
        parsed = [CalendarDate.from_iso(d) for d in dates]
        country = (country or DEFAULT_COUNTRY).strip().upper()

        years = list(dict.fromkeys(d.year for d in parsed))
        outcomes = await settle_all(
            *(self._holiday_provider.get_public_holidays(year, country) for year in years)
        )

        names_by_date: dict[str, list[str]] = {}
        for year, outcome in zip(years, outcomes):
            if not outcome.ok:
                logger.warning(
                    "Holiday lookup for %s/%s failed, treating the year as holiday-free: %s",
                    year,
                    country,
                    outcome.error,
                )
            for holiday in outcome.value_or([]):
                names_by_date.setdefault(holiday.date, []).append(holiday.name)

        comparisons = [
            DateComparison(
                date=raw,
                day_of_week=d.day_of_week,
                is_weekend=d.is_weekend,
                holidays=list(names_by_date.get(d.iso, [])),
            )
            for raw, d in zip(dates, parsed)
        ]
        return DateComparisonReport(
            country=country,
            comparisons=comparisons,
            fetched_at=utc(self._clock()),
        )

"""
Use-case: list the public holidays of a country for one year.
Depends only on Domain ports and entities — no infrastructure imports.
"""

from typing import Optional

from src.application.services.clock import Clock, local_now, utc
from src.domain.entities.date_context import HolidayLookup
from src.domain.ports.holiday_provider_port import IHolidayProvider


class GetHolidaysUseCase:
    def __init__(self, holiday_provider: IHolidayProvider, clock: Clock = local_now) -> None:
        self._holiday_provider = holiday_provider
        self._clock = clock

    async def execute(self, country: str, year: Optional[int] = None) -> HolidayLookup:
        """Fetch every public holiday of *country* in *year*.

        Args:
            country: ISO 3166-1 alpha-2 code (case-insensitive).
            year:    Calendar year; defaults to the current local year.

        Raises:
            ValueError: if *country* is not two characters long.
            UpstreamError: from the IHolidayProvider; the holiday list is the
            whole response, so there is nothing to degrade to.
        """
        country = country.strip().upper()
        if len(country) != 2:
            raise ValueError("country must be a 2-letter ISO 3166-1 alpha-2 code")

        now = self._clock()
        year = year or now.year
        holidays = await self._holiday_provider.get_public_holidays(year, country)
        return HolidayLookup(
            country=country,
            year=year,
            holidays=list(holidays),
            fetched_at=utc(now),
        )

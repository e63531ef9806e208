"""
Use-case: full context for one date — holidays, historical events and births.
Depends only on Domain ports and entities — no infrastructure imports.

The three sources are fetched concurrently and each one degrades to an empty
list on its own failure; the request as a whole never fails because of a
single source. Linked pages are dropped in this mode.
"""

import logging
from typing import Optional

from src.application.services.clock import Clock, local_now, utc
from src.application.services.fan_out import settle_all
from src.domain.entities.calendar_date import decompose_date
from src.domain.entities.date_context import DateContext
from src.domain.ports.holiday_provider_port import IHolidayProvider
from src.domain.ports.on_this_day_port import IOnThisDayProvider

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY = "US"


class GetFullContextUseCase:
    MAX_ENTRIES: int = 5

    def __init__(
        self,
        holiday_provider: IHolidayProvider,
        on_this_day_provider: IOnThisDayProvider,
        clock: Clock = local_now,
    ) -> None:
        self._holiday_provider = holiday_provider
        self._on_this_day_provider = on_this_day_provider
        self._clock = clock

    async def execute(self, date: Optional[str] = None, country: str = DEFAULT_COUNTRY) -> DateContext:
        """Build the merged context for *date* (default: today) in *country*.

        Raises:
            ValueError: if *date* is not a valid ``YYYY-MM-DD`` string.
        """
        now = self._clock()
        target = decompose_date(date, today=now.date())
        country = (country or DEFAULT_COUNTRY).strip().upper()

        holidays, events, births = await settle_all(
            self._holiday_provider.get_public_holidays(target.year, country),
            self._on_this_day_provider.get_events(target.month, target.day),
            self._on_this_day_provider.get_births(target.month, target.day),
        )
        for source, outcome in (("holidays", holidays), ("events", events), ("births", births)):
            if not outcome.ok:
                logger.warning(
                    "Full context for %s/%s: %s source failed, returning it empty: %s",
                    target.iso,
                    country,
                    source,
                    outcome.error,
                )

        return DateContext(
            date=target,
            country=country,
            holidays=[h for h in holidays.value_or([]) if h.date == target.iso],
            events=[e.with_pages(0) for e in events.value_or([])[: self.MAX_ENTRIES]],
            births=[b.with_pages(0) for b in births.value_or([])[: self.MAX_ENTRIES]],
            fetched_at=utc(now),
        )

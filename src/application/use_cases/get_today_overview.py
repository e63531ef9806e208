"""
Use-case: free overview of the current day.
Depends only on Domain ports and entities — no infrastructure imports.

Holidays are best-effort enrichment here: any provider failure is logged and
the overview is returned with an empty holiday list.
"""

import logging

from src.application.services.clock import Clock, local_now, utc
from src.domain.entities.calendar_date import CalendarDate
from src.domain.entities.date_context import TodayOverview
from src.domain.ports.holiday_provider_port import IHolidayProvider

logger = logging.getLogger(__name__)

OVERVIEW_COUNTRY = "US"

FREE_ENDPOINTS = ("today", "analytics", "analytics-transactions", "analytics-csv")
PAID_ENDPOINTS = ("holidays", "events", "births", "full-context", "compare-dates")


class GetTodayOverviewUseCase:
    def __init__(self, holiday_provider: IHolidayProvider, clock: Clock = local_now) -> None:
        self._holiday_provider = holiday_provider
        self._clock = clock

    async def execute(self) -> TodayOverview:
        now = self._clock()
        today = CalendarDate.from_date(now.date())

        try:
            holidays = await self._holiday_provider.get_public_holidays(today.year, OVERVIEW_COUNTRY)
        except Exception as exc:
            logger.warning("Holiday lookup for today's overview failed, continuing without: %s", exc)
            holidays = []

        return TodayOverview(
            date=today,
            holidays=[h for h in holidays if h.date == today.iso],
            fetched_at=utc(now),
            free_endpoints=FREE_ENDPOINTS,
            paid_endpoints=PAID_ENDPOINTS,
        )

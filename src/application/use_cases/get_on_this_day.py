"""
Use-cases: historical events and notable births for a month/day pair.
Depends only on Domain ports and entities — no infrastructure imports.

The month/day pair is year-independent and is not validated against a real
calendar: day 31 of February is passed through and yields whatever the
provider returns. Provider failures propagate.
"""

from src.application.services.clock import Clock, local_now, utc
from src.domain.entities.date_context import BirthsLookup, EventsLookup
from src.domain.ports.on_this_day_port import IOnThisDayProvider

DEFAULT_LIMIT = 10


def _check_month_day(month: int, day: int, limit: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError("month must be between 1 and 12")
    if not 1 <= day <= 31:
        raise ValueError("day must be between 1 and 31")
    if limit < 1:
        raise ValueError("limit must be at least 1")


class GetHistoricalEventsUseCase:
    MAX_PAGES_PER_EVENT: int = 2

    def __init__(self, provider: IOnThisDayProvider, clock: Clock = local_now) -> None:
        self._provider = provider
        self._clock = clock

    async def execute(self, month: int, day: int, limit: int = DEFAULT_LIMIT) -> EventsLookup:
        _check_month_day(month, day, limit)
        events = await self._provider.get_events(month, day)
        return EventsLookup(
            month_day=f"{month:02d}-{day:02d}",
            events=[e.with_pages(self.MAX_PAGES_PER_EVENT) for e in events[:limit]],
            fetched_at=utc(self._clock()),
        )


class GetNotableBirthsUseCase:
    MAX_PAGES_PER_BIRTH: int = 1

    def __init__(self, provider: IOnThisDayProvider, clock: Clock = local_now) -> None:
        self._provider = provider
        self._clock = clock

    async def execute(self, month: int, day: int, limit: int = DEFAULT_LIMIT) -> BirthsLookup:
        _check_month_day(month, day, limit)
        births = await self._provider.get_births(month, day)
        return BirthsLookup(
            month_day=f"{month:02d}-{day:02d}",
            births=[b.with_pages(self.MAX_PAGES_PER_BIRTH) for b in births[:limit]],
            fetched_at=utc(self._clock()),
        )

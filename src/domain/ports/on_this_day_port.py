"""
Port (interface) for "on this day" providers.
Infrastructure adapters (e.g. WikipediaOnThisDayProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.on_this_day import HistoricalEvent, NotableBirth


class IOnThisDayProvider(ABC):
    @abstractmethod
    async def get_events(self, month: int, day: int) -> list[HistoricalEvent]:
        """Historical events that happened on *month*/*day* in any year, in feed order."""
        ...

    @abstractmethod
    async def get_births(self, month: int, day: int) -> list[NotableBirth]:
        """Notable people born on *month*/*day* in any year, in feed order."""
        ...

"""
Port (interface) for public-holiday providers.
Infrastructure adapters (e.g. NagerDateHolidayProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.holiday import HolidayRecord


class IHolidayProvider(ABC):
    @abstractmethod
    async def get_public_holidays(self, year: int, country: str) -> list[HolidayRecord]:
        """Return every public holiday of *country* (ISO 3166-1 alpha-2) in *year*.

        Raises:
            UpstreamError: on a non-2xx answer, a transport failure or an
                unexpected response shape.
            UpstreamTimeoutError: if the provider does not answer in time.
        """
        ...

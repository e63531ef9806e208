"""
Infrastructure adapter: Nager.Date public-holiday API → IHolidayProvider.

All Nager-specific details (URL layout, JSON field names such as ``global``)
are confined here. The response is validated against an explicit pydantic model
so a changed upstream shape fails loudly as UnexpectedShapeError instead of
leaking missing fields into responses.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.entities.holiday import HolidayRecord
from src.domain.errors import UnexpectedShapeError
from src.domain.ports.holiday_provider_port import IHolidayProvider
from src.infrastructure.http.json_fetcher import JsonFetcher

NAGER_BASE_URL = "https://date.nager.at/api/v3"


class NagerHoliday(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    local_name: str = Field(alias="localName")
    name: str
    is_global: bool = Field(alias="global")
    types: list[str] = Field(default_factory=list)


_HOLIDAY_LIST = TypeAdapter(list[NagerHoliday])


class NagerDateHolidayProvider(IHolidayProvider):
    """Fetches public holidays by country and year from date.nager.at."""

    def __init__(
        self,
        fetcher: JsonFetcher,
        base_url: str = NAGER_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def get_public_holidays(self, year: int, country: str) -> list[HolidayRecord]:
        url = f"{self._base_url}/PublicHolidays/{year}/{country.upper()}"
        data = await self._fetcher.fetch_json(url, timeout=self._timeout)
        try:
            holidays = _HOLIDAY_LIST.validate_python(data)
        except PydanticValidationError as exc:
            raise UnexpectedShapeError(
                f"Unexpected holiday payload from {url}: {exc.error_count()} validation error(s)",
                url=url,
            ) from exc

        return [
            HolidayRecord(
                date=h.date,
                name=h.name,
                local_name=h.local_name,
                is_global=h.is_global,
                types=tuple(h.types),
            )
            for h in holidays
        ]

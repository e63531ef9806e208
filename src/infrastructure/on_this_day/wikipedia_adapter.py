"""
Infrastructure adapter: Wikipedia "On this day" REST feed → IOnThisDayProvider.

Feed responses are validated against explicit pydantic models; a body without
the expected ``events`` / ``births`` array raises UnexpectedShapeError.
The feed is slower than the holiday API and gets a longer timeout.
"""

from typing import Optional, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from src.domain.entities.on_this_day import (
    HistoricalEvent,
    NotableBirth,
    OnThisDayEntry,
    ReferencePage,
)
from src.domain.errors import UnexpectedShapeError
from src.domain.ports.on_this_day_port import IOnThisDayProvider
from src.infrastructure.http.json_fetcher import JsonFetcher

WIKIPEDIA_FEED_URL = "https://en.wikipedia.org/api/rest_v1/feed/onthisday"

E = TypeVar("E", bound=OnThisDayEntry)


class _DesktopUrls(BaseModel):
    page: Optional[str] = None


class _ContentUrls(BaseModel):
    desktop: Optional[_DesktopUrls] = None


class WikiPage(BaseModel):
    title: str
    description: Optional[str] = None
    content_urls: Optional[_ContentUrls] = None

    @property
    def desktop_url(self) -> Optional[str]:
        if self.content_urls and self.content_urls.desktop:
            return self.content_urls.desktop.page
        return None


class WikiEntry(BaseModel):
    text: str
    year: Optional[int] = None
    pages: list[WikiPage] = Field(default_factory=list)


class EventsFeed(BaseModel):
    events: list[WikiEntry]


class BirthsFeed(BaseModel):
    births: list[WikiEntry]


class WikipediaOnThisDayProvider(IOnThisDayProvider):
    """Reads the English Wikipedia on-this-day events and births feeds."""

    def __init__(
        self,
        fetcher: JsonFetcher,
        base_url: str = WIKIPEDIA_FEED_URL,
        timeout: float = 15.0,
    ) -> None:
        self._fetcher = fetcher
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def get_events(self, month: int, day: int) -> list[HistoricalEvent]:
        url = self._feed_url("events", month, day)
        feed = self._parse(EventsFeed, await self._fetcher.fetch_json(url, timeout=self._timeout), url)
        return [self._to_entry(HistoricalEvent, e) for e in feed.events]

    async def get_births(self, month: int, day: int) -> list[NotableBirth]:
        url = self._feed_url("births", month, day)
        feed = self._parse(BirthsFeed, await self._fetcher.fetch_json(url, timeout=self._timeout), url)
        return [self._to_entry(NotableBirth, b) for b in feed.births]

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _feed_url(self, feed: str, month: int, day: int) -> str:
        return f"{self._base_url}/{feed}/{month:02d}/{day:02d}"

    @staticmethod
    def _parse(model, data, url: str):
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise UnexpectedShapeError(
                f"Unexpected on-this-day payload from {url}: {exc.error_count()} validation error(s)",
                url=url,
            ) from exc

    @staticmethod
    def _to_entry(entry_type: type[E], entry: WikiEntry) -> E:
        return entry_type(
            year=entry.year,
            text=entry.text,
            pages=tuple(
                ReferencePage(title=p.title, description=p.description, url=p.desktop_url)
                for p in entry.pages
            ),
        )

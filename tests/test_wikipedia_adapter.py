"""Tests for WikipediaOnThisDayProvider."""

from __future__ import annotations

import httpx
import pytest

from src.domain.entities.on_this_day import HistoricalEvent, NotableBirth
from src.domain.errors import UnexpectedShapeError, UpstreamError
from src.infrastructure.on_this_day.wikipedia_adapter import WikipediaOnThisDayProvider
from tests.conftest import make_fetcher

EVENTS_FEED = {
    "events": [
        {
            "text": "The first event.",
            "year": 1969,
            "pages": [
                {
                    "title": "Apollo_11",
                    "description": "Spaceflight",
                    "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Apollo_11"}},
                },
                {"title": "Moon"},
            ],
        },
        {"text": "No pages at all.", "year": -44},
    ]
}

BIRTHS_FEED = {
    "births": [
        {
            "text": "Someone, writer",
            "year": 1900,
            "pages": [{"title": "Someone", "content_urls": {"mobile": {"page": "m"}}}],
        }
    ]
}


class TestWikipediaOnThisDayProvider:
    """Tests for the Wikipedia on-this-day adapter."""

    async def test_events_url_and_mapping(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=EVENTS_FEED)

        provider = WikipediaOnThisDayProvider(make_fetcher(handler), base_url="https://wiki.test/feed")
        events = await provider.get_events(7, 4)

        assert seen == ["https://wiki.test/feed/events/07/04"]
        assert all(isinstance(e, HistoricalEvent) for e in events)
        first = events[0]
        assert first.year == 1969
        assert first.pages[0].title == "Apollo_11"
        assert first.pages[0].description == "Spaceflight"
        assert first.pages[0].url == "https://en.wikipedia.org/wiki/Apollo_11"
        assert first.pages[1].url is None
        assert events[1].year == -44
        assert events[1].pages == ()

    async def test_births_mapping(self):
        seen: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            return httpx.Response(200, json=BIRTHS_FEED)

        provider = WikipediaOnThisDayProvider(make_fetcher(handler), base_url="https://wiki.test/feed")
        births = await provider.get_births(12, 25)

        assert seen == ["/feed/births/12/25"]
        assert isinstance(births[0], NotableBirth)
        assert births[0].pages[0].url is None

    async def test_missing_feed_key_is_unexpected_shape(self):
        """An events response without an ``events`` array fails loudly."""
        provider = WikipediaOnThisDayProvider(make_fetcher(lambda r: httpx.Response(200, json=BIRTHS_FEED)))
        with pytest.raises(UnexpectedShapeError):
            await provider.get_events(1, 1)

    async def test_entry_without_text_is_unexpected_shape(self):
        payload = {"births": [{"year": 1900}]}
        provider = WikipediaOnThisDayProvider(make_fetcher(lambda r: httpx.Response(200, json=payload)))
        with pytest.raises(UnexpectedShapeError):
            await provider.get_births(1, 1)

    async def test_upstream_status_propagates(self):
        provider = WikipediaOnThisDayProvider(make_fetcher(lambda r: httpx.Response(503)))
        with pytest.raises(UpstreamError) as excinfo:
            await provider.get_events(2, 31)
        assert excinfo.value.status_code == 503

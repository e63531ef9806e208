"""
Domain entities for "on this day" feed entries (historical events and births).
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class ReferencePage:
    title: str
    description: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class OnThisDayEntry:
    year: Optional[int]
    text: str
    pages: tuple[ReferencePage, ...] = ()

    def with_pages(self, max_pages: int) -> "OnThisDayEntry":
        """Return a copy keeping at most *max_pages* linked pages."""
        return replace(self, pages=self.pages[:max_pages])


@dataclass(frozen=True)
class HistoricalEvent(OnThisDayEntry):
    pass


@dataclass(frozen=True)
class NotableBirth(OnThisDayEntry):
    pass

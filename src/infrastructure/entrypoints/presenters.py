"""
JSON presenters: domain result entities → camelCase response payloads.

Output field names are part of the public entrypoint contract and must not
drift; the domain layer keeps snake_case and knows nothing about them.
"""

from datetime import datetime, timezone
from typing import Any

from src.domain.entities.date_context import (
    BirthsLookup,
    DateComparisonReport,
    DateContext,
    EventsLookup,
    HolidayLookup,
    TodayOverview,
)
from src.domain.entities.holiday import HolidayRecord
from src.domain.entities.on_this_day import OnThisDayEntry

HOLIDAY_SOURCE = "Nager.at Public Holiday API (live)"
ON_THIS_DAY_SOURCE = "Wikipedia On This Day API (live)"
FULL_CONTEXT_SOURCES = ["Nager.at Public Holiday API", "Wikipedia On This Day API"]


def iso_timestamp(moment: datetime) -> str:
    """``2024-01-01T12:00:00.000Z``: UTC with millisecond precision."""
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _holiday_name(h: HolidayRecord) -> dict[str, Any]:
    return {"name": h.name, "localName": h.local_name}


def _holiday_full(h: HolidayRecord) -> dict[str, Any]:
    return {
        "date": h.date,
        "name": h.name,
        "localName": h.local_name,
        "isGlobal": h.is_global,
        "types": list(h.types),
    }


def _entry_with_pages(e: OnThisDayEntry) -> dict[str, Any]:
    return {
        "year": e.year,
        "text": e.text,
        "pages": [{"title": p.title, "description": p.description, "url": p.url} for p in e.pages],
    }


def _entry_brief(e: OnThisDayEntry) -> dict[str, Any]:
    return {"year": e.year, "text": e.text}


def present_today(overview: TodayOverview) -> dict[str, Any]:
    d = overview.date
    return {
        "date": d.iso,
        "dayOfWeek": d.day_of_week,
        "month": d.month_name,
        "dayOfYear": d.day_of_year,
        "week": d.iso_week,
        "holidays": [_holiday_name(h) for h in overview.holidays],
        "isWeekend": d.is_weekend,
        "quarter": d.quarter,
        "fetchedAt": iso_timestamp(overview.fetched_at),
        "dataSource": HOLIDAY_SOURCE,
        "endpoints": {
            "free": list(overview.free_endpoints),
            "paid": list(overview.paid_endpoints),
        },
    }


def present_holidays(lookup: HolidayLookup) -> dict[str, Any]:
    return {
        "country": lookup.country,
        "year": lookup.year,
        "count": lookup.count,
        "holidays": [_holiday_full(h) for h in lookup.holidays],
        "fetchedAt": iso_timestamp(lookup.fetched_at),
        "dataSource": HOLIDAY_SOURCE,
    }


def present_events(lookup: EventsLookup) -> dict[str, Any]:
    return {
        "date": lookup.month_day,
        "count": len(lookup.events),
        "events": [_entry_with_pages(e) for e in lookup.events],
        "fetchedAt": iso_timestamp(lookup.fetched_at),
        "dataSource": ON_THIS_DAY_SOURCE,
    }


def present_births(lookup: BirthsLookup) -> dict[str, Any]:
    return {
        "date": lookup.month_day,
        "count": len(lookup.births),
        "births": [_entry_with_pages(b) for b in lookup.births],
        "fetchedAt": iso_timestamp(lookup.fetched_at),
        "dataSource": ON_THIS_DAY_SOURCE,
    }


def present_full_context(context: DateContext) -> dict[str, Any]:
    return {
        "date": context.date.iso,
        "dayOfWeek": context.date.day_of_week,
        "country": context.country,
        "holidays": [_holiday_name(h) for h in context.holidays],
        "historicalEvents": [_entry_brief(e) for e in context.events],
        "notableBirths": [_entry_brief(b) for b in context.births],
        "isWeekend": context.date.is_weekend,
        "fetchedAt": iso_timestamp(context.fetched_at),
        "dataSources": list(FULL_CONTEXT_SOURCES),
    }


def present_comparison(report: DateComparisonReport) -> dict[str, Any]:
    summary = report.summary
    return {
        "country": report.country,
        "dateCount": len(report.comparisons),
        "comparisons": [
            {
                "date": c.date,
                "dayOfWeek": c.day_of_week,
                "isWeekend": c.is_weekend,
                "holidays": list(c.holidays),
                "isHoliday": c.is_holiday,
            }
            for c in report.comparisons
        ],
        "summary": {
            "weekends": summary.weekends,
            "holidays": summary.holidays,
            "allWeekends": summary.all_weekends,
            "allHolidays": summary.all_holidays,
            "noWeekends": summary.no_weekends,
        },
        "fetchedAt": iso_timestamp(report.fetched_at),
        "dataSource": HOLIDAY_SOURCE,
    }

"""Shared fixtures and in-process fakes for the port interfaces."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

import httpx
import pytest

from src.domain.entities.holiday import HolidayRecord
from src.domain.entities.on_this_day import HistoricalEvent, NotableBirth, ReferencePage
from src.domain.entities.payment import (
    PaymentAuthorization,
    PaymentRequirements,
    PaymentSettlement,
)
from src.domain.errors import PaymentRequiredError, UpstreamError
from src.domain.ports.holiday_provider_port import IHolidayProvider
from src.domain.ports.on_this_day_port import IOnThisDayProvider
from src.domain.ports.payment_gate_port import IPaymentGate
from src.infrastructure.http.json_fetcher import JsonFetcher

# Monday, 2024-01-01 (New Year's Day in the US)
FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_fetcher(handler: Callable[[httpx.Request], Any], timeout: float = 10.0) -> JsonFetcher:
    """JsonFetcher whose client is served by an httpx.MockTransport handler."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return JsonFetcher(client, default_timeout=timeout)


US_2024 = [
    HolidayRecord("2024-01-01", "New Year's Day", "New Year's Day", True, ("Public",)),
    HolidayRecord("2024-07-04", "Independence Day", "Independence Day", True, ("Public",)),
    HolidayRecord("2024-12-25", "Christmas Day", "Christmas Day", True, ("Public",)),
]

US_2025 = [
    HolidayRecord("2025-01-01", "New Year's Day", "New Year's Day", True, ("Public",)),
]


def make_events(n: int) -> list[HistoricalEvent]:
    return [
        HistoricalEvent(
            year=2000 - i,
            text=f"Event {i}",
            pages=tuple(
                ReferencePage(title=f"Page {i}.{p}", description="desc", url=f"https://w/{i}/{p}")
                for p in range(3)
            ),
        )
        for i in range(n)
    ]


def make_births(n: int) -> list[NotableBirth]:
    return [
        NotableBirth(
            year=1900 + i,
            text=f"Person {i}",
            pages=(
                ReferencePage(title=f"Person {i}", url=f"https://w/p{i}"),
                ReferencePage(title="Other"),
            ),
        )
        for i in range(n)
    ]


class FakeHolidayProvider(IHolidayProvider):
    def __init__(
        self,
        holidays_by_year: Optional[dict[int, list[HolidayRecord]]] = None,
        failing_years: tuple[int, ...] = (),
        error: Optional[Exception] = None,
    ) -> None:
        self.holidays_by_year = holidays_by_year if holidays_by_year is not None else {2024: US_2024}
        self.failing_years = failing_years
        self.error = error
        self.calls: list[tuple[int, str]] = []

    async def get_public_holidays(self, year: int, country: str) -> list[HolidayRecord]:
        self.calls.append((year, country))
        if self.error is not None:
            raise self.error
        if year in self.failing_years:
            raise UpstreamError("API error: 500", status_code=500)
        return list(self.holidays_by_year.get(year, []))


class FakeOnThisDayProvider(IOnThisDayProvider):
    def __init__(
        self,
        events: Optional[list[HistoricalEvent]] = None,
        births: Optional[list[NotableBirth]] = None,
        events_error: Optional[Exception] = None,
        births_error: Optional[Exception] = None,
    ) -> None:
        self.events = events if events is not None else make_events(12)
        self.births = births if births is not None else make_births(12)
        self.events_error = events_error
        self.births_error = births_error
        self.calls: list[tuple[str, int, int]] = []

    async def get_events(self, month: int, day: int) -> list[HistoricalEvent]:
        self.calls.append(("events", month, day))
        if self.events_error is not None:
            raise self.events_error
        return list(self.events)

    async def get_births(self, month: int, day: int) -> list[NotableBirth]:
        self.calls.append(("births", month, day))
        if self.births_error is not None:
            raise self.births_error
        return list(self.births)


class FakePaymentGate(IPaymentGate):
    """Accepts the literal header value ``paid``; anything else is a 402."""

    def __init__(self, settle_ok: bool = True) -> None:
        self.settle_ok = settle_ok
        self.settled: list[PaymentAuthorization] = []

    def requirements_for(self, entrypoint, price, resource, description) -> PaymentRequirements:
        return PaymentRequirements(
            entrypoint=entrypoint,
            amount=price,
            resource=resource,
            description=description,
            pay_to="0xPAYEE",
            network="base-sepolia",
            asset="0xUSDC",
        )

    def describe(self, requirements: PaymentRequirements) -> dict[str, Any]:
        return {"maxAmountRequired": requirements.amount, "payTo": requirements.pay_to}

    async def verify(self, requirements, payment_header) -> PaymentAuthorization:
        if payment_header != "paid":
            raise PaymentRequiredError("X-PAYMENT header is required", [self.describe(requirements)])
        return PaymentAuthorization(requirements=requirements, payload={}, payer="0xPAYER")

    async def settle(self, authorization: PaymentAuthorization) -> PaymentSettlement:
        if not self.settle_ok:
            raise PaymentRequiredError("settlement failed", [self.describe(authorization.requirements)])
        self.settled.append(authorization)
        return PaymentSettlement(
            success=True,
            network=authorization.requirements.network,
            transaction="0xTX",
            payer=authorization.payer,
        )


@pytest.fixture
def holiday_provider() -> FakeHolidayProvider:
    return FakeHolidayProvider()


@pytest.fixture
def on_this_day_provider() -> FakeOnThisDayProvider:
    return FakeOnThisDayProvider()

"""
Entrypoint registry — binds application use-cases to priced, schema-checked entrypoints.

Each Entrypoint pairs a unique key and description with a pydantic input
model, an optional price in the payment asset's minor units (None = free) and
an async handler turning the validated input into a JSON-serializable output.
The transport (FastAPI, see fastapi_app.py) only ever talks to the registry.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Awaitable, Callable, Iterator, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from src.application.use_cases.compare_dates import CompareDatesUseCase
from src.application.use_cases.get_full_context import GetFullContextUseCase
from src.application.use_cases.get_holidays import GetHolidaysUseCase
from src.application.use_cases.get_on_this_day import (
    DEFAULT_LIMIT,
    GetHistoricalEventsUseCase,
    GetNotableBirthsUseCase,
)
from src.application.use_cases.get_payment_analytics import (
    DEFAULT_TRANSACTION_LIMIT,
    GetPaymentAnalyticsUseCase,
)
from src.application.use_cases.get_today_overview import GetTodayOverviewUseCase
from src.domain.entities.calendar_date import CalendarDate
from src.infrastructure.entrypoints import presenters

Handler = Callable[[Any], Awaitable[dict[str, Any]]]


def _iso_date(value: str) -> str:
    return CalendarDate.from_iso(value).iso


IsoDate = Annotated[str, AfterValidator(_iso_date)]
CountryCode = Annotated[
    str,
    Field(min_length=2, max_length=2, description="ISO 3166-1 alpha-2 country code (e.g., US, GB, DE, AU)"),
]


# ---------------------------------------------------------------------------
# Input schemas
# ---------------------------------------------------------------------------


class TodayInput(BaseModel):
    pass


class HolidaysInput(BaseModel):
    country: CountryCode
    year: Optional[int] = Field(default=None, description="Year (default: current year)")


class OnThisDayInput(BaseModel):
    month: int = Field(ge=1, le=12, description="Month (1-12)")
    day: int = Field(ge=1, le=31, description="Day of month")
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, description="Max entries to return")


class FullContextInput(BaseModel):
    date: Optional[IsoDate] = Field(default=None, description="Date in YYYY-MM-DD format (default: today)")
    country: CountryCode = "US"


class CompareDatesInput(BaseModel):
    dates: list[IsoDate] = Field(min_length=2, max_length=5, description="Dates in YYYY-MM-DD format")
    country: CountryCode = "US"


class AnalyticsInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    window_ms: Optional[int] = Field(
        default=None,
        alias="windowMs",
        gt=0,
        description="Time window in ms (e.g., 86400000 for 24h)",
    )


class AnalyticsTransactionsInput(AnalyticsInput):
    limit: int = Field(default=DEFAULT_TRANSACTION_LIMIT, ge=0)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Entrypoint:
    key: str
    description: str
    input_model: type[BaseModel]
    handler: Handler
    price: Optional[str] = None

    @property
    def is_free(self) -> bool:
        return self.price is None


class EntrypointRegistry:
    def __init__(self) -> None:
        self._entrypoints: dict[str, Entrypoint] = {}

    def add(self, entrypoint: Entrypoint) -> None:
        if entrypoint.key in self._entrypoints:
            raise ValueError(f"Entrypoint {entrypoint.key!r} is already registered")
        self._entrypoints[entrypoint.key] = entrypoint

    def get(self, key: str) -> Optional[Entrypoint]:
        return self._entrypoints.get(key)

    def __iter__(self) -> Iterator[Entrypoint]:
        return iter(self._entrypoints.values())

    def __len__(self) -> int:
        return len(self._entrypoints)


def create_entrypoints(
    today: GetTodayOverviewUseCase,
    holidays: GetHolidaysUseCase,
    events: GetHistoricalEventsUseCase,
    births: GetNotableBirthsUseCase,
    full_context: GetFullContextUseCase,
    compare_dates: CompareDatesUseCase,
    analytics: GetPaymentAnalyticsUseCase,
) -> EntrypointRegistry:
    """Build the registry with every entrypoint bound to its injected use-case.

    Returns:
        EntrypointRegistry with one free overview, five priced lookups and
        three free analytics views.
    """

    async def today_handler(_: TodayInput) -> dict[str, Any]:
        return presenters.present_today(await today.execute())

    async def holidays_handler(payload: HolidaysInput) -> dict[str, Any]:
        return presenters.present_holidays(await holidays.execute(payload.country, payload.year))

    async def events_handler(payload: OnThisDayInput) -> dict[str, Any]:
        return presenters.present_events(
            await events.execute(payload.month, payload.day, payload.limit)
        )

    async def births_handler(payload: OnThisDayInput) -> dict[str, Any]:
        return presenters.present_births(
            await births.execute(payload.month, payload.day, payload.limit)
        )

    async def full_context_handler(payload: FullContextInput) -> dict[str, Any]:
        return presenters.present_full_context(
            await full_context.execute(payload.date, payload.country)
        )

    async def compare_dates_handler(payload: CompareDatesInput) -> dict[str, Any]:
        return presenters.present_comparison(
            await compare_dates.execute(list(payload.dates), payload.country)
        )

    async def analytics_handler(payload: AnalyticsInput) -> dict[str, Any]:
        return await analytics.summary(payload.window_ms)

    async def analytics_transactions_handler(payload: AnalyticsTransactionsInput) -> dict[str, Any]:
        return await analytics.transactions(payload.window_ms, payload.limit)

    async def analytics_csv_handler(payload: AnalyticsInput) -> dict[str, Any]:
        return await analytics.csv(payload.window_ms)

    registry = EntrypointRegistry()
    for entrypoint in (
        Entrypoint(
            key="today",
            description="Free overview of today — current date, day of week, notable info. Try before you buy.",
            input_model=TodayInput,
            handler=today_handler,
        ),
        Entrypoint(
            key="holidays",
            description="Public holidays for any country and year",
            input_model=HolidaysInput,
            handler=holidays_handler,
            price="1000",
        ),
        Entrypoint(
            key="events",
            description="Historical events that happened on a specific date",
            input_model=OnThisDayInput,
            handler=events_handler,
            price="2000",
        ),
        Entrypoint(
            key="births",
            description="Notable people born on a specific date",
            input_model=OnThisDayInput,
            handler=births_handler,
            price="2000",
        ),
        Entrypoint(
            key="full-context",
            description="Complete date context — holidays, events, births all in one call",
            input_model=FullContextInput,
            handler=full_context_handler,
            price="3000",
        ),
        Entrypoint(
            key="compare-dates",
            description="Compare multiple dates — find common themes, differences, special days",
            input_model=CompareDatesInput,
            handler=compare_dates_handler,
            price="5000",
        ),
        Entrypoint(
            key="analytics",
            description="Payment analytics summary",
            input_model=AnalyticsInput,
            handler=analytics_handler,
        ),
        Entrypoint(
            key="analytics-transactions",
            description="Recent payment transactions",
            input_model=AnalyticsTransactionsInput,
            handler=analytics_transactions_handler,
        ),
        Entrypoint(
            key="analytics-csv",
            description="Export payment data as CSV",
            input_model=AnalyticsInput,
            handler=analytics_csv_handler,
        ),
    ):
        registry.add(entrypoint)
    return registry

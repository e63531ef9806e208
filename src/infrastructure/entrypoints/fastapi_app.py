"""
FastAPI entry point — HTTP surface and Composition Root.

This module wires all infrastructure adapters once at startup and passes them
to the application layer; nothing below it reaches for a shared container.
Priced entrypoints go through the IPaymentGate (x402) before their handler
runs and are settled only after it succeeds.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 8000
"""

import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Optional

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field, ValidationError

load_dotenv()

from src.application.services.clock import Clock, local_now
from src.application.use_cases.compare_dates import CompareDatesUseCase
from src.application.use_cases.get_full_context import GetFullContextUseCase
from src.application.use_cases.get_holidays import GetHolidaysUseCase
from src.application.use_cases.get_on_this_day import (
    GetHistoricalEventsUseCase,
    GetNotableBirthsUseCase,
)
from src.application.use_cases.get_payment_analytics import GetPaymentAnalyticsUseCase
from src.application.use_cases.get_today_overview import GetTodayOverviewUseCase
from src.domain.entities.payment import PaymentRecord
from src.domain.errors import PaymentRequiredError, UpstreamError, UpstreamTimeoutError
from src.domain.ports.holiday_provider_port import IHolidayProvider
from src.domain.ports.on_this_day_port import IOnThisDayProvider
from src.domain.ports.payment_gate_port import IPaymentGate
from src.domain.ports.payment_tracker_port import IPaymentTracker
from src.infrastructure.config.settings import AppSettings
from src.infrastructure.entrypoints.entrypoint_registry import (
    Entrypoint,
    EntrypointRegistry,
    create_entrypoints,
)
from src.infrastructure.holidays.nager_adapter import NagerDateHolidayProvider
from src.infrastructure.http.json_fetcher import JsonFetcher
from src.infrastructure.on_this_day.wikipedia_adapter import WikipediaOnThisDayProvider
from src.infrastructure.payments.in_memory_tracker import InMemoryPaymentTracker
from src.infrastructure.payments.x402_gate import X402_VERSION, X402FacilitatorGate, encode_header
from src.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter

logger = logging.getLogger(__name__)


class InvokeRequest(BaseModel):
    input: dict[str, Any] = Field(default_factory=dict)


def build_registry(
    holiday_provider: IHolidayProvider,
    on_this_day_provider: IOnThisDayProvider,
    payment_tracker: Optional[IPaymentTracker] = None,
    clock: Clock = local_now,
) -> EntrypointRegistry:
    """Construct every use-case around the given ports and register them as entrypoints."""
    return create_entrypoints(
        today=GetTodayOverviewUseCase(holiday_provider, clock),
        holidays=GetHolidaysUseCase(holiday_provider, clock),
        events=GetHistoricalEventsUseCase(on_this_day_provider, clock),
        births=GetNotableBirthsUseCase(on_this_day_provider, clock),
        full_context=GetFullContextUseCase(holiday_provider, on_this_day_provider, clock),
        compare_dates=CompareDatesUseCase(holiday_provider, clock),
        analytics=GetPaymentAnalyticsUseCase(payment_tracker),
    )


def _upstream_http_error(exc: UpstreamError) -> HTTPException:
    if isinstance(exc, UpstreamTimeoutError):
        return HTTPException(status_code=504, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


def _payment_required(exc: PaymentRequiredError) -> JSONResponse:
    return JSONResponse(
        status_code=402,
        content={"x402Version": X402_VERSION, "error": exc.reason, "accepts": exc.accepts},
    )


def create_app(
    settings: AppSettings,
    registry: EntrypointRegistry,
    payment_gate: Optional[IPaymentGate] = None,
    payment_tracker: Optional[IPaymentTracker] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the FastAPI app around already-constructed collaborators.

    Args:
        settings:        Runtime configuration.
        registry:        Entrypoints to expose under /entrypoints.
        payment_gate:    IPaymentGate for priced entrypoints; None serves them free.
        payment_tracker: IPaymentTracker receiving settled payments (optional).
        http_client:     Shared outbound client, closed on shutdown (optional).
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        if http_client is not None:
            await http_client.aclose()

    app = FastAPI(title=settings.agent_name, version=settings.agent_version, lifespan=lifespan)

    def base_url(request: Request) -> str:
        return settings.public_base_url or str(request.base_url).rstrip("/")

    def describe_entrypoint(entrypoint: Entrypoint) -> dict[str, Any]:
        return {
            "key": entrypoint.key,
            "description": entrypoint.description,
            "price": entrypoint.price,
            "inputSchema": entrypoint.input_model.model_json_schema(),
        }

    async def charge(
        entrypoint: Entrypoint,
        request: Request,
    ):
        requirements = payment_gate.requirements_for(
            entrypoint.key,
            entrypoint.price,
            str(request.url),
            entrypoint.description,
        )
        return await payment_gate.verify(requirements, request.headers.get("X-PAYMENT"))

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/entrypoints")
    async def list_entrypoints():
        return {"entrypoints": [describe_entrypoint(e) for e in registry]}

    @app.post("/entrypoints/{key}/invoke")
    async def invoke_entrypoint(key: str, request: Request, body: Optional[InvokeRequest] = None):
        """Validate input, collect payment when priced, run the handler, settle."""
        entrypoint = registry.get(key)
        if entrypoint is None:
            raise HTTPException(status_code=404, detail=f"Unknown entrypoint: {key}")

        try:
            payload = entrypoint.input_model.model_validate((body or InvokeRequest()).input)
        except ValidationError as exc:
            raise HTTPException(
                status_code=400,
                detail=exc.errors(include_url=False, include_context=False),
            ) from exc

        authorization = None
        if not entrypoint.is_free and payment_gate is not None:
            try:
                authorization = await charge(entrypoint, request)
            except PaymentRequiredError as exc:
                return _payment_required(exc)
            except UpstreamError as exc:
                raise _upstream_http_error(exc) from exc

        try:
            output = await entrypoint.handler(payload)
        except UpstreamError as exc:
            logger.warning("Entrypoint %s failed upstream: %s", key, exc)
            raise _upstream_http_error(exc) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        headers = {}
        if authorization is not None:
            try:
                settlement = await payment_gate.settle(authorization)
            except PaymentRequiredError as exc:
                return _payment_required(exc)
            except UpstreamError as exc:
                raise _upstream_http_error(exc) from exc

            if payment_tracker is not None:
                payment_tracker.record(
                    PaymentRecord(
                        id=uuid.uuid4().hex,
                        direction="incoming",
                        amount=int(entrypoint.price),
                        entrypoint=entrypoint.key,
                        network=settlement.network,
                        timestamp_ms=int(time.time() * 1000),
                        payer=settlement.payer,
                        transaction=settlement.transaction,
                    )
                )
            headers["X-PAYMENT-RESPONSE"] = encode_header(
                {
                    "success": settlement.success,
                    "transaction": settlement.transaction,
                    "network": settlement.network,
                    "payer": settlement.payer,
                }
            )

        return JSONResponse(content={"status": "succeeded", "output": output}, headers=headers)

    @app.get("/.well-known/agent.json")
    async def agent_card(request: Request):
        url = base_url(request)
        card: dict[str, Any] = {
            "name": settings.agent_name,
            "version": settings.agent_version,
            "description": settings.agent_description,
            "url": url,
            "image": f"{url}/icon.png",
            "entrypoints": {
                e.key: {
                    "description": e.description,
                    "invoke": f"{url}/entrypoints/{e.key}/invoke",
                    "pricing": {"invoke": e.price} if e.price else None,
                    "input_schema": e.input_model.model_json_schema(),
                }
                for e in registry
            },
        }
        if settings.payments_enabled:
            card["payments"] = [
                {
                    "method": "x402",
                    "payee": settings.payments_receivable_address,
                    "network": settings.payments_network,
                    "asset": settings.payments_asset,
                }
            ]
        return card

    @app.get("/.well-known/erc8004.json")
    async def erc8004_registration(request: Request):
        url = base_url(request)
        free = sum(1 for e in registry if e.is_free)
        paid = len(registry) - free
        return {
            "type": "https://eips.ethereum.org/EIPS/eip-8004#registration-v1",
            "name": settings.agent_name,
            "description": f"{settings.agent_description} {free} free + {paid} paid endpoints via x402.",
            "image": f"{url}/icon.png",
            "services": [
                {"name": "web", "endpoint": url},
                {"name": "A2A", "endpoint": f"{url}/.well-known/agent.json", "version": "0.3.0"},
            ],
            "x402Support": True,
            "active": True,
            "registrations": [],
            "supportedTrust": ["reputation"],
        }

    @app.get("/icon.png")
    async def icon():
        path = Path(settings.icon_path)
        if path.is_file():
            return FileResponse(path, media_type="image/png")
        return PlainTextResponse("Icon not found", status_code=404)

    return app


# ---------------------------------------------------------------------------
# Composition Root: wire all dependencies once at startup
# ---------------------------------------------------------------------------
def build_app_from_env() -> FastAPI:
    secret_id = os.environ.get("PAYMENTS_SECRET_ARN")
    if secret_id:
        SecretsManagerAdapter().load_into_env(secret_id)

    settings = AppSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    client = httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
    )
    fetcher = JsonFetcher(client, default_timeout=settings.upstream_timeout)
    holiday_provider = NagerDateHolidayProvider(
        fetcher, settings.holidays_api_url, timeout=settings.upstream_timeout
    )
    on_this_day_provider = WikipediaOnThisDayProvider(
        fetcher, settings.on_this_day_api_url, timeout=settings.slow_upstream_timeout
    )
    tracker = InMemoryPaymentTracker() if settings.analytics_enabled else None

    gate = None
    if settings.payments_enabled:
        gate = X402FacilitatorGate(
            client,
            facilitator_url=settings.payments_facilitator_url,
            pay_to=settings.payments_receivable_address,
            network=settings.payments_network,
            asset=settings.payments_asset,
        )
    else:
        logger.warning("PAYMENTS_RECEIVABLE_ADDRESS is not set; priced entrypoints are served free")

    registry = build_registry(holiday_provider, on_this_day_provider, tracker)
    application = create_app(
        settings,
        registry,
        payment_gate=gate,
        payment_tracker=tracker,
        http_client=client,
    )
    application.state.settings = settings
    return application


app = build_app_from_env()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)

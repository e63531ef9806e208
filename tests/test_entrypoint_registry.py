"""Tests for the entrypoint registry, its input schemas and AppSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.infrastructure.config.settings import AppSettings
from src.infrastructure.entrypoints.entrypoint_registry import (
    AnalyticsTransactionsInput,
    CompareDatesInput,
    Entrypoint,
    EntrypointRegistry,
    FullContextInput,
    TodayInput,
)
from src.infrastructure.entrypoints.fastapi_app import build_registry
from src.infrastructure.entrypoints.presenters import iso_timestamp
from tests.conftest import FIXED_NOW, FakeHolidayProvider, FakeOnThisDayProvider, fixed_clock


async def _noop(_):
    return {}


class TestEntrypointRegistry:
    def test_duplicate_key_rejected(self):
        registry = EntrypointRegistry()
        registry.add(Entrypoint("today", "Today", TodayInput, _noop))
        with pytest.raises(ValueError):
            registry.add(Entrypoint("today", "Again", TodayInput, _noop, price="1"))

    def test_full_registry(self):
        registry = build_registry(FakeHolidayProvider(), FakeOnThisDayProvider(), clock=fixed_clock)
        assert len(registry) == 9
        assert [e.key for e in registry if not e.is_free] == [
            "holidays",
            "events",
            "births",
            "full-context",
            "compare-dates",
        ]
        assert registry.get("missing") is None


class TestInputSchemas:
    @pytest.mark.parametrize("value", ["2024-1-1", "01-01-2024", "2024-13-01", "2024-01-01T00:00", "2024-W01-1"])
    def test_iso_date_rejected(self, value: str):
        with pytest.raises(ValidationError):
            FullContextInput(date=value)

    def test_full_context_defaults(self):
        payload = FullContextInput()
        assert payload.date is None
        assert payload.country == "US"

    def test_compare_dates_bounds(self):
        CompareDatesInput(dates=["2024-01-01"] * 5)
        with pytest.raises(ValidationError):
            CompareDatesInput(dates=["2024-01-01"] * 6)

    def test_analytics_window_alias(self):
        assert AnalyticsTransactionsInput.model_validate({"windowMs": 1000}).window_ms == 1000
        assert AnalyticsTransactionsInput(window_ms=5).limit == 50
        with pytest.raises(ValidationError):
            AnalyticsTransactionsInput.model_validate({"windowMs": 0})


class TestIsoTimestamp:
    def test_utc_millis(self):
        assert iso_timestamp(FIXED_NOW) == "2024-01-01T12:00:00.000Z"


class TestAppSettings:
    def test_defaults_without_payments(self, monkeypatch: pytest.MonkeyPatch):
        for name in ("PAYMENTS_RECEIVABLE_ADDRESS", "PUBLIC_DOMAIN", "PUBLIC_BASE_URL", "ANALYTICS_ENABLED"):
            monkeypatch.delenv(name, raising=False)
        settings = AppSettings.from_env()
        assert settings.payments_enabled is False
        assert settings.public_base_url is None
        assert settings.analytics_enabled is True

    def test_public_domain_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PUBLIC_DOMAIN", "calendar.example.com")
        monkeypatch.setenv("PUBLIC_BASE_URL", "http://localhost:8000/")
        monkeypatch.setenv("PAYMENTS_RECEIVABLE_ADDRESS", "0xPAYEE")
        monkeypatch.setenv("ANALYTICS_ENABLED", "false")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = AppSettings.from_env()
        assert settings.public_base_url == "https://calendar.example.com"
        assert settings.payments_enabled is True
        assert settings.analytics_enabled is False
        assert settings.log_level == "DEBUG"

    def test_reads_process_environment_only(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        """A .env file is merged once at startup, not on every settings read."""
        (tmp_path / ".env").write_text("PORT=9999\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PORT", raising=False)
        assert AppSettings.from_env().port == 8000

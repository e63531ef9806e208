"""Tests for X402FacilitatorGate."""

from __future__ import annotations

import json

import httpx
import pytest

from src.domain.errors import PaymentRequiredError, UpstreamError
from src.infrastructure.payments.x402_gate import (
    USDC_ON_BASE,
    X402FacilitatorGate,
    decode_header,
    encode_header,
)

PAYMENT = {"x402Version": 1, "scheme": "exact", "network": "base", "payload": {"signature": "0xsig"}}


def _gate(handler, **kwargs) -> X402FacilitatorGate:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return X402FacilitatorGate(
        client,
        facilitator_url="https://facilitator.test/",
        pay_to="0xPAYEE",
        **kwargs,
    )


def _requirements(gate: X402FacilitatorGate):
    return gate.requirements_for("holidays", "1000", "https://agent.test/entrypoints/holidays/invoke", "Holidays")


class TestHeaders:
    def test_header_round_trip(self):
        assert decode_header(encode_header(PAYMENT)) == PAYMENT

    @pytest.mark.parametrize("value", ["not base64!", encode_header([1, 2])[:-1], "W10="])
    def test_decode_rejects_garbage(self, value: str):
        with pytest.raises(ValueError):
            decode_header(value)


class TestX402FacilitatorGate:
    """Tests for verify/settle against a mocked facilitator."""

    def test_describe_wire_format(self):
        gate = _gate(lambda r: httpx.Response(500))
        wire = gate.describe(_requirements(gate))
        assert wire["maxAmountRequired"] == "1000"
        assert wire["payTo"] == "0xPAYEE"
        assert wire["network"] == "base"
        assert wire["asset"] == USDC_ON_BASE
        assert wire["scheme"] == "exact"
        assert wire["extra"] == {"name": "USD Coin", "version": "2"}

    async def test_missing_header_requires_payment(self):
        gate = _gate(lambda r: httpx.Response(500))
        with pytest.raises(PaymentRequiredError) as excinfo:
            await gate.verify(_requirements(gate), None)
        assert excinfo.value.accepts[0]["maxAmountRequired"] == "1000"

    async def test_malformed_header_requires_payment(self):
        gate = _gate(lambda r: httpx.Response(500))
        with pytest.raises(PaymentRequiredError, match="Malformed"):
            await gate.verify(_requirements(gate), "%%%")

    async def test_verify_and_settle(self):
        calls: list[tuple[str, dict]] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            calls.append((request.url.path, body))
            if request.url.path == "/verify":
                return httpx.Response(200, json={"isValid": True, "payer": "0xPAYER"})
            return httpx.Response(
                200, json={"success": True, "transaction": "0xTX", "network": "base", "payer": "0xPAYER"}
            )

        gate = _gate(handler)
        authorization = await gate.verify(_requirements(gate), encode_header(PAYMENT))
        assert authorization.payer == "0xPAYER"
        assert authorization.payload == PAYMENT

        settlement = await gate.settle(authorization)
        assert settlement.success is True
        assert settlement.transaction == "0xTX"

        assert [path for path, _ in calls] == ["/verify", "/settle"]
        body = calls[0][1]
        assert body["x402Version"] == 1
        assert body["paymentPayload"] == PAYMENT
        assert body["paymentRequirements"]["payTo"] == "0xPAYEE"

    async def test_invalid_payment_requires_payment(self):
        gate = _gate(lambda r: httpx.Response(200, json={"isValid": False, "invalidReason": "insufficient_funds"}))
        with pytest.raises(PaymentRequiredError, match="insufficient_funds"):
            await gate.verify(_requirements(gate), encode_header(PAYMENT))

    async def test_failed_settlement_requires_payment(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/verify":
                return httpx.Response(200, json={"isValid": True})
            return httpx.Response(200, json={"success": False, "errorReason": "expired"})

        gate = _gate(handler)
        authorization = await gate.verify(_requirements(gate), encode_header(PAYMENT))
        with pytest.raises(PaymentRequiredError, match="expired"):
            await gate.settle(authorization)

    async def test_facilitator_outage_is_upstream_error(self):
        gate = _gate(lambda r: httpx.Response(503))
        with pytest.raises(UpstreamError) as excinfo:
            await gate.verify(_requirements(gate), encode_header(PAYMENT))
        assert excinfo.value.status_code == 503

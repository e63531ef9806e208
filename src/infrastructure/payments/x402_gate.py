"""
Infrastructure adapter: x402 facilitator → IPaymentGate.

Responsibilities confined here:
  - x402 wire format of payment requirements (camelCase keys, ``x402Version``).
  - Decoding the base64 JSON ``X-PAYMENT`` request header.
  - ``/verify`` and ``/settle`` calls against the configured facilitator.

Settlement is only attempted after the paid handler has produced its output,
so a failing upstream never charges the caller.
"""

import base64
import binascii
import json
import logging
from typing import Any, Optional

import httpx

from src.domain.entities.payment import (
    PaymentAuthorization,
    PaymentRequirements,
    PaymentSettlement,
)
from src.domain.errors import PaymentRequiredError, UpstreamError, UpstreamTimeoutError
from src.domain.ports.payment_gate_port import IPaymentGate

logger = logging.getLogger(__name__)

X402_VERSION = 1
USDC_ON_BASE = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
USDC_EIP712_DOMAIN = {"name": "USD Coin", "version": "2"}


def encode_header(payload: dict[str, Any]) -> str:
    """Base64-encode a JSON object for an x402 header (``X-PAYMENT`` / ``X-PAYMENT-RESPONSE``)."""
    return base64.b64encode(json.dumps(payload, separators=(",", ":")).encode()).decode()


def decode_header(value: str) -> dict[str, Any]:
    """Inverse of encode_header.

    Raises:
        ValueError: if *value* is not base64-encoded JSON object.
    """
    try:
        decoded = json.loads(base64.b64decode(value, validate=True))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"not a base64 JSON payload: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ValueError("payment payload must be a JSON object")
    return decoded


class X402FacilitatorGate(IPaymentGate):
    """Verifies and settles x402 ``exact`` payments through a remote facilitator."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        facilitator_url: str,
        pay_to: str,
        network: str = "base",
        asset: str = USDC_ON_BASE,
        asset_domain: Optional[dict[str, str]] = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = client
        self._facilitator_url = facilitator_url.rstrip("/")
        self._pay_to = pay_to
        self._network = network
        self._asset = asset
        self._asset_domain = asset_domain if asset_domain is not None else USDC_EIP712_DOMAIN
        self._timeout = timeout

    # ------------------------------------------------------------------
    # IPaymentGate interface
    # ------------------------------------------------------------------

    def requirements_for(
        self,
        entrypoint: str,
        price: str,
        resource: str,
        description: str,
    ) -> PaymentRequirements:
        return PaymentRequirements(
            entrypoint=entrypoint,
            amount=price,
            resource=resource,
            description=description,
            pay_to=self._pay_to,
            network=self._network,
            asset=self._asset,
        )

    def describe(self, requirements: PaymentRequirements) -> dict[str, Any]:
        return {
            "scheme": requirements.scheme,
            "network": requirements.network,
            "maxAmountRequired": requirements.amount,
            "resource": requirements.resource,
            "description": requirements.description,
            "mimeType": "application/json",
            "payTo": requirements.pay_to,
            "maxTimeoutSeconds": requirements.max_timeout_seconds,
            "asset": requirements.asset,
            "extra": dict(self._asset_domain),
        }

    async def verify(
        self,
        requirements: PaymentRequirements,
        payment_header: Optional[str],
    ) -> PaymentAuthorization:
        accepts = [self.describe(requirements)]
        if not payment_header:
            raise PaymentRequiredError("X-PAYMENT header is required", accepts)
        try:
            payload = decode_header(payment_header)
        except ValueError as exc:
            raise PaymentRequiredError(f"Malformed X-PAYMENT header: {exc}", accepts) from exc

        result = await self._post("verify", payload, requirements)
        if not result.get("isValid"):
            reason = result.get("invalidReason") or "payment rejected by facilitator"
            logger.info("Payment for %s rejected: %s", requirements.entrypoint, reason)
            raise PaymentRequiredError(reason, accepts)

        logger.info("Payment for %s verified (payer=%s)", requirements.entrypoint, result.get("payer"))
        return PaymentAuthorization(
            requirements=requirements,
            payload=payload,
            payer=result.get("payer"),
        )

    async def settle(self, authorization: PaymentAuthorization) -> PaymentSettlement:
        requirements = authorization.requirements
        result = await self._post("settle", authorization.payload, requirements)
        if not result.get("success"):
            reason = result.get("errorReason") or "settlement failed"
            logger.warning("Settlement for %s failed: %s", requirements.entrypoint, reason)
            raise PaymentRequiredError(reason, [self.describe(requirements)])

        settlement = PaymentSettlement(
            success=True,
            network=result.get("network") or requirements.network,
            transaction=result.get("transaction"),
            payer=result.get("payer") or authorization.payer,
        )
        logger.info(
            "Settled %s %s for %s (tx=%s)",
            requirements.amount,
            requirements.asset,
            requirements.entrypoint,
            settlement.transaction,
        )
        return settlement

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _post(
        self,
        action: str,
        payload: dict[str, Any],
        requirements: PaymentRequirements,
    ) -> dict[str, Any]:
        url = f"{self._facilitator_url}/{action}"
        body = {
            "x402Version": X402_VERSION,
            "paymentPayload": payload,
            "paymentRequirements": self.describe(requirements),
        }
        try:
            response = await self._client.post(url, json=body, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(f"Facilitator {action} timed out", url=url) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Facilitator {action} failed: {exc}", url=url) from exc

        if not response.is_success:
            raise UpstreamError(
                f"Facilitator {action} error: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamError(f"Facilitator {action} returned invalid JSON", url=url) from exc
        if not isinstance(data, dict):
            raise UpstreamError(f"Facilitator {action} returned a non-object body", url=url)
        return data

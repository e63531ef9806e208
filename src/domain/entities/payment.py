"""
Domain entities for micropayments and payment analytics.
Zero external dependencies — pure Python dataclasses only.

Amounts are integers in the asset's minor units (e.g. 1000 == 0.001 USDC).
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class PaymentRequirements:
    entrypoint: str
    amount: str
    resource: str
    description: str
    pay_to: str
    network: str
    asset: str
    scheme: str = "exact"
    max_timeout_seconds: int = 300


@dataclass(frozen=True)
class PaymentAuthorization:
    requirements: PaymentRequirements
    payload: dict[str, Any]
    payer: Optional[str] = None


@dataclass(frozen=True)
class PaymentSettlement:
    success: bool
    network: str
    transaction: Optional[str] = None
    payer: Optional[str] = None


@dataclass(frozen=True)
class PaymentRecord:
    id: str
    direction: str  # "incoming" | "outgoing"
    amount: int
    entrypoint: str
    network: str
    timestamp_ms: int
    payer: Optional[str] = None
    transaction: Optional[str] = None


@dataclass(frozen=True)
class PaymentSummary:
    outgoing_total: int
    incoming_total: int
    outgoing_count: int
    incoming_count: int
    window_start_ms: Optional[int] = None
    window_end_ms: Optional[int] = None
    by_entrypoint: dict[str, int] = field(default_factory=dict)

    @property
    def net_total(self) -> int:
        return self.incoming_total - self.outgoing_total

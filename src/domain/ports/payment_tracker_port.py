"""
Port (interface) for payment trackers.
Infrastructure adapters (e.g. InMemoryPaymentTracker) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.payment import PaymentRecord, PaymentSummary


class IPaymentTracker(ABC):
    @abstractmethod
    def record(self, payment: PaymentRecord) -> None:
        """Store a settled payment."""
        ...

    @abstractmethod
    async def get_summary(self, window_ms: Optional[int] = None) -> PaymentSummary:
        """Aggregate totals over the last *window_ms* milliseconds (all time when None)."""
        ...

    @abstractmethod
    async def get_all_transactions(self, window_ms: Optional[int] = None) -> list[PaymentRecord]:
        """Payments in the window, most recent first."""
        ...

    @abstractmethod
    async def export_to_csv(self, window_ms: Optional[int] = None) -> str:
        """Payments in the window rendered as CSV with a header row."""
        ...

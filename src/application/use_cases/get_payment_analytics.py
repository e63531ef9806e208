"""
Use-case: read-only payment analytics (summary, transactions, CSV export).
Depends only on Domain ports and entities — no infrastructure imports.

The tracker is optional. Without one every view answers with an empty shape
instead of failing.
"""

from typing import Any, Optional

from src.domain.entities.payment import PaymentRecord
from src.domain.ports.payment_tracker_port import IPaymentTracker

DEFAULT_TRANSACTION_LIMIT = 50


def _transaction_view(record: PaymentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "direction": record.direction,
        "amount": str(record.amount),
        "entrypoint": record.entrypoint,
        "network": record.network,
        "payer": record.payer,
        "transaction": record.transaction,
        "timestamp": record.timestamp_ms,
    }


class GetPaymentAnalyticsUseCase:
    def __init__(self, tracker: Optional[IPaymentTracker] = None) -> None:
        self._tracker = tracker

    async def summary(self, window_ms: Optional[int] = None) -> dict[str, Any]:
        """Totals over the window. Large integer totals are returned as strings."""
        if self._tracker is None:
            return {"error": "Analytics not available", "payments": []}
        summary = await self._tracker.get_summary(window_ms)
        return {
            "outgoingTotal": str(summary.outgoing_total),
            "incomingTotal": str(summary.incoming_total),
            "netTotal": str(summary.net_total),
            "outgoingCount": summary.outgoing_count,
            "incomingCount": summary.incoming_count,
            "windowStart": summary.window_start_ms,
            "windowEnd": summary.window_end_ms,
            "byEntrypoint": {key: str(total) for key, total in summary.by_entrypoint.items()},
        }

    async def transactions(
        self,
        window_ms: Optional[int] = None,
        limit: int = DEFAULT_TRANSACTION_LIMIT,
    ) -> dict[str, Any]:
        if self._tracker is None:
            return {"transactions": []}
        records = await self._tracker.get_all_transactions(window_ms)
        return {"transactions": [_transaction_view(r) for r in records[: max(limit, 0)]]}

    async def csv(self, window_ms: Optional[int] = None) -> dict[str, Any]:
        if self._tracker is None:
            return {"csv": ""}
        return {"csv": await self._tracker.export_to_csv(window_ms)}

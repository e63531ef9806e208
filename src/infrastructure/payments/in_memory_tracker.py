"""
Infrastructure adapter: process-local payment ledger → IPaymentTracker.

Records live only as long as the process. Good enough for a single-replica
deployment; the analytics entrypoints depend only on IPaymentTracker, so a
persistent store can replace this without touching the application layer.
"""

import csv
import io
import time
from collections import defaultdict
from typing import Callable, Optional

from src.domain.entities.payment import PaymentRecord, PaymentSummary
from src.domain.ports.payment_tracker_port import IPaymentTracker

CSV_COLUMNS = [
    "id",
    "direction",
    "amount",
    "entrypoint",
    "network",
    "payer",
    "transaction",
    "timestamp",
]


def _now_ms() -> int:
    return int(time.time() * 1000)


class InMemoryPaymentTracker(IPaymentTracker):
    """Keeps every recorded payment in a list and answers windowed queries over it."""

    def __init__(self, now_ms: Callable[[], int] = _now_ms) -> None:
        self._records: list[PaymentRecord] = []
        self._now_ms = now_ms

    def record(self, payment: PaymentRecord) -> None:
        self._records.append(payment)

    async def get_summary(self, window_ms: Optional[int] = None) -> PaymentSummary:
        start, end = self._window(window_ms)
        totals = {"incoming": 0, "outgoing": 0}
        counts = {"incoming": 0, "outgoing": 0}
        by_entrypoint: dict[str, int] = defaultdict(int)
        for record in self._in_window(start):
            totals[record.direction] += record.amount
            counts[record.direction] += 1
            if record.direction == "incoming":
                by_entrypoint[record.entrypoint] += record.amount
        return PaymentSummary(
            outgoing_total=totals["outgoing"],
            incoming_total=totals["incoming"],
            outgoing_count=counts["outgoing"],
            incoming_count=counts["incoming"],
            window_start_ms=start,
            window_end_ms=end,
            by_entrypoint=dict(by_entrypoint),
        )

    async def get_all_transactions(self, window_ms: Optional[int] = None) -> list[PaymentRecord]:
        start, _ = self._window(window_ms)
        return sorted(self._in_window(start), key=lambda r: r.timestamp_ms, reverse=True)

    async def export_to_csv(self, window_ms: Optional[int] = None) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_COLUMNS)
        for r in await self.get_all_transactions(window_ms):
            writer.writerow(
                [
                    r.id,
                    r.direction,
                    r.amount,
                    r.entrypoint,
                    r.network,
                    r.payer or "",
                    r.transaction or "",
                    r.timestamp_ms,
                ]
            )
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _window(self, window_ms: Optional[int]) -> tuple[Optional[int], Optional[int]]:
        if window_ms is None:
            return None, None
        end = self._now_ms()
        return end - window_ms, end

    def _in_window(self, start: Optional[int]) -> list[PaymentRecord]:
        if start is None:
            return list(self._records)
        return [r for r in self._records if r.timestamp_ms >= start]

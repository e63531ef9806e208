"""
Application service: settle-all fan-out over independent awaitables.

Every branch runs to completion; one branch failing never cancels its siblings.
Callers inspect each Settled outcome on its own and decide whether to degrade
(fall back to a default) or propagate.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        return self.value if self.error is None else default


async def settle_all(*awaitables: Awaitable[Any]) -> list[Settled[Any]]:
    """Run *awaitables* concurrently and return one Settled per input, in order.

    Ordinary exceptions become ``Settled(error=...)``. Cancellation and other
    BaseExceptions are re-raised.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    settled: list[Settled[Any]] = []
    for result in results:
        if isinstance(result, Exception):
            settled.append(Settled(error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            settled.append(Settled(value=result))
    return settled

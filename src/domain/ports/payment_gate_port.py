"""
Port (interface) for micropayment gates.
Infrastructure adapters (e.g. X402FacilitatorGate) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from src.domain.entities.payment import (
    PaymentAuthorization,
    PaymentRequirements,
    PaymentSettlement,
)


class IPaymentGate(ABC):
    @abstractmethod
    def requirements_for(
        self,
        entrypoint: str,
        price: str,
        resource: str,
        description: str,
    ) -> PaymentRequirements:
        """Describe what a caller must pay to invoke *entrypoint* once."""
        ...

    @abstractmethod
    def describe(self, requirements: PaymentRequirements) -> dict[str, Any]:
        """Wire representation of *requirements*, as advertised to callers."""
        ...

    @abstractmethod
    async def verify(
        self,
        requirements: PaymentRequirements,
        payment_header: Optional[str],
    ) -> PaymentAuthorization:
        """Check a caller-supplied payment against *requirements*.

        Raises:
            PaymentRequiredError: if the payment is missing, malformed or invalid.
        """
        ...

    @abstractmethod
    async def settle(self, authorization: PaymentAuthorization) -> PaymentSettlement:
        """Settle a verified payment once the paid work has succeeded.

        Raises:
            PaymentRequiredError: if settlement is rejected.
        """
        ...

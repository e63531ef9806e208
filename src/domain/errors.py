"""
Domain error taxonomy.
Zero external dependencies.

Adapters raise these; use-cases either let them propagate (single-source
lookups) or catch them per source (enrichment fan-out). Only the entrypoint
layer maps them onto HTTP status codes.
"""

from typing import Any, Optional


class UpstreamError(Exception):
    """A data provider answered with a non-2xx status or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class UnexpectedShapeError(UpstreamError):
    """A data provider answered 2xx but the body did not match the expected shape."""


class UpstreamTimeoutError(UpstreamError, TimeoutError):
    """A data provider did not answer within its allotted time."""


class PaymentRequiredError(Exception):
    """A priced entrypoint was invoked without a valid payment."""

    def __init__(self, reason: str, accepts: Optional[list[dict[str, Any]]] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.accepts = accepts or []

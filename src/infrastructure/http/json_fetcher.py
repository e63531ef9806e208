"""
Infrastructure helper: bounded-timeout JSON GET over a shared httpx.AsyncClient.

Each call owns its own deadline (``asyncio.timeout``): when it expires the
in-flight request is cancelled and the deadline is released on every exit path.
Concurrent calls sharing the client never cancel one another.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from src.domain.errors import UnexpectedShapeError, UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class JsonFetcher:
    """GETs a URL and parses the body as JSON, mapping failures onto domain errors."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        default_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._client = client
        self._default_timeout = default_timeout

    async def fetch_json(self, url: str, timeout: Optional[float] = None) -> Any:
        """Return the parsed JSON body of ``GET url``.

        Raises:
            UpstreamError:        non-2xx status (``status_code`` set) or transport failure.
            UpstreamTimeoutError: no complete answer within *timeout* seconds.
            UnexpectedShapeError: 2xx answer whose body is not JSON.
        """
        limit = timeout if timeout is not None else self._default_timeout
        logger.debug("GET %s (timeout=%.1fs)", url, limit)
        try:
            async with asyncio.timeout(limit):
                response = await self._client.get(url, timeout=limit)
        except TimeoutError as exc:
            raise UpstreamTimeoutError(f"Timed out after {limit:g}s: {url}", url=url) from exc
        except httpx.TimeoutException as exc:
            raise UpstreamTimeoutError(f"Timed out after {limit:g}s: {url}", url=url) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Request failed: {url} ({exc})", url=url) from exc

        if not response.is_success:
            raise UpstreamError(
                f"API error: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise UnexpectedShapeError(
                f"Response from {url} is not valid JSON",
                status_code=response.status_code,
                url=url,
            ) from exc

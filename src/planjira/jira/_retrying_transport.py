"""httpx async transport wrapper with retry and exponential backoff."""

from __future__ import annotations

import asyncio
import logging

import httpx

_LOG = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = frozenset({429, 503})


class RetryingTransport(httpx.AsyncBaseTransport):
    """Wraps an httpx async transport with automatic retry on transient failures.

    Features:
    - Up to *max_attempts* attempts per request
    - Retry on 429 (rate limited) and 503 (service unavailable)
    - Retry on transport-level errors (connection reset, timeout, etc.)
    - Exponential backoff ``base_delay * 2**attempt``; a longer ``Retry-After`` wins
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        max_attempts: int = 3,
        base_delay: float = 1.0,
    ) -> None:
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._max_attempts = max(1, max_attempts)
        self._base_delay = base_delay

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        last_attempt = self._max_attempts - 1
        for attempt in range(self._max_attempts):
            try:
                response = await self._transport.handle_async_request(request)
            except httpx.TransportError:
                if attempt >= last_attempt:
                    raise
                await self._sleep_backoff(attempt)
                continue

            if response.status_code in _RETRYABLE_STATUS_CODES and attempt < last_attempt:
                retry_after = self._parse_retry_after(response)
                await response.aclose()
                await self._sleep_backoff(attempt, minimum=retry_after)
                continue

            return response

        raise httpx.TransportError("Request failed after retries")  # pragma: no cover

    async def aclose(self) -> None:
        await self._transport.aclose()

    @staticmethod
    def _parse_retry_after(response: httpx.Response) -> float:
        raw = response.headers.get("Retry-After")
        if raw is None:
            return 0.0
        try:
            return max(0.0, float(raw))
        except ValueError:
            return 0.0

    async def _sleep_backoff(self, attempt: int, *, minimum: float = 0.0) -> None:
        seconds = max(minimum, self._base_delay * 2**attempt)
        _LOG.warning("Jira request throttled or failed, retrying in %.1fs (attempt %d)", seconds, attempt + 1)
        await asyncio.sleep(seconds)

"""
Shared HTTP client infrastructure for the fantasy data providers.

Provides BaseApiClient with request pacing, retries and error mapping.
The ESPN handler builds on it; tests swap the transport for
``httpx.MockTransport``.

Usage:
    class MyClient(BaseApiClient):
        BASE_URL = "https://api.example.com"

        async def get_data(self) -> dict:
            return await self._get("/data")
"""

import asyncio
import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ExternalAPIError(Exception):
    """Base exception for league data provider errors."""

    def __init__(
        self,
        message: str,
        code: str = "EXTERNAL_API_ERROR",
        status_code: int = 502,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class RateLimitError(ExternalAPIError):
    """The provider kept answering 429 after all retries."""

    def __init__(self, message: str, retry_after: int = 60):
        super().__init__(message, code="RATE_LIMITED", status_code=429)
        self.retry_after = retry_after


class InvalidResponseError(ExternalAPIError):
    """The provider answered, but the payload failed schema validation."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message, code="INVALID_RESPONSE", status_code=502)
        self.errors = errors or []


def parse_retry_after(value: str | None, default: int = 60) -> int:
    """Seconds from a Retry-After header; HTTP-date or junk values give the default."""
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return default


# ---------------------------------------------------------------------------
# Request pacing
# ---------------------------------------------------------------------------

class RateLimiter:
    """Spaces outgoing requests evenly to stay under a per-minute limit."""

    def __init__(self, requests_per_minute: int = 600):
        self.delay = 60.0 / requests_per_minute
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until we can make a request."""
        async with self._lock:
            elapsed = time.monotonic() - self._last_request
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request = time.monotonic()


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------

class BaseApiClient:
    """
    Async HTTP client base with pacing and retries.

    Subclasses set BASE_URL and add provider-specific methods. Use as an
    async context manager, or rely on lazy creation and call ``close()``
    at shutdown (long-lived services).
    """

    BASE_URL: str = ""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        requests_per_minute: int = 600,
        timeout: float = 30.0,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._default_headers = headers or {}
        self._rate_limiter = RateLimiter(requests_per_minute)
        self._timeout = timeout
        self._max_retries = max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # -- Lifecycle -----------------------------------------------------------

    async def __aenter__(self) -> "BaseApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._default_headers,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    # -- HTTP methods --------------------------------------------------------

    async def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        GET ``path`` and decode the JSON body, retrying transient failures.

        List values in ``params`` are sent as repeated query parameters.

        Raises:
            RateLimitError: If the provider returns 429 and retries are exhausted
            ExternalAPIError: On client errors, or when retries are exhausted
        """
        last_error: ExternalAPIError | None = None

        for attempt in range(self._max_retries):
            try:
                await self._rate_limiter.acquire()
                response = await self.client.get(path, params=params)

                if response.status_code == 429:
                    retry_after = parse_retry_after(response.headers.get("retry-after"))
                    last_error = RateLimitError(
                        f"Provider rate limit exceeded. Try again in {retry_after} seconds.",
                        retry_after=retry_after,
                    )
                    if attempt < self._max_retries - 1:
                        wait = min(retry_after, 30)
                        logger.warning(
                            "Rate limited by provider, waiting %ss (attempt %d)", wait, attempt + 1
                        )
                        await asyncio.sleep(wait)
                    continue

                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                last_error = ExternalAPIError(
                    f"HTTP {status} from {path}: {e.response.reason_phrase}",
                    status_code=status,
                )
                # Client errors are not retryable
                if 400 <= status < 500:
                    raise last_error from e
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning("Request to %s failed, retrying in %ss: %s", path, wait, e)
                    await asyncio.sleep(wait)

            except httpx.RequestError as e:
                last_error = ExternalAPIError(f"Request to {path} failed: {e}")
                if attempt < self._max_retries - 1:
                    wait = 2 ** attempt
                    logger.warning("Request error for %s, retrying in %ss: %s", path, wait, e)
                    await asyncio.sleep(wait)

            except ValueError as e:
                # Body was not JSON; retrying will not help
                raise InvalidResponseError(f"Non-JSON response from {path}") from e

        raise last_error or ExternalAPIError("Request failed after retries")

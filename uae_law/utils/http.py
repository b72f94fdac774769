"""Rate-limited HTTP client with retry logic and proper error handling."""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional

import httpx

from ..config.settings import settings
from ..config.sources_config import SourcesConfig
from .logging import get_logger, log_api_request

logger = get_logger(__name__)


class HttpError(Exception):
    """Base HTTP error."""
    pass


class ClientError(HttpError):
    """Client error (4xx other than 429), never retried."""
    pass


class ServerError(HttpError):
    """Server error (5xx) or rate limiting (429) that outlived every retry."""
    pass


class NetworkError(HttpError):
    """Network/timeout error."""
    pass


class RateLimiter:
    """
    Process-wide minimum spacing between outbound requests.

    One instance is shared by every client in the process; the lock makes
    the "last request" bookkeeping safe across parallel fetch workers.
    """

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_request: Optional[float] = None

    def wait(self) -> float:
        """Block until the next request may go out. Returns seconds waited."""
        with self._lock:
            waited = 0.0
            if self._last_request is not None:
                elapsed = self._clock() - self._last_request
                if elapsed < self.min_interval:
                    waited = self.min_interval - elapsed
                    self._sleep(waited)
            self._last_request = self._clock()
            return waited


_rate_limiter: Optional[RateLimiter] = None
_rate_limiter_lock = threading.Lock()


def get_rate_limiter() -> RateLimiter:
    """Shared rate limiter configured from settings."""
    global _rate_limiter
    with _rate_limiter_lock:
        if _rate_limiter is None:
            _rate_limiter = RateLimiter(settings.request_min_interval)
        return _rate_limiter


class HttpClient:
    """
    HTTP client with rate limiting and smart retry logic.

    Key features:
    - Every attempt waits on the shared rate limiter
    - Retries 429, 5xx and network/timeout errors, never other 4xx
    - Exponential backoff: backoff_base * 2**attempt (2s, 4s, 8s)
    - Clear error classification
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_base: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        rate_limiter: Optional[RateLimiter] = None,
        client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            max_retries: Maximum retry attempts for retryable errors
            backoff_base: First backoff delay in seconds
            headers: Default headers sent with every request
            rate_limiter: Limiter to share (defaults to the process-wide one)
            client: Optional httpx.Client for dependency injection
            sleep: Sleep function used for backoff
        """
        self.timeout = settings.http_timeout if timeout is None else timeout
        self.max_retries = settings.http_max_retries if max_retries is None else max_retries
        self.backoff_base = settings.http_backoff_base if backoff_base is None else backoff_base
        self.headers = dict(headers or {})
        self.rate_limiter = rate_limiter or get_rate_limiter()
        self._sleep = sleep

        self._client = client or httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
        )

        # Track if we own the client (for cleanup)
        self._owns_client = client is None

    def __enter__(self) -> HttpClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit with cleanup."""
        self.close()

    def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client:
            self._client.close()

    def _should_retry(self, error: Exception) -> bool:
        """Retry network failures, 429 and 5xx only."""
        if isinstance(error, (httpx.TimeoutException, httpx.NetworkError)):
            return True
        if isinstance(error, httpx.HTTPStatusError):
            status = error.response.status_code
            return status == 429 or status >= 500
        return False

    def _classify_error(self, error: Exception) -> HttpError:
        """Classify httpx errors into our error types."""
        if isinstance(error, httpx.TimeoutException):
            return NetworkError(f"Request timed out after {self.timeout}s")
        if isinstance(error, httpx.NetworkError):
            return NetworkError(f"Network error: {error}")
        if isinstance(error, httpx.HTTPStatusError):
            status = error.response.status_code
            reason = error.response.reason_phrase
            if status == 429 or status >= 500:
                return ServerError(f"Server error '{status} {reason}' for url '{error.request.url}'")
            if 400 <= status < 500:
                return ClientError(f"Client error '{status} {reason}' for url '{error.request.url}'")
        return HttpError(f"HTTP error: {error}")

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given zero-based attempt."""
        return self.backoff_base * (2 ** attempt)

    def _make_request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with rate limiting and retries.

        Raises:
            HttpError: Classified HTTP error
        """
        merged_headers = {**self.headers, **(headers or {})}
        start_time = time.monotonic()
        last_error: Optional[Exception] = None

        for attempt in range(self.max_retries + 1):
            self.rate_limiter.wait()
            try:
                logger.debug(f"HTTP {method} {url} (attempt {attempt + 1}/{self.max_retries + 1})")

                response = self._client.request(
                    method=method,
                    url=url,
                    headers=merged_headers,
                    **kwargs
                )

                duration_ms = (time.monotonic() - start_time) * 1000
                logger.debug(
                    f"HTTP {method} {url} → {response.status_code}",
                    extra=log_api_request(method, url, response.status_code, duration_ms, attempt=attempt + 1),
                )

                response.raise_for_status()
                return response

            except httpx.HTTPError as e:
                last_error = e
                classified_error = self._classify_error(e)

                if not self._should_retry(e):
                    logger.warning(f"HTTP {method} {url} → {classified_error}")
                    raise classified_error from e

                if attempt < self.max_retries:
                    wait_time = self.backoff_delay(attempt)
                    logger.info(f"HTTP {method} {url} retrying in {wait_time:.0f}s due to: {classified_error}")
                    self._sleep(wait_time)

        final_error = self._classify_error(last_error)
        logger.error(f"HTTP {method} {url} → failed after {self.max_retries + 1} attempts: {final_error}")
        raise final_error from last_error

    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs
    ) -> httpx.Response:
        """Make GET request."""
        return self._make_request("GET", url, headers=headers, **kwargs)


def create_http_client(**kwargs) -> HttpClient:
    """Create HTTP client with the publisher headers from SourcesConfig."""
    kwargs.setdefault("headers", SourcesConfig.get_http_headers())
    return HttpClient(**kwargs)

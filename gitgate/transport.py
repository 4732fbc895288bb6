"""
HTTP Transport for the REST resource lookup.

Handles HTTP communication with the platform API with automatic retry logic,
token authentication and error handling.
"""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from gitgate.exceptions import (
    GitGateError,
    LookupFailedError,
    RateLimitedError,
    ServerError,
)
from gitgate.logging import log_http_request, log_http_response


@dataclass
class RetryConfig:
    """Configuration for automatic retry behavior."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


class HTTPTransport:
    """
    HTTP transport layer with token authentication and retry logic.

    Handles:
    - Bearer token authentication
    - Exponential backoff with jitter for retries
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://git.example.com/api/v3")
            token: API token sent as a bearer token (optional)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()

        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        not_found_ok: bool = False,
    ) -> Any:
        """
        Make a GET request with automatic retry.

        Args:
            path: API path (e.g., "/repos/alice/notes")
            params: Query parameters
            not_found_ok: Return None on 404 instead of raising

        Returns:
            The ``data`` member of the JSON response, or None for a tolerated 404

        Raises:
            LookupFailedError: On API errors
        """
        def make_request() -> httpx.Response:
            log_http_request("GET", f"{self.base_url}{path}", params=params)
            started = time.monotonic()
            response = self._client.request("GET", path, params=params)
            log_http_response(
                response.status_code,
                f"{self.base_url}{path}",
                elapsed_ms=(time.monotonic() - started) * 1000,
            )
            return response

        return self._execute_with_retry(make_request, not_found_ok)

    def _execute_with_retry(
        self, request_fn: Callable[[], httpx.Response], not_found_ok: bool = False
    ) -> Any:
        """
        Execute a request with automatic retry on retryable errors.

        Args:
            request_fn: Function that makes the HTTP request
            not_found_ok: Return None on 404 instead of raising

        Returns:
            The ``data`` member of the JSON response

        Raises:
            LookupFailedError: On non-retryable errors or after max retries
        """
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = request_fn()

                if response.status_code == 404 and not_found_ok:
                    return None

                if response.status_code < 400:
                    return self._parse_success_response(response)

                error = self._parse_error_response(response)

                if not self._should_retry(response.status_code, attempt):
                    raise error

                last_error = error

                retry_after = response.headers.get("Retry-After")
                wait_time = self._get_backoff_time(attempt, retry_after)
                time.sleep(wait_time)

            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError("CONNECTION_ERROR", str(e)) from e

                last_error = e
                wait_time = self._get_backoff_time(attempt, None)
                time.sleep(wait_time)

        if last_error:
            if isinstance(last_error, GitGateError):
                raise last_error
            raise ServerError("MAX_RETRIES_EXCEEDED", str(last_error))

        raise ServerError("UNKNOWN_ERROR", "Request failed with no error details")

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(
        self, attempt: int, retry_after: str | None
    ) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)

    def _parse_success_response(self, response: httpx.Response) -> Any:
        """
        Extract the ``data`` member of a successful response.

        Args:
            response: HTTP response with a 2xx or 3xx status

        Returns:
            The ``data`` member, or None when the envelope has none

        Raises:
            LookupFailedError: If the body is not a JSON object
        """
        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise LookupFailedError(
                "INVALID_RESPONSE",
                f"HTTP {response.status_code} response is not a JSON object",
            )
        return body.get("data")

    def _parse_error_response(self, response: httpx.Response) -> LookupFailedError:
        """
        Parse an error response into a typed exception.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate LookupFailedError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}

        error = data.get("error", {}) if isinstance(data, dict) else {}
        code = error.get("code", "UNKNOWN_ERROR")
        message = error.get("message", f"HTTP {response.status_code}")
        request_id = data.get("meta", {}).get("requestId") if isinstance(data, dict) else None

        status_code = response.status_code

        if status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(code, message, retry_after, request_id)
        elif status_code >= 500:
            return ServerError(code, message, request_id)
        else:
            return LookupFailedError(code, message, request_id)

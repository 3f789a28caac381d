"""Internal HTTP handling for the Mail Composer client.

This module provides the transport layer shared by all sub-clients:
- Making HTTP requests (sync and async)
- Mapping error responses onto the client exception hierarchy
- Retry with exponential backoff on transient failures

This is an internal module and should not be imported directly by users.
"""

import asyncio
import logging
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    BadRequestError,
    ComposerClientError,
    ConnectionError,
    NotFoundError,
    PayloadTooLargeError,
    ServerError,
    TimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST", "DELETE"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract message, error type and details from an error response.

    Understands the service's ``{"error", "detail", "type"}`` bodies as well
    as FastAPI's request validation bodies, whose ``detail`` is a list.

    Args:
        response: The HTTP response to parse.

    Returns:
        A tuple of (message, error_type, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text or f"HTTP {response.status_code} error", None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
            if isinstance(err, dict)
        ]
        return "; ".join(messages), "validation_error", {"errors": detail}

    extras = {
        key: value
        for key, value in body.items()
        if key not in ("error", "detail", "type")
    }
    details = extras or None
    if isinstance(detail, str):
        return detail, body.get("type"), details
    if "error" in body:
        return str(body["error"]), body.get("type"), details
    return str(body), body.get("type"), details


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Args:
        response: The HTTP response to check.

    Raises:
        BadRequestError: For HTTP 400 responses.
        NotFoundError: For HTTP 404 responses.
        PayloadTooLargeError: For HTTP 413 responses.
        ValidationError: For HTTP 422 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For any other error status.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code
    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    extras = details or {}
    if status_code == 400:
        raise BadRequestError(
            message=message,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )
    if status_code == 404:
        raise NotFoundError(
            message=message,
            message_id=extras.get("message_id"),
            details=details,
            response_body=response_body,
        )
    if status_code == 413:
        raise PayloadTooLargeError(
            message=message,
            limit=extras.get("limit"),
            details=details,
            response_body=response_body,
        )
    if status_code == 422:
        raise ValidationError(
            message=message,
            details=details,
            response_body=response_body,
        )
    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            details=details,
            response_body=response_body,
        )
    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay, ``base * 2**attempt`` capped at the maximum.

    Args:
        attempt: The retry attempt number (0-indexed).
        base: Base delay in seconds.

    Returns:
        The delay in seconds before the next attempt.
    """
    return min(base * (2**attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _translate_transport_error(
    exc: httpx.TransportError, url: str, timeout: float
) -> ComposerClientError:
    if isinstance(exc, httpx.TimeoutException):
        return TimeoutError(
            message=f"Request to {url} timed out",
            timeout=timeout,
            url=url,
        )
    return ConnectionError(message=f"Failed to connect to {url}", url=url, cause=exc)


def _decode(response: httpx.Response) -> Any:
    _raise_for_status(response)
    if response.content:
        return response.json()
    return None


class HTTPClient:
    """Synchronous HTTP client for the composer API.

    Wraps httpx.Client with error mapping and optional retry.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., a mock transport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Args:
            method: The HTTP method.
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1
        for attempt in range(attempts):
            is_last = attempt >= attempts - 1
            try:
                response = self._client.request(method, path, params=params, json=json)
            except httpx.TransportError as e:
                error = _translate_transport_error(e, url, self.timeout)
                if is_last:
                    raise error from e
                logger.warning(f"{error}; retrying ({attempt + 1}/{self.max_retries})")
                time.sleep(_calculate_backoff(attempt))
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and not is_last:
                logger.warning(
                    f"{method} {path} returned {response.status_code}; "
                    f"retrying ({attempt + 1}/{self.max_retries})"
                )
                time.sleep(_calculate_backoff(attempt))
                continue

            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request."""
        return self.request("POST", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a DELETE request."""
        return self.request("DELETE", path, params=params)


class AsyncHTTPClient:
    """Asynchronous HTTP client for the composer API.

    Wraps httpx.AsyncClient with error mapping and optional retry.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., ASGITransport for testing).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async HTTP request and return the parsed JSON response.

        See HTTPClient.request for arguments and errors.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1
        for attempt in range(attempts):
            is_last = attempt >= attempts - 1
            try:
                response = await self._client.request(
                    method, path, params=params, json=json
                )
            except httpx.TransportError as e:
                error = _translate_transport_error(e, url, self.timeout)
                if is_last:
                    raise error from e
                logger.warning(f"{error}; retrying ({attempt + 1}/{self.max_retries})")
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and not is_last:
                logger.warning(
                    f"{method} {path} returned {response.status_code}; "
                    f"retrying ({attempt + 1}/{self.max_retries})"
                )
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make an async GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async POST request."""
        return await self.request("POST", path, params=params, json=json)

    async def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make an async DELETE request."""
        return await self.request("DELETE", path, params=params)

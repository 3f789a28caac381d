"""Exception hierarchy for the Mail Composer API client.

Exception Hierarchy:
    ComposerClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── BadRequestError (HTTP 400)
        ├── NotFoundError (HTTP 404)
        ├── PayloadTooLargeError (HTTP 413)
        ├── ValidationError (HTTP 422)
        └── ServerError (HTTP 5xx)

Example:
    Catching specific errors::

        try:
            client.compose.recipients("compose", account=identity)
        except BadRequestError as e:
            print(f"Rejected: {e.message}")

    Catching all client errors::

        try:
            client.messages.get("missing")
        except ComposerClientError as e:
            print(f"Client error: {e}")
"""

from typing import Any


class ComposerClientError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(ComposerClientError):
    """Failed to connect to the composer server.

    Attributes:
        message: Human-readable error description.
        url: The URL that failed to connect.
        cause: The underlying exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} (url: {self.url})"
        return self.message


class TimeoutError(ComposerClientError):
    """Request timed out.

    Attributes:
        message: Human-readable error description.
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        extras = []
        if self.timeout is not None:
            extras.append(f"timeout: {self.timeout}s")
        if self.url:
            extras.append(f"url: {self.url}")
        if not extras:
            return self.message
        return f"{self.message} ({', '.join(extras)})"


class APIError(ComposerClientError):
    """Server returned an error response.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from the server.
        error_type: The ``type`` field of the error body, if any.
        details: Additional error details from the response, if any.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        if self.error_type:
            return f"[HTTP {self.status_code}] [{self.error_type}] {self.message}"
        return f"[HTTP {self.status_code}] {self.message}"


class BadRequestError(APIError):
    """The server rejected the request (HTTP 400).

    Raised for actions an operation cannot handle, e.g. resolving recipients
    for a fresh composition.
    """

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            error_type=error_type,
            details=details,
            response_body=response_body,
        )


class NotFoundError(APIError):
    """Reference message not found (HTTP 404).

    Attributes:
        message_id: The identifier that wasn't found, when the server reports it.
    """

    def __init__(
        self,
        message: str,
        message_id: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.message_id = message_id
        super().__init__(
            message=message,
            status_code=404,
            error_type="not_found",
            details=details,
            response_body=response_body,
        )


class PayloadTooLargeError(APIError):
    """An attachment exceeded the size limit (HTTP 413).

    Attributes:
        limit: The server's attachment size limit in bytes, when reported.
    """

    def __init__(
        self,
        message: str,
        limit: int | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.limit = limit
        super().__init__(
            message=message,
            status_code=413,
            error_type="payload_too_large",
            details=details,
            response_body=response_body,
        )


class ValidationError(APIError):
    """Request validation failed (HTTP 422).

    The details attribute holds the field-level errors under ``errors``.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=422,
            error_type="validation_error",
            details=details,
            response_body=response_body,
        )


class ServerError(APIError):
    """Server-side error (HTTP 5xx)."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            error_type="server_error",
            details=details,
            response_body=response_body,
        )

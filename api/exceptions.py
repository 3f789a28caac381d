"""Exception handlers for the composer FastAPI application.

This module converts composer and validation exceptions into consistent
JSON responses of the form ``{"error", "detail", "type"}``.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from composer.errors import (
    AttachmentTooLargeError,
    InvalidActionError,
    ReferenceMessageUnavailable,
)

logger = logging.getLogger(__name__)


async def invalid_action_handler(request: Request, exc: InvalidActionError):
    """Handle InvalidActionError exceptions.

    Returns a 400 naming the action and the operation that rejected it.

    Args:
        request: The incoming request that triggered the error.
        exc: The InvalidActionError exception.

    Returns:
        JSONResponse with 400 status.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Action",
            "detail": exc.message,
            "type": "InvalidActionError",
            "action": getattr(exc.action, "value", str(exc.action)),
            "operation": exc.operation,
        },
    )


async def reference_unavailable_handler(
    request: Request, exc: ReferenceMessageUnavailable
):
    """Handle ReferenceMessageUnavailable exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The ReferenceMessageUnavailable exception.

    Returns:
        JSONResponse with 404 status and the requested identifier.
    """
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Reference Message Not Found",
            "detail": exc.message,
            "type": "ReferenceMessageUnavailable",
            "message_id": exc.message_id,
        },
    )


async def attachment_too_large_handler(request: Request, exc: AttachmentTooLargeError):
    """Handle AttachmentTooLargeError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The AttachmentTooLargeError exception.

    Returns:
        JSONResponse with 413 status and the size limit.
    """
    return JSONResponse(
        status_code=413,
        content={
            "error": "Attachment Too Large",
            "detail": exc.message,
            "type": "AttachmentTooLargeError",
            "attachment": exc.attachment_name,
            "size": exc.size,
            "limit": exc.limit,
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised inside route handlers.

    Request body validation is handled by FastAPI itself; this covers models
    built while serving a request.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "type": "ValidationError",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValueError exception.

    Returns:
        JSONResponse with error details.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the full traceback and hides it from the client.

    Args:
        request: The incoming request that triggered the error.
        exc: The exception that was raised.

    Returns:
        JSONResponse with generic error message.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )

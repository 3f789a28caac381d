"""Mail Composer API Client Library.

A typed Python client for the Mail Composer REST API, with synchronous and
asynchronous variants.

Example:
    Synchronous usage::

        from client import ComposerClient

        with ComposerClient(base_url="http://localhost:8000") as client:
            recipients = client.compose.recipients(
                "reply_all",
                account={"primary_address": "me@x.com"},
                reference_message={"from": "c@x.com", "to": ["a@x.com", "me@x.com"]},
            )

    Asynchronous usage::

        from client import AsyncComposerClient

        async with AsyncComposerClient() as client:
            await client.messages.store(reference, message_id="m1")

Exports:
    ComposerClient: Synchronous client.
    AsyncComposerClient: Asynchronous client.

    Exceptions:
        ComposerClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        BadRequestError: Request rejected (HTTP 400).
        NotFoundError: Reference message not found (HTTP 404).
        PayloadTooLargeError: Attachment too large (HTTP 413).
        ValidationError: Request validation failed (HTTP 422).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._compose import AsyncComposeClient, ComposeClient
from client._messages import AsyncMessagesClient, MessagesClient
from client.client import AsyncComposerClient, ComposerClient
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
from client.models import (
    AccountIdentity,
    AttachmentMetadata,
    ComposeAction,
    ComposeDraft,
    ComposedContent,
    HealthResponse,
    MessageIdResponse,
    RecipientSets,
    ReferenceMessage,
    ReplyFromAccount,
)

__all__ = [
    # Main clients
    "ComposerClient",
    "AsyncComposerClient",
    # Sub-clients
    "MessagesClient",
    "AsyncMessagesClient",
    "ComposeClient",
    "AsyncComposeClient",
    # Exceptions
    "ComposerClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "BadRequestError",
    "NotFoundError",
    "PayloadTooLargeError",
    "ValidationError",
    "ServerError",
    # Models
    "AccountIdentity",
    "AttachmentMetadata",
    "ComposeAction",
    "ComposeDraft",
    "ComposedContent",
    "HealthResponse",
    "MessageIdResponse",
    "RecipientSets",
    "ReferenceMessage",
    "ReplyFromAccount",
]

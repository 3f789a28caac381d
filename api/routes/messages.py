"""Reference message endpoints.

Lets callers register the messages they want to reply to or forward so that
compose requests can refer to them by identifier instead of inlining them.
"""

import logging

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from api.dependencies import MessageStoreDep
from api.models import MessageIdResponse
from composer.message import ReferenceMessage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/messages",
    tags=["messages"],
)


# ============================================================================
# Request Models
# ============================================================================


class StoreMessageRequest(BaseModel):
    """Request model for registering a reference message.

    Attributes:
        message: The message snapshot to register.
        message_id: Identifier to store it under; generated when omitted.
    """

    message: ReferenceMessage = Field(description="Reference message snapshot")
    message_id: str | None = Field(
        default=None, min_length=1, description="Identifier to store the message under"
    )


# ============================================================================
# Route Handlers
# ============================================================================


@router.post(
    "",
    response_model=MessageIdResponse,
    status_code=status.HTTP_201_CREATED,
)
async def store_message(
    request: StoreMessageRequest, store: MessageStoreDep
) -> MessageIdResponse:
    """Register a reference message.

    Registering under an existing identifier replaces the stored message.

    Args:
        request: The message and optional identifier.
        store: The message store dependency.

    Returns:
        The identifier the message was stored under.
    """
    message_id = store.add(request.message, request.message_id)
    return MessageIdResponse(
        message_id=message_id,
        message=f"Stored reference message '{message_id}'",
    )


@router.get("/{message_id}", response_model=ReferenceMessage)
async def get_message(message_id: str, store: MessageStoreDep) -> ReferenceMessage:
    """Fetch a registered reference message.

    Args:
        message_id: The identifier to look up.
        store: The message store dependency.

    Returns:
        The stored message.

    Raises:
        ReferenceMessageUnavailable: If no message has that identifier (404).
    """
    return store.get(message_id)


@router.delete("/{message_id}", response_model=MessageIdResponse)
async def delete_message(message_id: str, store: MessageStoreDep) -> MessageIdResponse:
    """Remove a registered reference message.

    Args:
        message_id: The identifier to remove.
        store: The message store dependency.

    Returns:
        Confirmation naming the removed identifier.

    Raises:
        ReferenceMessageUnavailable: If no message has that identifier (404).
    """
    store.remove(message_id)
    logger.info(f"Removed reference message {message_id}")
    return MessageIdResponse(
        message_id=message_id,
        message=f"Removed reference message '{message_id}'",
    )

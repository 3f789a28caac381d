"""Client response models for the Mail Composer API client.

The composer's own records are re-exported so callers can build requests and
read responses with the same types the server uses.
"""

from pydantic import BaseModel, Field

from api.models import MessageIdResponse
from composer.actions import ComposeAction
from composer.message import (
    AccountIdentity,
    AttachmentMetadata,
    ComposedContent,
    RecipientSets,
    ReferenceMessage,
)
from composer.reply_from import ReplyFromAccount
from composer.session import ComposeDraft

__all__ = [
    # Re-exported from the server side
    "AccountIdentity",
    "AttachmentMetadata",
    "ComposeAction",
    "ComposeDraft",
    "ComposedContent",
    "MessageIdResponse",
    "RecipientSets",
    "ReferenceMessage",
    "ReplyFromAccount",
    # Client-specific models
    "HealthResponse",
]


class HealthResponse(BaseModel):
    """Response model for the API health check.

    Attributes:
        status: Health status reported by the server.
    """

    status: str = Field(..., description="Health status")

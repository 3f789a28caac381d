"""Shared request and response models for API endpoints.

Every compose endpoint names its reference message the same way: either by
the identifier it was registered under (``message_id``) or inline
(``reference_message``). The base class here carries that choice so the
route modules only add what is specific to them.
"""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from composer.actions import ComposeAction
from composer.message import ReferenceMessage
from composer.store import MessageStore


class ReferenceSourceRequest(BaseModel):
    """Base request model for endpoints that work on a reference message.

    Exactly one of ``message_id`` and ``reference_message`` must be given.

    Attributes:
        action: The compose action.
        message_id: Identifier of a message registered via POST /messages.
        reference_message: The reference message itself.
    """

    action: ComposeAction = Field(description="Compose action")
    message_id: str | None = Field(
        default=None, description="Identifier of a registered reference message"
    )
    reference_message: ReferenceMessage | None = Field(
        default=None, description="Inline reference message"
    )

    @model_validator(mode="after")
    def validate_reference_source(self) -> "ReferenceSourceRequest":
        """Require exactly one way of naming the reference message.

        COMPOSE needs no reference and accepts neither.

        Raises:
            ValueError: If both or (for actions that need one) neither are set.
        """
        if self.message_id is not None and self.reference_message is not None:
            raise ValueError("Provide either message_id or reference_message, not both")
        if (
            self.action.uses_reference
            and self.message_id is None
            and self.reference_message is None
        ):
            raise ValueError(
                f"Action '{self.action.value}' requires message_id or reference_message"
            )
        return self

    def load_reference(self, store: MessageStore) -> ReferenceMessage | None:
        """Return the inline reference or look it up in the store.

        Args:
            store: Store to resolve ``message_id`` against.

        Returns:
            The reference message, or None when the request names none.

        Raises:
            ReferenceMessageUnavailable: If ``message_id`` is unknown.
        """
        if self.reference_message is not None:
            return self.reference_message
        if self.message_id is not None:
            return store.get(self.message_id)
        return None


class MessageIdResponse(BaseModel):
    """Response model for message registration and removal.

    Attributes:
        message_id: Identifier of the affected message.
        message: Human-readable description of the result.
    """

    message_id: str
    message: str


class ComposeTimeMixin(BaseModel):
    """Optional clock override for endpoints that build attribution dates.

    Attributes:
        now: Current time; the server clock (UTC) is used when omitted.
    """

    now: datetime | None = Field(
        default=None, description="Current time used for attribution dates"
    )

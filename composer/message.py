"""Data records exchanged with the composer core."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from composer.addresses import bare_address


class AccountIdentity(BaseModel):
    """The identity a message is being composed from.

    Args:
        primary_address: The account's own email address.
        aliases: Custom "from" addresses the account may also send as.
        display_name: Optional human-readable name for the account.
    """

    model_config = {"frozen": True}

    primary_address: str = Field(description="The account's own email address")
    aliases: list[str] = Field(
        default_factory=list, description="Custom from addresses for this account"
    )
    display_name: Optional[str] = Field(default=None, description="Account display name")

    def sending_addresses(self) -> list[str]:
        """Return the primary address followed by every alias.

        Returns:
            All addresses this identity can send as.
        """
        return [self.primary_address, *self.aliases]


class AttachmentMetadata(BaseModel):
    """Metadata describing an attachment; the content itself is never loaded.

    Args:
        name: File name, if the source reported one.
        size: Size in bytes, or -1 when it could not be determined.
        content_type: MIME type, empty when unknown.
        origin: URI the attachment was picked from.
    """

    model_config = {"frozen": True}

    name: Optional[str] = Field(default=None, description="File name")
    size: int = Field(description="Size in bytes (-1 if unknown)")
    content_type: str = Field(default="", description="MIME type")
    origin: Optional[str] = Field(default=None, description="Source URI")

    @property
    def display_name(self) -> str:
        """Name to show for this attachment, falling back to the origin's last path segment."""
        if self.name:
            return self.name
        if self.origin:
            segment = self.origin.rstrip("/").rsplit("/", 1)[-1]
            if segment:
                return segment
        return "attachment"


class ReferenceMessage(BaseModel):
    """Immutable snapshot of the message being replied to or forwarded.

    Address fields hold raw RFC 5322 tokens exactly as the message store
    returned them (display names and stray quoting included). Input may use
    either the long field names or the short header-style aliases
    (``from``, ``to``, ``cc``, ``reply_to``).

    Args:
        from_address: Sender token.
        to_addresses: Original primary recipients.
        cc_addresses: Original CC recipients.
        reply_to_addresses: Reply-To tokens, empty when the header was absent.
        subject: Original subject line.
        body_html: Original HTML body.
        date_received: When the message was received.
        attachments: Metadata for the message's attachments.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    from_address: str = Field(
        default="",
        validation_alias=AliasChoices("from_address", "from"),
        description="Sender address token",
    )
    to_addresses: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("to_addresses", "to"),
        description="Primary recipient tokens",
    )
    cc_addresses: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cc_addresses", "cc"),
        description="CC recipient tokens",
    )
    reply_to_addresses: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("reply_to_addresses", "reply_to"),
        description="Reply-To tokens",
    )
    subject: str = Field(default="", description="Subject line")
    body_html: str = Field(default="", description="HTML body content")
    date_received: Optional[datetime] = Field(
        default=None, description="When the message was received"
    )
    attachments: list[AttachmentMetadata] = Field(
        default_factory=list, description="Attachment metadata"
    )

    @field_validator("from_address", "subject", "body_html", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        """Treat missing string columns as empty strings."""
        return "" if value is None else value

    @field_validator(
        "to_addresses", "cc_addresses", "reply_to_addresses", mode="before"
    )
    @classmethod
    def coerce_address_list(cls, value):
        """Accept None or a single comma-separated header value for list fields."""
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        return value


class RecipientSets(BaseModel):
    """Resolved recipients for a reply or forward.

    Each list behaves as an insertion-ordered set: no two entries share a
    bare address (compared case-insensitively) and none is empty.

    Args:
        to: Primary recipients.
        cc: CC recipients.
        bcc: BCC recipients.
    """

    to: list[str] = Field(default_factory=list, description="Primary recipients")
    cc: list[str] = Field(default_factory=list, description="CC recipients")
    bcc: list[str] = Field(default_factory=list, description="BCC recipients")

    def addresses(self, field: Literal["to", "cc", "bcc"]) -> list[str]:
        """Return the bare addresses of one recipient field.

        Args:
            field: Which field to read.

        Returns:
            Bare addresses, in order, without display names.
        """
        return [bare_address(token) for token in getattr(self, field)]

    def is_empty(self) -> bool:
        """Check whether no recipients were resolved at all."""
        return not (self.to or self.cc or self.bcc)


class ComposedContent(BaseModel):
    """Subject and quoted body produced for a reply or forward.

    Args:
        subject: Subject line with the action's prefix applied once.
        quoted_body_html: Quoted HTML fragment with its attribution header.
    """

    subject: str = Field(default="", description="Subject line")
    quoted_body_html: str = Field(default="", description="Quoted HTML fragment")

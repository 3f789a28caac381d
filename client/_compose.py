"""Compose sub-client.

This module provides ComposeClient and AsyncComposeClient for the compose
endpoints (/compose/*).

This is an internal module. Import from `client` instead.
"""

from datetime import datetime
from typing import Any

from client._base import AsyncBaseClient, BaseClient, _dump
from client.models import (
    AccountIdentity,
    AttachmentMetadata,
    ComposeAction,
    ComposeDraft,
    ComposedContent,
    RecipientSets,
    ReferenceMessage,
)


def _reference_payload(
    action: ComposeAction | str,
    message_id: str | None,
    reference_message: ReferenceMessage | dict[str, Any] | None,
) -> dict[str, Any]:
    """Build the part of a compose request that names the reference message."""
    request_data: dict[str, Any] = {"action": getattr(action, "value", action)}
    if message_id is not None:
        request_data["message_id"] = message_id
    if reference_message is not None:
        request_data["reference_message"] = _dump(reference_message)
    return request_data


def _draft_payload(
    action: ComposeAction | str,
    account: AccountIdentity | dict[str, Any],
    message_id: str | None,
    reference_message: ReferenceMessage | dict[str, Any] | None,
    now: datetime | None,
    other_accounts: list[str] | None,
    switch_to: ComposeAction | str | None,
    body: str | None,
    respond_inline: bool,
    attachments: list[AttachmentMetadata | dict[str, Any]] | None,
) -> dict[str, Any]:
    request_data = _reference_payload(action, message_id, reference_message)
    request_data["account"] = _dump(account)
    if now is not None:
        request_data["now"] = now.isoformat()
    if other_accounts is not None:
        request_data["other_accounts"] = other_accounts
    if switch_to is not None:
        request_data["switch_to"] = getattr(switch_to, "value", switch_to)
    if body is not None:
        request_data["body"] = body
    if respond_inline:
        request_data["respond_inline"] = True
    if attachments is not None:
        request_data["attachments"] = [_dump(attachment) for attachment in attachments]
    return request_data


class ComposeClient(BaseClient):
    """Synchronous client for the compose endpoints.

    The reference message is named either by ``message_id`` (registered via
    ``client.messages.store``) or inline with ``reference_message``.
    """

    _BASE_PATH = "/compose"

    def recipients(
        self,
        action: ComposeAction | str,
        account: AccountIdentity | dict[str, Any],
        message_id: str | None = None,
        reference_message: ReferenceMessage | dict[str, Any] | None = None,
    ) -> RecipientSets:
        """Resolve To/Cc/Bcc for a reply, reply-all or forward.

        Args:
            action: "reply", "reply_all" or "forward".
            account: The replying account and its aliases.
            message_id: Identifier of a registered reference message.
            reference_message: The reference message itself.

        Returns:
            The resolved recipients.

        Raises:
            BadRequestError: If the action is "compose".
            NotFoundError: If message_id is unknown.
            ValidationError: If the request is malformed.
        """
        request_data = _reference_payload(action, message_id, reference_message)
        request_data["account"] = _dump(account)
        data = self._post(f"{self._BASE_PATH}/recipients", json=request_data)
        return RecipientSets(**data)

    def content(
        self,
        action: ComposeAction | str,
        message_id: str | None = None,
        reference_message: ReferenceMessage | dict[str, Any] | None = None,
        now: datetime | None = None,
    ) -> ComposedContent:
        """Build the prefixed subject and quoted HTML body.

        Args:
            action: The compose action.
            message_id: Identifier of a registered reference message.
            reference_message: The reference message itself.
            now: Current time for the attribution date.

        Returns:
            The composed subject and quoted body.

        Raises:
            NotFoundError: If message_id is unknown.
            ValidationError: If the request is malformed.
        """
        request_data = _reference_payload(action, message_id, reference_message)
        if now is not None:
            request_data["now"] = now.isoformat()
        data = self._post(f"{self._BASE_PATH}/content", json=request_data)
        return ComposedContent(**data)

    def draft(
        self,
        action: ComposeAction | str,
        account: AccountIdentity | dict[str, Any],
        message_id: str | None = None,
        reference_message: ReferenceMessage | dict[str, Any] | None = None,
        now: datetime | None = None,
        other_accounts: list[str] | None = None,
        switch_to: ComposeAction | str | None = None,
        body: str | None = None,
        respond_inline: bool = False,
        attachments: list[AttachmentMetadata | dict[str, Any]] | None = None,
    ) -> ComposeDraft:
        """Build a complete draft.

        Args:
            action: The compose action.
            account: The composing account and its aliases.
            message_id: Identifier of a registered reference message.
            reference_message: The reference message itself.
            now: Current time for the attribution date.
            other_accounts: Further accounts offered as From for fresh messages.
            switch_to: Action to switch to after starting.
            body: Text for the user's body.
            respond_inline: Whether to move the quoted text into the body.
            attachments: Attachments picked by the user.

        Returns:
            The resulting draft. An unknown message_id yields an empty draft
            with ``reference_available`` false rather than an error.

        Raises:
            BadRequestError: If switching to "compose" with a reference.
            PayloadTooLargeError: If an attachment does not fit.
            ValidationError: If the request is malformed.
        """
        request_data = _draft_payload(
            action,
            account,
            message_id,
            reference_message,
            now,
            other_accounts,
            switch_to,
            body,
            respond_inline,
            attachments,
        )
        data = self._post(f"{self._BASE_PATH}/draft", json=request_data)
        return ComposeDraft(**data)


class AsyncComposeClient(AsyncBaseClient):
    """Asynchronous client for the compose endpoints.

    Mirrors ComposeClient; see its methods for arguments and errors.
    """

    _BASE_PATH = "/compose"

    async def recipients(
        self,
        action: ComposeAction | str,
        account: AccountIdentity | dict[str, Any],
        message_id: str | None = None,
        reference_message: ReferenceMessage | dict[str, Any] | None = None,
    ) -> RecipientSets:
        """Resolve To/Cc/Bcc for a reply, reply-all or forward."""
        request_data = _reference_payload(action, message_id, reference_message)
        request_data["account"] = _dump(account)
        data = await self._post(f"{self._BASE_PATH}/recipients", json=request_data)
        return RecipientSets(**data)

    async def content(
        self,
        action: ComposeAction | str,
        message_id: str | None = None,
        reference_message: ReferenceMessage | dict[str, Any] | None = None,
        now: datetime | None = None,
    ) -> ComposedContent:
        """Build the prefixed subject and quoted HTML body."""
        request_data = _reference_payload(action, message_id, reference_message)
        if now is not None:
            request_data["now"] = now.isoformat()
        data = await self._post(f"{self._BASE_PATH}/content", json=request_data)
        return ComposedContent(**data)

    async def draft(
        self,
        action: ComposeAction | str,
        account: AccountIdentity | dict[str, Any],
        message_id: str | None = None,
        reference_message: ReferenceMessage | dict[str, Any] | None = None,
        now: datetime | None = None,
        other_accounts: list[str] | None = None,
        switch_to: ComposeAction | str | None = None,
        body: str | None = None,
        respond_inline: bool = False,
        attachments: list[AttachmentMetadata | dict[str, Any]] | None = None,
    ) -> ComposeDraft:
        """Build a complete draft."""
        request_data = _draft_payload(
            action,
            account,
            message_id,
            reference_message,
            now,
            other_accounts,
            switch_to,
            body,
            respond_inline,
            attachments,
        )
        data = await self._post(f"{self._BASE_PATH}/draft", json=request_data)
        return ComposeDraft(**data)

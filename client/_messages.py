"""Reference message sub-client.

This module provides MessagesClient and AsyncMessagesClient for the
reference message endpoints (/messages/*).

This is an internal module. Import from `client` instead.
"""

from typing import Any

from client._base import AsyncBaseClient, BaseClient, _dump
from client.models import MessageIdResponse, ReferenceMessage


def _store_payload(
    message: ReferenceMessage | dict[str, Any], message_id: str | None
) -> dict[str, Any]:
    request_data: dict[str, Any] = {"message": _dump(message)}
    if message_id is not None:
        request_data["message_id"] = message_id
    return request_data


class MessagesClient(BaseClient):
    """Synchronous client for registering reference messages.

    Example:
        with ComposerClient() as client:
            stored = client.messages.store(reference)
            client.compose.content("reply", message_id=stored.message_id)
    """

    _BASE_PATH = "/messages"

    def store(
        self,
        message: ReferenceMessage | dict[str, Any],
        message_id: str | None = None,
    ) -> MessageIdResponse:
        """Register a reference message.

        Args:
            message: The message snapshot, as a model or a dict using either
                field names or the ``from``/``to``/``cc``/``reply_to`` aliases.
            message_id: Identifier to store it under; generated when omitted.

        Returns:
            The identifier the message was stored under.

        Raises:
            ValidationError: If the message is invalid.
        """
        data = self._post(self._BASE_PATH, json=_store_payload(message, message_id))
        return MessageIdResponse(**data)

    def get(self, message_id: str) -> ReferenceMessage:
        """Fetch a registered reference message.

        Raises:
            NotFoundError: If no message has that identifier.
        """
        data = self._get(f"{self._BASE_PATH}/{message_id}")
        return ReferenceMessage.model_validate(data)

    def delete(self, message_id: str) -> MessageIdResponse:
        """Remove a registered reference message.

        Raises:
            NotFoundError: If no message has that identifier.
        """
        data = self._delete(f"{self._BASE_PATH}/{message_id}")
        return MessageIdResponse(**data)


class AsyncMessagesClient(AsyncBaseClient):
    """Asynchronous client for registering reference messages.

    Example:
        async with AsyncComposerClient() as client:
            stored = await client.messages.store(reference)
    """

    _BASE_PATH = "/messages"

    async def store(
        self,
        message: ReferenceMessage | dict[str, Any],
        message_id: str | None = None,
    ) -> MessageIdResponse:
        """Register a reference message.

        See MessagesClient.store.
        """
        data = await self._post(
            self._BASE_PATH, json=_store_payload(message, message_id)
        )
        return MessageIdResponse(**data)

    async def get(self, message_id: str) -> ReferenceMessage:
        """Fetch a registered reference message.

        Raises:
            NotFoundError: If no message has that identifier.
        """
        data = await self._get(f"{self._BASE_PATH}/{message_id}")
        return ReferenceMessage.model_validate(data)

    async def delete(self, message_id: str) -> MessageIdResponse:
        """Remove a registered reference message.

        Raises:
            NotFoundError: If no message has that identifier.
        """
        data = await self._delete(f"{self._BASE_PATH}/{message_id}")
        return MessageIdResponse(**data)

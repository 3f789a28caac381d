"""Reference message lookup."""

import logging
import threading
from typing import Optional, Protocol
from uuid import uuid4

from composer.errors import ReferenceMessageUnavailable
from composer.message import ReferenceMessage

logger = logging.getLogger(__name__)


class MessageStore(Protocol):
    """Anything that can look up a reference message by identifier."""

    def get(self, message_id: str) -> ReferenceMessage:
        """Return the message or raise ReferenceMessageUnavailable."""
        ...


class InMemoryMessageStore:
    """Lock-guarded, process-local message lookup table.

    Holds snapshots handed to it by the caller; nothing is written anywhere.
    """

    def __init__(self) -> None:
        self._messages: dict[str, ReferenceMessage] = {}
        self._lock = threading.Lock()

    def add(self, message: ReferenceMessage, message_id: Optional[str] = None) -> str:
        """Register a message.

        Args:
            message: The snapshot to store.
            message_id: Identifier to use; a UUID is generated when omitted.

        Returns:
            The identifier the message is stored under.
        """
        message_id = message_id or str(uuid4())
        with self._lock:
            self._messages[message_id] = message
        logger.debug(f"Stored reference message {message_id}")
        return message_id

    def get(self, message_id: str) -> ReferenceMessage:
        """Look up a message.

        Raises:
            ReferenceMessageUnavailable: If no message has that identifier.
        """
        with self._lock:
            message = self._messages.get(message_id)
        if message is None:
            raise ReferenceMessageUnavailable(message_id)
        return message

    def remove(self, message_id: str) -> None:
        """Forget a message.

        Raises:
            ReferenceMessageUnavailable: If no message has that identifier.
        """
        with self._lock:
            if message_id not in self._messages:
                raise ReferenceMessageUnavailable(message_id)
            del self._messages[message_id]

    def clear(self) -> None:
        """Forget every message."""
        with self._lock:
            self._messages.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def __contains__(self, message_id: object) -> bool:
        with self._lock:
            return message_id in self._messages

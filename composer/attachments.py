"""Attachment bookkeeping for a message being composed."""

import logging
from collections.abc import Iterable, Iterator

from composer.errors import AttachmentTooLargeError
from composer.message import AttachmentMetadata

logger = logging.getLogger(__name__)


class AttachmentList:
    """Ordered attachments with a cap on their combined size.

    Args:
        max_total_size: Maximum combined attachment size in bytes.
    """

    def __init__(self, max_total_size: int) -> None:
        self.max_total_size = max_total_size
        self._attachments: list[AttachmentMetadata] = []

    def add(self, attachment: AttachmentMetadata) -> int:
        """Add an attachment if it fits.

        Args:
            attachment: Metadata of the attachment to add.

        Returns:
            The attachment's size in bytes.

        Raises:
            AttachmentTooLargeError: If the size is unknown, exceeds the limit on
                its own, or would push the total over the limit.
        """
        size = attachment.size
        if size < 0 or size > self.max_total_size:
            raise AttachmentTooLargeError(attachment.display_name, size, self.max_total_size)
        if self.total_size() + size > self.max_total_size:
            raise AttachmentTooLargeError(attachment.display_name, size, self.max_total_size)

        self._attachments.append(attachment)
        return size

    def extend_fitting(self, attachments: Iterable[AttachmentMetadata]) -> list[AttachmentMetadata]:
        """Add every attachment that fits, logging and dropping the rest.

        Returns:
            The attachments that were dropped.
        """
        dropped = []
        for attachment in attachments:
            try:
                self.add(attachment)
            except AttachmentTooLargeError as exc:
                logger.warning(f"Dropping attachment: {exc.message}")
                dropped.append(attachment)
        return dropped

    def total_size(self) -> int:
        """Combined size of every attachment in bytes."""
        return sum(attachment.size for attachment in self._attachments)

    def clear(self) -> None:
        """Remove all attachments."""
        self._attachments.clear()

    def to_list(self) -> list[AttachmentMetadata]:
        """Return a copy of the attachments in insertion order."""
        return list(self._attachments)

    def __iter__(self) -> Iterator[AttachmentMetadata]:
        return iter(list(self._attachments))

    def __len__(self) -> int:
        return len(self._attachments)

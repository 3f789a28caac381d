"""Exception hierarchy for the composer core.

Exception Hierarchy:
    ComposerError (base)
    ├── InvalidActionError - operation called with an action it has no meaning for
    ├── MalformedAddressError - an address token could not be parsed (recoverable)
    ├── ReferenceMessageUnavailable - the message store has no such message
    └── AttachmentTooLargeError - an attachment would exceed the size limit
"""


class ComposerError(Exception):
    """Base exception for all composer errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidActionError(ComposerError):
    """Raised when an operation is invoked with an action it cannot handle.

    Recipient resolution, for example, has no meaning for a fresh composition.

    Args:
        action: The action that was passed in.
        operation: Name of the operation that rejected it.
    """

    def __init__(self, action: object, operation: str) -> None:
        self.action = action
        self.operation = operation
        value = getattr(action, "value", action)
        super().__init__(f"Action '{value}' is not valid for {operation}")


class MalformedAddressError(ComposerError):
    """Raised when an address token cannot be parsed into a mailbox.

    Callers that aggregate recipients catch this, log it and drop the token.

    Args:
        token: The raw token that failed to parse.
    """

    def __init__(self, token: str | None) -> None:
        self.token = token
        super().__init__(f"Malformed address token: {token!r}")


class ReferenceMessageUnavailable(ComposerError):
    """Raised by a message store when the requested message does not exist.

    Args:
        message_id: The identifier that was looked up.
    """

    def __init__(self, message_id: str) -> None:
        self.message_id = message_id
        super().__init__(f"Reference message '{message_id}' not found")


class AttachmentTooLargeError(ComposerError):
    """Raised when adding an attachment would exceed the size limit.

    Args:
        attachment_name: Display name of the rejected attachment.
        size: Its size in bytes (-1 when unknown).
        limit: The maximum total attachment size in bytes.
    """

    def __init__(self, attachment_name: str, size: int, limit: int) -> None:
        self.attachment_name = attachment_name
        self.size = size
        self.limit = limit
        if size < 0:
            message = f"Size of attachment '{attachment_name}' could not be determined"
        else:
            message = (
                f"Attachment '{attachment_name}' ({size} bytes) exceeds the "
                f"{limit} byte limit"
            )
        super().__init__(message)

"""Compose action enumeration."""

from enum import Enum

from composer.errors import InvalidActionError


class ComposeAction(str, Enum):
    """What the user is composing relative to a reference message.

    COMPOSE starts a fresh message and has no reference message semantics.
    REPLY, REPLY_ALL and FORWARD all start from a reference message.
    """

    COMPOSE = "compose"
    REPLY = "reply"
    REPLY_ALL = "reply_all"
    FORWARD = "forward"

    @property
    def is_reply(self) -> bool:
        """True for REPLY and REPLY_ALL."""
        return self in (ComposeAction.REPLY, ComposeAction.REPLY_ALL)

    @property
    def uses_reference(self) -> bool:
        """True for every action that starts from a reference message."""
        return self is not ComposeAction.COMPOSE


def coerce_action(value: object, operation: str) -> ComposeAction:
    """Convert an enum member or its string value into a ComposeAction.

    Args:
        value: A ComposeAction or one of its values (e.g. "reply_all").
        operation: Name of the calling operation, used in the error.

    Returns:
        The matching action.

    Raises:
        InvalidActionError: If the value names no action.
    """
    try:
        return ComposeAction(value)
    except ValueError as exc:
        raise InvalidActionError(value, operation) from exc

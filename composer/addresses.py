"""Address token parsing, normalization and cleanup.

Raw address tokens come straight out of message headers and may carry
display names, stray ``""`` artifacts left behind by earlier clients, or
several comma-separated mailboxes in one string. Everything in the composer
that compares addresses goes through :func:`iter_mailboxes` so that the
comparison key is always the lower-cased bare address.
"""

import html
import logging
import re
from collections.abc import Iterable, Iterator
from email.utils import getaddresses
from typing import Optional

from pydantic import BaseModel, Field

from composer.errors import MalformedAddressError

logger = logging.getLogger(__name__)

EMPTY_QUOTES = '""'
EMPTY_BRACKETS = "<>"

_ADDRESS_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
# Characters that force a display name to be quoted (RFC 5322 specials).
_NAME_SPECIALS = re.compile(r'[][\\()<>@,:;".]')


class Mailbox(BaseModel):
    """A single parsed mailbox.

    Args:
        name: Display name, empty when the token had none.
        address: Bare address with its original casing.
    """

    model_config = {"frozen": True}

    name: str = Field(default="", description="Display name")
    address: str = Field(description="Bare email address")

    @property
    def key(self) -> str:
        """Canonical comparison key: the lower-cased bare address."""
        return self.address.lower()

    @property
    def formatted(self) -> str:
        """Display form, ``Name <address>`` or just ``address``."""
        if not self.name:
            return self.address
        name = self.name
        if _NAME_SPECIALS.search(name):
            escaped = name.replace("\\", "\\\\").replace('"', '\\"')
            name = f'"{escaped}"'
        return f"{name} <{self.address}>"


def strip_empty_quotes(token: str) -> str:
    """Remove ``""`` artifacts from a raw token."""
    return token.replace(EMPTY_QUOTES, "")


def make_mailbox(name: str, address: str) -> Mailbox:
    """Build a validated Mailbox from a parsed (name, address) pair.

    Args:
        name: Display name as returned by the header parser.
        address: Bare address as returned by the header parser.

    Returns:
        The validated mailbox.

    Raises:
        MalformedAddressError: If the address is not a plausible mailbox.
    """
    address = address.strip()
    if not _ADDRESS_PATTERN.match(address):
        raw = f"{name} <{address}>" if name else address
        raise MalformedAddressError(raw)
    return Mailbox(name=name.strip(), address=address)


def parse_mailboxes(token: Optional[str]) -> list[Mailbox]:
    """Parse one raw token into every mailbox it contains.

    Args:
        token: A raw header value, possibly holding several mailboxes.

    Returns:
        The parsed mailboxes, in order.

    Raises:
        MalformedAddressError: If the token is empty or any mailbox in it
            cannot be parsed.
    """
    if token is None:
        raise MalformedAddressError(token)
    cleaned = strip_empty_quotes(token).strip()
    if not cleaned:
        raise MalformedAddressError(token)
    pairs = getaddresses([cleaned])
    if not pairs:
        raise MalformedAddressError(token)
    return [make_mailbox(name, address) for name, address in pairs]


def parse_mailbox(token: Optional[str]) -> Mailbox:
    """Parse a token that must hold exactly one mailbox.

    Raises:
        MalformedAddressError: If the token is unparsable or holds several mailboxes.
    """
    mailboxes = parse_mailboxes(token)
    if len(mailboxes) != 1:
        raise MalformedAddressError(token)
    return mailboxes[0]


def iter_mailboxes(tokens: Iterable[Optional[str]]) -> Iterator[Mailbox]:
    """Yield every parseable mailbox from a sequence of raw tokens.

    Unparsable pieces are logged and skipped; this never raises for bad input.

    Args:
        tokens: Raw header values.

    Yields:
        Parsed mailboxes in input order.
    """
    for token in tokens:
        if token is None or not strip_empty_quotes(token).strip():
            logger.warning(f"Skipping empty address token {token!r}")
            continue
        for name, address in getaddresses([strip_empty_quotes(token).strip()]):
            try:
                yield make_mailbox(name, address)
            except MalformedAddressError as exc:
                logger.warning(f"Skipping malformed address token {exc.token!r}")


def bare_address(token: str) -> str:
    """Return the bare address portion of a token, or the trimmed token itself."""
    pairs = getaddresses([strip_empty_quotes(token).strip()])
    if pairs and pairs[0][1]:
        return pairs[0][1]
    return token.strip()


def address_key(token: Optional[str]) -> Optional[str]:
    """Return the canonical comparison key of a single-mailbox token.

    Returns:
        The lower-cased bare address, or None when the token is unparsable.
    """
    try:
        return parse_mailbox(token).key
    except MalformedAddressError:
        return None


def clean_up_string(value: Optional[str], address: bool = True) -> str:
    """Prepare a header value for interpolation into quoted HTML.

    For address values, ``""`` artifacts and empty ``<>`` brackets are
    removed, whitespace is collapsed and one pair of surrounding double
    quotes is trimmed. Subjects (``address=False``) keep their text as is.
    The result is always HTML-escaped.

    Args:
        value: Raw header value.
        address: Whether the value holds addresses.

    Returns:
        The escaped, cleaned string ("" for a missing value).
    """
    if not value:
        return ""
    if address:
        value = strip_empty_quotes(value).replace(EMPTY_BRACKETS, "")
        value = " ".join(value.split())
        if len(value) >= 2 and value[0] == '"' and value[-1] == '"':
            value = value[1:-1].strip()
    return html.escape(value)


def join_addresses(tokens: Iterable[Optional[str]]) -> str:
    """Join raw tokens into one comma-separated header value, dropping blanks."""
    return ", ".join(token.strip() for token in tokens if token and token.strip())

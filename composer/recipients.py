"""Recipient resolution for replies and forwards."""

import logging
from collections.abc import Iterable
from typing import Optional

from composer.actions import ComposeAction, coerce_action
from composer.addresses import Mailbox, bare_address, iter_mailboxes, strip_empty_quotes
from composer.errors import InvalidActionError
from composer.message import RecipientSets, ReferenceMessage

logger = logging.getLogger(__name__)


class AddressSet:
    """Insertion-ordered set of mailboxes keyed by lower-cased bare address.

    The first mailbox seen for an address wins; later ones with a different
    display name or casing are dropped.
    """

    def __init__(self, mailboxes: Iterable[Mailbox] = ()) -> None:
        self._entries: dict[str, str] = {}
        for mailbox in mailboxes:
            self.add(mailbox)

    def add(self, mailbox: Mailbox, display: Optional[str] = None) -> bool:
        """Add a mailbox unless its address is already present.

        Args:
            mailbox: The parsed mailbox.
            display: Text to store instead of the mailbox's display form.

        Returns:
            True if the mailbox was added.
        """
        if mailbox.key in self._entries:
            return False
        self._entries[mailbox.key] = display or mailbox.formatted
        return True

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def to_list(self) -> list[str]:
        """Return the stored display forms in insertion order."""
        return list(self._entries.values())


def account_keys(account_email: str, account_aliases: Iterable[str] = ()) -> set[str]:
    """Build the comparison keys identifying the replying account.

    Args:
        account_email: The account's primary address (may carry a display name).
        account_aliases: Custom from addresses of the account.

    Returns:
        Lower-cased bare addresses for the account and its aliases.
    """
    keys = set()
    for token in [account_email, *account_aliases]:
        if token and token.strip():
            keys.add(bare_address(token).lower())
    return keys


class RecipientResolver:
    """Computes To/Cc/Bcc for a reply, reply-all or forward.

    The resolver holds no state; one instance can serve any number of
    concurrent callers.
    """

    def resolve(
        self,
        action: ComposeAction,
        account_email: str,
        account_aliases: Iterable[str],
        ref_message: Optional[ReferenceMessage],
    ) -> RecipientSets:
        """Resolve recipients for an action against a reference message.

        Args:
            action: REPLY, REPLY_ALL or FORWARD.
            account_email: Primary address of the replying account.
            account_aliases: Custom from addresses treated as the account itself.
            ref_message: The message being answered, or None when it could not
                be loaded.

        Returns:
            Freshly built recipient sets. Empty when the reference is missing.

        Raises:
            InvalidActionError: If the action is COMPOSE or unknown.
        """
        action = coerce_action(action, "recipient resolution")

        handlers = {
            ComposeAction.REPLY: self._resolve_reply,
            ComposeAction.REPLY_ALL: self._resolve_reply_all,
            ComposeAction.FORWARD: self._resolve_forward,
        }
        handler = handlers.get(action)
        if handler is None:
            raise InvalidActionError(action, "recipient resolution")

        if ref_message is None:
            logger.info(f"No reference message for {action.value}; nothing to resolve")
            return RecipientSets()

        self_keys = account_keys(account_email, account_aliases)
        recipients = handler(ref_message, self_keys)
        logger.debug(
            f"Resolved {action.value}: {len(recipients.to)} to, "
            f"{len(recipients.cc)} cc, {len(recipients.bcc)} bcc"
        )
        return recipients

    def resolve_to(
        self, ref_message: ReferenceMessage, self_keys: set[str]
    ) -> AddressSet:
        """Pick the To recipients of a reply.

        Replying to one's own message re-sends to the original recipients;
        otherwise Reply-To wins over the sender.

        Args:
            ref_message: The message being answered.
            self_keys: Comparison keys of the account and its aliases.

        Returns:
            The To recipients.
        """
        sender = _parse_sender(ref_message.from_address)

        if sender is not None and sender.key in self_keys:
            return _original_recipients(ref_message.to_addresses)

        reply_to = list(iter_mailboxes(ref_message.reply_to_addresses))
        if reply_to:
            return AddressSet(reply_to)

        if sender is not None:
            return AddressSet([sender])

        return _original_recipients(ref_message.to_addresses)

    def _resolve_reply(
        self, ref_message: ReferenceMessage, self_keys: set[str]
    ) -> RecipientSets:
        to = self.resolve_to(ref_message, self_keys)
        return RecipientSets(to=to.to_list())

    def _resolve_reply_all(
        self, ref_message: ReferenceMessage, self_keys: set[str]
    ) -> RecipientSets:
        to = self.resolve_to(ref_message, self_keys)

        cc = AddressSet()
        candidates = [*ref_message.to_addresses, *ref_message.cc_addresses]
        for mailbox in iter_mailboxes(candidates):
            if mailbox.key in self_keys or mailbox.key in to:
                continue
            cc.add(mailbox)

        return RecipientSets(to=to.to_list(), cc=cc.to_list())

    def _resolve_forward(
        self, ref_message: ReferenceMessage, self_keys: set[str]
    ) -> RecipientSets:
        # Forward recipients are always chosen by the user.
        return RecipientSets()


def resolve_recipients(
    action: ComposeAction,
    account_email: str,
    account_aliases: Iterable[str],
    ref_message: Optional[ReferenceMessage],
) -> RecipientSets:
    """Resolve recipients with a throwaway RecipientResolver.

    See RecipientResolver.resolve for arguments and errors.
    """
    return RecipientResolver().resolve(action, account_email, account_aliases, ref_message)


def _parse_sender(token: str) -> Optional[Mailbox]:
    # First valid mailbox wins; unquoted "Last, First <addr>" leaves a junk piece.
    if not token or not token.strip():
        return None
    for mailbox in iter_mailboxes([token]):
        return mailbox
    logger.warning(f"Ignoring unparsable sender {token!r}")
    return None


def _original_recipients(tokens: Iterable[str]) -> AddressSet:
    """Copy recipient tokens as written, minus "" artifacts and duplicates."""
    recipients = AddressSet()
    for token in tokens:
        mailboxes = list(iter_mailboxes([token]))
        if len(mailboxes) == 1:
            recipients.add(mailboxes[0], display=strip_empty_quotes(token).strip())
            continue
        for mailbox in mailboxes:
            recipients.add(mailbox)
    return recipients

"""Choosing which address a message is sent from."""

from typing import Optional

from pydantic import BaseModel, Field

from composer.message import AccountIdentity


class ReplyFromAccount(BaseModel):
    """One entry in the list of addresses a user can send from.

    Args:
        address: The address shown and used as From.
        display_name: Label for the entry.
        real_account: Account the message is actually sent through.
        is_custom_from: Whether the address is an alias of real_account.
    """

    model_config = {"frozen": True}

    address: str = Field(description="From address")
    display_name: str = Field(description="Label shown to the user")
    real_account: str = Field(description="Account the message is sent through")
    is_custom_from: bool = Field(default=False, description="Whether this is an alias")


def build_reply_from_accounts(
    identity: AccountIdentity,
    other_accounts: Optional[list[str]] = None,
    is_reply_or_forward: bool = False,
) -> list[ReplyFromAccount]:
    """List the addresses the user may send from.

    A reply or forward stays on the account that received the reference
    message, so only that account and its aliases are offered. A fresh
    composition offers every known account.

    Args:
        identity: The current account.
        other_accounts: Further accounts known on the device.
        is_reply_or_forward: Whether this composition answers a message.

    Returns:
        Candidate from addresses, current account first.
    """
    primary = identity.primary_address
    candidates = [
        ReplyFromAccount(
            address=primary,
            display_name=identity.display_name or primary,
            real_account=primary,
        )
    ]
    for alias in identity.aliases:
        candidates.append(
            ReplyFromAccount(
                address=alias,
                display_name=alias,
                real_account=primary,
                is_custom_from=True,
            )
        )

    if not is_reply_or_forward:
        for account in other_accounts or []:
            if account == primary:
                continue
            candidates.append(
                ReplyFromAccount(address=account, display_name=account, real_account=account)
            )

    return candidates


def select_reply_from_index(
    candidates: list[ReplyFromAccount],
    account: str,
    reply_from: Optional[str] = None,
) -> int:
    """Find which candidate should be preselected.

    When sending as the account itself, both the real account and the address
    must match so that an address shared by several accounts resolves to the
    right one. When sending as a custom from, the address alone decides.

    Args:
        candidates: Output of build_reply_from_accounts.
        account: The current real account.
        reply_from: Address the user is replying as, if known.

    Returns:
        Index into candidates; 0 when nothing matches.
    """
    check_real_account = reply_from is None or reply_from == account
    target = reply_from or account

    for index, candidate in enumerate(candidates):
        if check_real_account:
            if candidate.real_account == account and candidate.address == target:
                return index
        elif candidate.address == target:
            return index
    return 0

"""Unit tests for reply-from account selection."""

from composer.reply_from import (
    ReplyFromAccount,
    build_reply_from_accounts,
    select_reply_from_index,
)
from tests.fixtures.messages import create_account_identity


class TestBuildReplyFromAccounts:
    """Tests for build_reply_from_accounts."""

    def test_fresh_message_offers_every_account(self):
        identity = create_account_identity(aliases=["alias@x.com"], display_name="Me")

        candidates = build_reply_from_accounts(
            identity, other_accounts=["other@y.com", "me@x.com"]
        )

        assert [c.address for c in candidates] == ["me@x.com", "alias@x.com", "other@y.com"]
        assert candidates[0].display_name == "Me"
        assert candidates[1].is_custom_from
        assert candidates[1].real_account == "me@x.com"
        assert candidates[2].real_account == "other@y.com"

    def test_reply_stays_on_current_account(self):
        identity = create_account_identity(aliases=["alias@x.com"])

        candidates = build_reply_from_accounts(
            identity, other_accounts=["other@y.com"], is_reply_or_forward=True
        )

        assert [c.address for c in candidates] == ["me@x.com", "alias@x.com"]

    def test_display_name_defaults_to_address(self):
        candidates = build_reply_from_accounts(create_account_identity())
        assert candidates[0].display_name == "me@x.com"


class TestSelectReplyFromIndex:
    """Tests for select_reply_from_index."""

    def test_defaults_to_the_account(self):
        candidates = build_reply_from_accounts(create_account_identity(aliases=["alias@x.com"]))
        assert select_reply_from_index(candidates, "me@x.com") == 0

    def test_custom_from_matches_by_address(self):
        candidates = build_reply_from_accounts(create_account_identity(aliases=["alias@x.com"]))
        assert select_reply_from_index(candidates, "me@x.com", "alias@x.com") == 1

    def test_shared_address_matches_real_account(self):
        """When two accounts expose the same address, the real account decides."""
        candidates = [
            ReplyFromAccount(
                address="team@x.com",
                display_name="team",
                real_account="first@x.com",
                is_custom_from=True,
            ),
            ReplyFromAccount(
                address="team@x.com", display_name="team", real_account="team@x.com"
            ),
        ]
        assert select_reply_from_index(candidates, "team@x.com") == 1

    def test_no_match_falls_back_to_first(self):
        candidates = build_reply_from_accounts(create_account_identity())
        assert select_reply_from_index(candidates, "me@x.com", "nobody@x.com") == 0

"""Unit tests for the ComposeClient and AsyncComposeClient."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from client._compose import AsyncComposeClient, ComposeClient
from client.models import (
    AccountIdentity,
    AttachmentMetadata,
    ComposeAction,
    ComposeDraft,
    ComposedContent,
    RecipientSets,
)

NOW = datetime(2026, 1, 6, 9, 30, tzinfo=timezone.utc)
ACCOUNT = {"primary_address": "me@x.com"}


@pytest.fixture
def mock_http():
    return MagicMock()


@pytest.fixture
def mock_async_http():
    return AsyncMock()


class TestComposeClientRecipients:
    """Tests for ComposeClient.recipients."""

    def test_by_identifier(self, mock_http):
        mock_http.post.return_value = {"to": ["c@x.com"], "cc": [], "bcc": []}

        result = ComposeClient(mock_http).recipients(
            ComposeAction.REPLY, AccountIdentity(primary_address="me@x.com"), message_id="m1"
        )

        assert isinstance(result, RecipientSets)
        assert result.to == ["c@x.com"]
        mock_http.post.assert_called_once_with(
            "/compose/recipients",
            json={
                "action": "reply",
                "message_id": "m1",
                "account": {"primary_address": "me@x.com", "aliases": []},
            },
        )

    def test_inline_reference_with_string_action(self, mock_http):
        mock_http.post.return_value = {"to": [], "cc": [], "bcc": []}

        ComposeClient(mock_http).recipients(
            "reply_all", ACCOUNT, reference_message={"from": "c@x.com"}
        )

        _, kwargs = mock_http.post.call_args
        assert kwargs["json"] == {
            "action": "reply_all",
            "reference_message": {"from": "c@x.com"},
            "account": ACCOUNT,
        }


class TestComposeClientContent:
    """Tests for ComposeClient.content."""

    def test_sends_now_as_iso(self, mock_http):
        mock_http.post.return_value = {"subject": "Re: Hello", "quoted_body_html": "<div></div>"}

        result = ComposeClient(mock_http).content("reply", message_id="m1", now=NOW)

        assert isinstance(result, ComposedContent)
        assert result.subject == "Re: Hello"
        mock_http.post.assert_called_once_with(
            "/compose/content",
            json={"action": "reply", "message_id": "m1", "now": "2026-01-06T09:30:00+00:00"},
        )

    def test_omits_now(self, mock_http):
        mock_http.post.return_value = {"subject": "", "quoted_body_html": ""}

        ComposeClient(mock_http).content(ComposeAction.COMPOSE)

        _, kwargs = mock_http.post.call_args
        assert kwargs["json"] == {"action": "compose"}


class TestComposeClientDraft:
    """Tests for ComposeClient.draft."""

    def test_minimal_payload(self, mock_http):
        mock_http.post.return_value = {"action": "compose"}

        result = ComposeClient(mock_http).draft("compose", ACCOUNT)

        assert isinstance(result, ComposeDraft)
        assert result.action is ComposeAction.COMPOSE
        mock_http.post.assert_called_once_with(
            "/compose/draft", json={"action": "compose", "account": ACCOUNT}
        )

    def test_full_payload(self, mock_http):
        mock_http.post.return_value = {"action": "forward", "subject": "Fwd: Hello"}
        attachment = AttachmentMetadata(name="a.pdf", size=10)

        result = ComposeClient(mock_http).draft(
            ComposeAction.REPLY,
            ACCOUNT,
            message_id="m1",
            now=NOW,
            other_accounts=["other@y.com"],
            switch_to=ComposeAction.FORWARD,
            body="FYI",
            respond_inline=True,
            attachments=[attachment, {"name": "b.txt", "size": 2}],
        )

        assert result.subject == "Fwd: Hello"
        _, kwargs = mock_http.post.call_args
        assert kwargs["json"] == {
            "action": "reply",
            "message_id": "m1",
            "account": ACCOUNT,
            "now": "2026-01-06T09:30:00+00:00",
            "other_accounts": ["other@y.com"],
            "switch_to": "forward",
            "body": "FYI",
            "respond_inline": True,
            "attachments": [
                {"name": "a.pdf", "size": 10, "content_type": ""},
                {"name": "b.txt", "size": 2},
            ],
        }


class TestAsyncComposeClient:
    """Tests for the asynchronous AsyncComposeClient."""

    async def test_recipients(self, mock_async_http):
        mock_async_http.post.return_value = {"to": ["c@x.com"]}

        result = await AsyncComposeClient(mock_async_http).recipients(
            "reply", ACCOUNT, message_id="m1"
        )

        assert result.to == ["c@x.com"]
        mock_async_http.post.assert_awaited_once()
        args, _ = mock_async_http.post.call_args
        assert args == ("/compose/recipients",)

    async def test_content(self, mock_async_http):
        mock_async_http.post.return_value = {"subject": "Fwd: Hello"}

        result = await AsyncComposeClient(mock_async_http).content(
            "forward", reference_message={"subject": "Hello"}
        )

        assert result.subject == "Fwd: Hello"

    async def test_draft(self, mock_async_http):
        mock_async_http.post.return_value = {"action": "reply", "reference_available": False}

        result = await AsyncComposeClient(mock_async_http).draft(
            "reply", ACCOUNT, message_id="missing"
        )

        assert result.reference_available is False
        _, kwargs = mock_async_http.post.call_args
        assert kwargs["json"]["message_id"] == "missing"

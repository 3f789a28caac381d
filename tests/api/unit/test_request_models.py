"""Unit tests for the API request models."""

import pytest
from pydantic import ValidationError

from api.models import ReferenceSourceRequest
from api.routes.compose import DraftRequest
from api.routes.messages import StoreMessageRequest
from composer.actions import ComposeAction
from composer.errors import ReferenceMessageUnavailable
from tests.fixtures.messages import REPLY_ALL_MESSAGE


class TestReferenceSourceRequest:
    """Tests for ReferenceSourceRequest validation and lookup."""

    def test_message_id_only(self):
        request = ReferenceSourceRequest(action="reply", message_id="m1")
        assert request.action is ComposeAction.REPLY

    def test_inline_only(self):
        request = ReferenceSourceRequest(
            action="forward", reference_message={"from": "c@x.com", "subject": "Hi"}
        )
        assert request.reference_message.from_address == "c@x.com"

    def test_both_rejected(self):
        with pytest.raises(ValidationError, match="not both"):
            ReferenceSourceRequest(
                action="reply", message_id="m1", reference_message={"from": "c@x.com"}
            )

    def test_neither_rejected_for_reply(self):
        with pytest.raises(ValidationError, match="requires"):
            ReferenceSourceRequest(action="reply_all")

    def test_neither_accepted_for_compose(self):
        request = ReferenceSourceRequest(action="compose")
        assert request.message_id is None
        assert request.reference_message is None

    def test_load_reference_from_store(self, message_store):
        request = ReferenceSourceRequest(action="reply", message_id="m1")
        assert request.load_reference(message_store) == REPLY_ALL_MESSAGE

    def test_load_reference_inline(self, message_store):
        request = ReferenceSourceRequest(
            action="reply", reference_message={"from": "z@x.com"}
        )
        assert request.load_reference(message_store).from_address == "z@x.com"

    def test_load_reference_missing(self, message_store):
        request = ReferenceSourceRequest(action="reply", message_id="missing")
        with pytest.raises(ReferenceMessageUnavailable):
            request.load_reference(message_store)

    def test_load_reference_none_for_compose(self, message_store):
        request = ReferenceSourceRequest(action="compose")
        assert request.load_reference(message_store) is None


class TestDraftRequest:
    """Tests for DraftRequest defaults."""

    def test_defaults(self):
        request = DraftRequest(action="compose", account={"primary_address": "me@x.com"})

        assert request.other_accounts == []
        assert request.switch_to is None
        assert request.body == ""
        assert request.respond_inline is False
        assert request.attachments == []
        assert request.now is None

    def test_parses_now(self):
        request = DraftRequest(
            action="compose",
            account={"primary_address": "me@x.com"},
            now="2026-01-06T09:30:00Z",
        )
        assert request.now.hour == 9


class TestStoreMessageRequest:
    """Tests for StoreMessageRequest."""

    def test_identifier_optional(self):
        assert StoreMessageRequest(message={}).message_id is None

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValidationError):
            StoreMessageRequest(message={}, message_id="")

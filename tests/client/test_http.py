"""Unit tests for the composer client HTTP utilities.

This module tests the HTTP handling layer defined in client/_http.py:

1. Helper Functions:
   - _parse_error_response: Extracting error info from the service's bodies
   - _raise_for_status: Mapping HTTP status codes to exception types
   - _calculate_backoff: Exponential backoff calculation for retries

2. HTTPClient and AsyncHTTPClient:
   - Request methods and JSON decoding
   - Error mapping
   - Retry logic with exponential backoff

Note: These tests use httpx's mock transport to avoid real network calls.
"""

import json

import httpx
import pytest

import client._http as http_module
from client._http import (
    DEFAULT_RETRY_BACKOFF_BASE,
    DEFAULT_RETRY_BACKOFF_MAX,
    RETRYABLE_STATUS_CODES,
    AsyncHTTPClient,
    HTTPClient,
    _calculate_backoff,
    _parse_error_response,
    _raise_for_status,
)
from client.exceptions import (
    APIError,
    BadRequestError,
    ConnectionError,
    NotFoundError,
    PayloadTooLargeError,
    ServerError,
    TimeoutError,
    ValidationError,
)


@pytest.fixture(autouse=True)
def no_backoff(monkeypatch):
    """Make retry backoff instantaneous."""
    monkeypatch.setattr(http_module, "_calculate_backoff", lambda attempt: 0)


# =============================================================================
# Helper Function Tests
# =============================================================================


class TestParseErrorResponse:
    """Tests for _parse_error_response."""

    def test_service_error_body(self) -> None:
        response = httpx.Response(
            404,
            json={
                "error": "Reference Message Not Found",
                "detail": "Reference message 'm9' not found",
                "type": "ReferenceMessageUnavailable",
                "message_id": "m9",
            },
        )

        message, error_type, details = _parse_error_response(response)

        assert message == "Reference message 'm9' not found"
        assert error_type == "ReferenceMessageUnavailable"
        assert details == {"message_id": "m9"}

    def test_no_extra_keys(self) -> None:
        response = httpx.Response(400, json={"detail": "Invalid request"})
        assert _parse_error_response(response) == ("Invalid request", None, None)

    def test_request_validation_list(self) -> None:
        detail = [
            {"loc": ["body", "action"], "msg": "Input should be 'compose'", "type": "enum"},
            {"loc": ["body", "account"], "msg": "Field required", "type": "missing"},
        ]
        response = httpx.Response(422, json={"detail": detail})

        message, error_type, details = _parse_error_response(response)

        assert message == "action: Input should be 'compose'; account: Field required"
        assert error_type == "validation_error"
        assert details == {"errors": detail}

    def test_error_without_detail(self) -> None:
        response = httpx.Response(500, json={"error": "Internal Server Error"})
        assert _parse_error_response(response)[0] == "Internal Server Error"

    def test_plain_text_body(self) -> None:
        response = httpx.Response(502, text="Bad Gateway")
        assert _parse_error_response(response) == ("Bad Gateway", None, None)

    def test_empty_body(self) -> None:
        response = httpx.Response(503)
        assert _parse_error_response(response)[0] == "HTTP 503 error"


class TestRaiseForStatus:
    """Tests for _raise_for_status."""

    def test_success_does_not_raise(self) -> None:
        _raise_for_status(httpx.Response(200, json={}))

    def test_bad_request(self) -> None:
        response = httpx.Response(
            400,
            json={
                "detail": "Action 'compose' is not valid for recipient resolution",
                "type": "InvalidActionError",
                "action": "compose",
                "operation": "recipient resolution",
            },
        )

        with pytest.raises(BadRequestError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.error_type == "InvalidActionError"
        assert exc_info.value.details["action"] == "compose"

    def test_not_found_carries_message_id(self) -> None:
        response = httpx.Response(404, json={"detail": "missing", "message_id": "m9"})

        with pytest.raises(NotFoundError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.message_id == "m9"

    def test_payload_too_large_carries_limit(self) -> None:
        response = httpx.Response(
            413,
            json={"detail": "too big", "attachment": "b.pdf", "size": 50, "limit": 100},
        )

        with pytest.raises(PayloadTooLargeError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.limit == 100
        assert exc_info.value.details["attachment"] == "b.pdf"

    def test_validation(self) -> None:
        response = httpx.Response(
            422, json={"detail": [{"loc": ["body", "action"], "msg": "bad"}]}
        )
        with pytest.raises(ValidationError):
            _raise_for_status(response)

    @pytest.mark.parametrize("status_code", [500, 502, 503])
    def test_server_errors(self, status_code) -> None:
        response = httpx.Response(status_code, json={"detail": "boom"})

        with pytest.raises(ServerError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.status_code == status_code

    def test_other_status(self) -> None:
        response = httpx.Response(409, json={"detail": "conflict"})

        with pytest.raises(APIError) as exc_info:
            _raise_for_status(response)

        assert exc_info.value.status_code == 409
        assert exc_info.value.response_body == {"detail": "conflict"}


class TestCalculateBackoff:
    """Tests for _calculate_backoff."""

    def test_exponential(self) -> None:
        assert _calculate_backoff(0) == DEFAULT_RETRY_BACKOFF_BASE
        assert _calculate_backoff(1) == DEFAULT_RETRY_BACKOFF_BASE * 2
        assert _calculate_backoff(3) == DEFAULT_RETRY_BACKOFF_BASE * 8

    def test_capped(self) -> None:
        assert _calculate_backoff(20) == DEFAULT_RETRY_BACKOFF_MAX

    def test_retryable_codes(self) -> None:
        assert RETRYABLE_STATUS_CODES == {502, 503, 504}


# =============================================================================
# HTTPClient Tests
# =============================================================================


def make_sequence_transport(responses, seen=None):
    """Build a MockTransport that replays responses in order."""
    remaining = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        item = remaining.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return httpx.MockTransport(handler)


class TestHTTPClient:
    """Tests for the synchronous HTTPClient."""

    def test_strips_trailing_slash(self) -> None:
        with HTTPClient("http://test/") as client:
            assert client.base_url == "http://test"

    def test_post_sends_json(self) -> None:
        seen = []
        transport = make_sequence_transport([httpx.Response(200, json={"ok": True})], seen)

        with HTTPClient("http://test", transport=transport) as client:
            result = client.post("/compose/content", json={"action": "reply"})

        assert result == {"ok": True}
        assert seen[0].method == "POST"
        assert seen[0].url.path == "/compose/content"
        assert json.loads(seen[0].content) == {"action": "reply"}

    def test_get_drops_none_params(self) -> None:
        seen = []
        transport = make_sequence_transport([httpx.Response(200, json={})], seen)

        with HTTPClient("http://test", transport=transport) as client:
            client.get("/messages/m1", params={"a": "1", "b": None})

        assert dict(seen[0].url.params) == {"a": "1"}

    def test_empty_response_returns_none(self) -> None:
        transport = make_sequence_transport([httpx.Response(204)])

        with HTTPClient("http://test", transport=transport) as client:
            assert client.delete("/messages/m1") is None

    def test_error_is_mapped(self) -> None:
        transport = make_sequence_transport(
            [httpx.Response(404, json={"detail": "missing", "message_id": "m1"})]
        )

        with HTTPClient("http://test", transport=transport) as client:
            with pytest.raises(NotFoundError):
                client.get("/messages/m1")

    def test_connect_error(self) -> None:
        transport = make_sequence_transport([httpx.ConnectError("refused")])

        with HTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ConnectionError) as exc_info:
                client.get("/health")

        assert exc_info.value.url == "http://test/health"

    def test_timeout(self) -> None:
        transport = make_sequence_transport([httpx.ReadTimeout("slow")])

        with HTTPClient("http://test", timeout=2.0, transport=transport) as client:
            with pytest.raises(TimeoutError) as exc_info:
                client.get("/health")

        assert exc_info.value.timeout == 2.0

    def test_no_retry_by_default(self) -> None:
        transport = make_sequence_transport(
            [httpx.Response(503, json={"detail": "busy"}), httpx.Response(200, json={})]
        )

        with HTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ServerError):
                client.get("/health")

    def test_retries_retryable_status(self) -> None:
        seen = []
        transport = make_sequence_transport(
            [
                httpx.Response(503, json={"detail": "busy"}),
                httpx.Response(502, json={"detail": "gateway"}),
                httpx.Response(200, json={"status": "healthy"}),
            ],
            seen,
        )

        with HTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            assert client.get("/health") == {"status": "healthy"}

        assert len(seen) == 3

    def test_retries_connection_errors(self) -> None:
        transport = make_sequence_transport(
            [httpx.ConnectError("refused"), httpx.Response(200, json={"status": "healthy"})]
        )

        with HTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            assert client.get("/health") == {"status": "healthy"}

    def test_gives_up_after_max_retries(self) -> None:
        seen = []
        transport = make_sequence_transport(
            [httpx.Response(503, json={"detail": "busy"})] * 3, seen
        )

        with HTTPClient(
            "http://test", retry_enabled=True, max_retries=2, transport=transport
        ) as client:
            with pytest.raises(ServerError) as exc_info:
                client.get("/health")

        assert exc_info.value.status_code == 503
        assert len(seen) == 3

    def test_does_not_retry_client_errors(self) -> None:
        seen = []
        transport = make_sequence_transport(
            [httpx.Response(400, json={"detail": "bad"}), httpx.Response(200, json={})], seen
        )

        with HTTPClient("http://test", retry_enabled=True, transport=transport) as client:
            with pytest.raises(BadRequestError):
                client.post("/compose/recipients", json={})

        assert len(seen) == 1


# =============================================================================
# AsyncHTTPClient Tests
# =============================================================================


class TestAsyncHTTPClient:
    """Tests for the asynchronous AsyncHTTPClient."""

    async def test_post_returns_json(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))

        async with AsyncHTTPClient("http://test", transport=transport) as client:
            assert await client.post("/compose/draft", json={}) == {"ok": True}

    async def test_error_is_mapped(self) -> None:
        transport = httpx.MockTransport(
            lambda request: httpx.Response(413, json={"detail": "big", "limit": 10})
        )

        async with AsyncHTTPClient("http://test", transport=transport) as client:
            with pytest.raises(PayloadTooLargeError) as exc_info:
                await client.post("/compose/draft", json={})

        assert exc_info.value.limit == 10

    async def test_retries_retryable_status(self) -> None:
        seen = []
        transport = make_sequence_transport(
            [httpx.Response(504), httpx.Response(200, json={"status": "healthy"})], seen
        )

        async with AsyncHTTPClient(
            "http://test", retry_enabled=True, transport=transport
        ) as client:
            assert await client.get("/health") == {"status": "healthy"}

        assert len(seen) == 2

    async def test_connect_error(self) -> None:
        transport = make_sequence_transport([httpx.ConnectError("refused")])

        async with AsyncHTTPClient("http://test", transport=transport) as client:
            with pytest.raises(ConnectionError):
                await client.delete("/messages/m1")

"""Shared fixtures for API integration tests.

This module provides the TestClient setup with the message store and
settings injected through FastAPI's dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_message_store, get_settings
from main import app


@pytest.fixture
def client_with_store(message_store, api_settings):
    """Provide a TestClient with the test store and settings injected.

    Args:
        message_store: Store holding the reply-all message under "m1".
        api_settings: Settings to serve with.

    Yields:
        A tuple of (TestClient, InMemoryMessageStore) for testing.

    Example:
        def test_something(client_with_store):
            client, store = client_with_store
            response = client.get("/messages/m1")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_message_store] = lambda: message_store
    app.dependency_overrides[get_settings] = lambda: api_settings

    yield TestClient(app), message_store

    app.dependency_overrides.clear()

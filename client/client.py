"""Main Mail Composer client classes.

This module provides the entry points for interacting with the composer API:
- ComposerClient: Synchronous client
- AsyncComposerClient: Asynchronous client

Both clients expose the API through sub-client properties
(``client.messages`` and ``client.compose``).

Example:
    Synchronous usage::

        from client import ComposerClient

        with ComposerClient(base_url="http://localhost:8000") as client:
            stored = client.messages.store({"from": "a@x.com", "subject": "Hi"})
            draft = client.compose.draft(
                "reply",
                account={"primary_address": "me@x.com"},
                message_id=stored.message_id,
            )

    Asynchronous usage::

        from client import AsyncComposerClient

        async with AsyncComposerClient() as client:
            content = await client.compose.content("forward", message_id=message_id)
"""

from typing import Any

from client._compose import AsyncComposeClient, ComposeClient
from client._http import AsyncHTTPClient, HTTPClient
from client._messages import AsyncMessagesClient, MessagesClient
from client.models import HealthResponse


class ComposerClient:
    """Synchronous client for the Mail Composer REST API.

    Attributes:
        base_url: The base URL of the composer server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the composer server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry connection errors, timeouts and
                HTTP 502/503/504 with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom httpx transport (e.g., for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        # Sub-clients are created on first access
        self._messages: MessagesClient | None = None
        self._compose: ComposeClient | None = None

    def __enter__(self) -> "ComposerClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    @property
    def messages(self) -> MessagesClient:
        """Access reference message endpoints (/messages/*).

        Returns:
            MessagesClient for registering, fetching and removing messages.
        """
        if self._messages is None:
            self._messages = MessagesClient(self._http)
        return self._messages

    @property
    def compose(self) -> ComposeClient:
        """Access compose endpoints (/compose/*).

        Returns:
            ComposeClient for recipients, quoted content and drafts.
        """
        if self._compose is None:
            self._compose = ComposeClient(self._http)
        return self._compose

    def health(self) -> HealthResponse:
        """Check the server's health.

        Returns:
            The reported health status.
        """
        return HealthResponse(**self._http.get("/health"))


class AsyncComposerClient:
    """Asynchronous client for the Mail Composer REST API.

    Attributes:
        base_url: The base URL of the composer server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the async client.

        Args:
            base_url: The base URL of the composer server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry transient failures.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom httpx async transport (e.g., ASGITransport).
        """
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._messages: AsyncMessagesClient | None = None
        self._compose: AsyncComposeClient | None = None

    async def __aenter__(self) -> "AsyncComposerClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    @property
    def messages(self) -> AsyncMessagesClient:
        """Access reference message endpoints (/messages/*)."""
        if self._messages is None:
            self._messages = AsyncMessagesClient(self._http)
        return self._messages

    @property
    def compose(self) -> AsyncComposeClient:
        """Access compose endpoints (/compose/*)."""
        if self._compose is None:
            self._compose = AsyncComposeClient(self._http)
        return self._compose

    async def health(self) -> HealthResponse:
        """Check the server's health."""
        return HealthResponse(**(await self._http.get("/health")))

"""Base classes for the client's sub-clients.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient


def _dump(model: BaseModel | dict[str, Any]) -> dict[str, Any]:
    """Serialize a request payload, accepting models or plain dicts."""
    if isinstance(model, BaseModel):
        return model.model_dump(mode="json", exclude_none=True)
    return model


class BaseClient:
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._http.get(path, params=params)

    def _post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self._http.post(path, json=json)

    def _delete(self, path: str) -> Any:
        return self._http.delete(path)


class AsyncBaseClient:
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client for making requests.
    """

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._http.get(path, params=params)

    async def _post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return await self._http.post(path, json=json)

    async def _delete(self, path: str) -> Any:
        return await self._http.delete(path)

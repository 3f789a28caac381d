"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to the shared message store and composer settings.
"""

import logging
from typing import Annotated

from fastapi import Depends

from composer.config import ComposerSettings
from composer.store import InMemoryMessageStore

logger = logging.getLogger(__name__)


# Global state
# One store and one settings object per process, created when the app starts
_message_store: InMemoryMessageStore | None = None
_settings: ComposerSettings | None = None


def get_message_store() -> InMemoryMessageStore:
    """Get the shared message store.

    Returns:
        The shared InMemoryMessageStore instance.

    Raises:
        RuntimeError: If the service hasn't been initialized yet.

    Example:
        @router.get("/messages/{message_id}")
        async def get_message(message_id: str, store: MessageStoreDep):
            return store.get(message_id)
    """
    if _message_store is None:
        raise RuntimeError(
            "Message store not initialized. Call initialize_composer_service() first."
        )
    return _message_store


def get_settings() -> ComposerSettings:
    """Get the composer settings in effect.

    Falls back to the defaults when the service was never initialized, so the
    pure composition endpoints work without a lifespan.

    Returns:
        The active ComposerSettings.
    """
    if _settings is None:
        return ComposerSettings()
    return _settings


def initialize_composer_service(
    settings: ComposerSettings | None = None,
) -> InMemoryMessageStore:
    """Initialize the shared message store and settings.

    This should be called once when the FastAPI app starts up.

    Args:
        settings: Settings to serve with; defaults to ComposerSettings().

    Returns:
        The newly created message store.
    """
    global _message_store, _settings

    _settings = settings or ComposerSettings()
    _message_store = InMemoryMessageStore()
    logger.info(
        f"Composer service initialized (max attachment size "
        f"{_settings.max_attachment_size} bytes)"
    )
    return _message_store


def shutdown_composer_service() -> None:
    """Drop the shared store and settings.

    This should be called when the FastAPI app shuts down.
    """
    global _message_store, _settings

    if _message_store is not None:
        logger.info(f"Discarding {len(_message_store)} stored reference messages")
        _message_store.clear()

    _message_store = None
    _settings = None


# Type aliases for dependency injection
MessageStoreDep = Annotated[InMemoryMessageStore, Depends(get_message_store)]
SettingsDep = Annotated[ComposerSettings, Depends(get_settings)]

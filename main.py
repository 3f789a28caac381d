"""Main entry point for the Mail Composer FastAPI application.

This module creates and configures the FastAPI app instance that serves the
REST API for resolving reply recipients and composing quoted replies and
forwards.

To run the development server (uvicorn comes with the "serve" extra):
    uvicorn main:app --reload

To run in production:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_composer_service, shutdown_composer_service
from api.exceptions import (
    attachment_too_large_handler,
    generic_exception_handler,
    invalid_action_handler,
    reference_unavailable_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import compose as compose_routes
from api.routes import messages as messages_routes
from composer.config import load_settings
from composer.errors import (
    AttachmentTooLargeError,
    InvalidActionError,
    ReferenceMessageUnavailable,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Loads settings (including any .env file), configures logging and creates
    the shared message store before the app serves requests.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)

    logger.info("Starting Mail Composer")
    initialize_composer_service(settings)

    yield

    logger.info("Shutting down Mail Composer")
    shutdown_composer_service()


app = FastAPI(
    title="Mail Composer",
    description="API for resolving reply recipients and composing quoted replies and forwards",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Specific exceptions before general ones
app.add_exception_handler(InvalidActionError, invalid_action_handler)
app.add_exception_handler(ReferenceMessageUnavailable, reference_unavailable_handler)
app.add_exception_handler(AttachmentTooLargeError, attachment_too_large_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(messages_routes.router)
app.include_router(compose_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message.

    Returns:
        A dictionary with a welcome message.
    """
    return {
        "message": "Welcome to the Mail Composer API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring.

    Returns:
        A dictionary indicating the service is healthy.
    """
    return {"status": "healthy"}

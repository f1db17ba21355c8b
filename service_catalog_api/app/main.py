"""
Main entrypoint for the Service Catalog API.

This module assembles the FastAPI application, sets up logging,
manages the MongoDB client and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn service_catalog_api.app.main:app --port 8080

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo import MongoClient

from .api.router import router as api_router
from .core.config import settings
from .core.db import connect_client
from .core.logging_config import setup_logging
from .core.security import AuthMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect to MongoDB on startup and close the client on shutdown.

    A failed connection propagates and aborts startup.
    """
    client = connect_client()
    app.state.mongo_client = client
    try:
        yield
    finally:
        client.close()
        logger.info("MongoDB client closed")


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request input as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _format_validation_errors(exc)},
    )


def create_app(mongo_client: Optional[MongoClient] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    mongo_client : Optional[MongoClient]
        An already connected client, typically a test double.  When
        omitted the application connects to ``settings.mongodb_uri``
        during startup and closes the client on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    # Every path requires a bearer token, which browsers cannot send to
    # the interactive docs, so they are not served.
    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=None if mongo_client is not None else lifespan,
    )
    if mongo_client is not None:
        app.state.mongo_client = mongo_client

    app.add_middleware(AuthMiddleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(api_router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()

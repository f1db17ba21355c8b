"""Entry point for the Service Catalog API.

Starts the FastAPI application with Uvicorn.  Host, port and log
level come from the same environment variables as the application
settings (``HOST``, ``PORT``, ``LOG_LEVEL``); the MongoDB connection
string is read from ``MONGODB_URI``.  If the store cannot be reached
at startup the server exits.

Usage:
    python run.py
"""
import uvicorn

from service_catalog_api.app.core.config import settings


def main() -> None:
    """Serve the application until interrupted."""
    uvicorn.run(
        "service_catalog_api.app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

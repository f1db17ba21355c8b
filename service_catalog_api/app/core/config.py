"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts against a local MongoDB without any setup.  In a
production deployment you should override these via environment
variables (``MONGODB_URI`` and ``SECRET_KEY`` at the very least).
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Service Catalog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Connection string for the document store.  The database and
    # collection names scope every catalog operation.
    mongodb_uri: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "service_catalog")
    services_collection: str = os.getenv("SERVICES_COLLECTION", "services")

    # Every store call is abandoned after this many seconds and reported
    # as a store error.  Calls are never retried.
    store_timeout_seconds: float = float(os.getenv("STORE_TIMEOUT_SECONDS", "10"))

    # Upper bound for the ``pageSize`` query parameter.  ``0`` disables
    # the check.
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "0"))

    secret_key: str = os.getenv("SECRET_KEY", "change_me")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # Comma‑separated list of static bearer tokens for trusted clients
    # that should not need a signed token.  Example: API_TOKENS="t1,t2".
    api_tokens: str = os.getenv("API_TOKENS", "")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()

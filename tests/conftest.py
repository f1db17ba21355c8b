"""Pytest configuration and fixtures."""

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import mongomock
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from service_catalog_api.app.core.config import settings
from service_catalog_api.app.core.db import ServiceRepository, get_collection
from service_catalog_api.app.core.security import create_access_token
from service_catalog_api.app.main import create_app


@pytest.fixture
def mongo_client() -> mongomock.MongoClient:
    """Create a fresh in-memory MongoDB client."""
    return mongomock.MongoClient()


@pytest.fixture
def collection(mongo_client: mongomock.MongoClient):
    """The services collection the application reads and writes."""
    return get_collection(mongo_client, settings.services_collection)


@pytest.fixture
def repository(collection) -> ServiceRepository:
    return ServiceRepository(collection)


@pytest.fixture
def app(mongo_client: mongomock.MongoClient) -> FastAPI:
    return create_app(mongo_client=mongo_client)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header carrying a valid signed token."""
    return {"Authorization": f"Bearer {create_access_token({'sub': 'tests'})}"}


@pytest.fixture
def anonymous_client(app: FastAPI) -> TestClient:
    """HTTP client without credentials."""
    return TestClient(app)


@pytest.fixture
def client(app: FastAPI, auth_headers: dict[str, str]) -> Iterator[TestClient]:
    """HTTP client authenticated with a valid token."""
    test_client = TestClient(app)
    test_client.headers.update(auth_headers)
    yield test_client
    test_client.close()


@pytest.fixture
def seed(collection):
    """Insert catalog documents directly into the store.

    Entries get ids "1", "2", ... and creation times one minute apart
    in insertion order unless the caller provides them.
    """

    def _seed(*entries: dict) -> list[dict]:
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        documents = []
        for index, entry in enumerate(entries, start=1):
            document = {
                "_id": str(index),
                "description": "",
                "versions": ["1.0"],
                "created_at": base + timedelta(minutes=index),
            }
            document.update(entry)
            documents.append(document)
        if documents:
            collection.insert_many(documents)
        return documents

    return _seed

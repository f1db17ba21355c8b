"""
MongoDB integration for the service catalog.

This module creates the shared ``MongoClient`` (``connect_client``),
scopes collections inside the configured database
(``get_collection``) and exposes ``ServiceRepository``, a thin
accessor over the ``services`` collection used by the service layer.
The client is created once at application startup and stored on
``app.state``; the ``get_service_repository`` dependency hands each
request a repository bound to that client.

Every driver failure is re-raised as ``StoreError`` so callers only
need to handle a single exception type.  Timeouts are enforced by the
client (``timeoutMS``) and no call is retried.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .config import settings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the document store fails or times out."""


def connect_client(uri: Optional[str] = None) -> MongoClient:
    """Create a ``MongoClient`` and verify the server is reachable.

    The ping is the only call allowed to fail fatally: it runs during
    application startup, so an unreachable store aborts the process
    before any request is served.
    """
    timeout_ms = int(settings.store_timeout_seconds * 1000)
    client: MongoClient = MongoClient(
        uri or settings.mongodb_uri,
        timeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
        retryWrites=False,
        retryReads=False,
        tz_aware=True,
    )
    client.admin.command("ping")
    logger.info("Connected to MongoDB database %s", settings.mongodb_database)
    return client


def get_collection(client: MongoClient, collection_name: str) -> Collection:
    """Return ``collection_name`` inside the configured database."""
    return client[settings.mongodb_database][collection_name]


class ServiceRepository:
    """Collection-scoped store operations for catalog entries.

    Documents are keyed by ``_id`` (the entry id).  The repository
    contains no business rules; it only translates calls into driver
    operations and driver errors into ``StoreError``.
    """

    def __init__(self, collection: Collection) -> None:
        self.collection = collection

    def find(
        self,
        filter: Dict[str, Any],
        sort_field: str,
        sort_order: int,
        skip: int,
        limit: int,
    ) -> List[Dict[str, Any]]:
        try:
            cursor = (
                self.collection.find(filter)
                .sort(sort_field, sort_order)
                .skip(skip)
                .limit(limit)
            )
            return list(cursor)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def find_one(self, service_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.collection.find_one({"_id": service_id})
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def count(self, filter: Dict[str, Any]) -> int:
        try:
            return self.collection.count_documents(filter)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def insert(self, document: Dict[str, Any]) -> None:
        try:
            self.collection.insert_one(document)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def update(self, service_id: str, fields: Dict[str, Any]) -> int:
        """Set ``fields`` on the entry and return the number of matches."""
        try:
            result = self.collection.update_one({"_id": service_id}, {"$set": fields})
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return result.matched_count

    def delete(self, service_id: str) -> int:
        """Remove the entry and return the number of deleted documents."""
        try:
            result = self.collection.delete_one({"_id": service_id})
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return result.deleted_count


def get_service_repository(request: Request) -> ServiceRepository:
    """FastAPI dependency returning a repository bound to the shared client."""
    client = request.app.state.mongo_client
    return ServiceRepository(get_collection(client, settings.services_collection))

"""
Service layer for the service catalog.

``CatalogService`` implements the five catalog operations on top of a
``ServiceRepository``.  Identifiers and creation timestamps are
assigned here, never taken from the client.  Lookups that find
nothing return ``None``/``False`` and let the API layer decide on the
response; store failures propagate as ``StoreError``.

``list_services`` issues the page query and the count as two separate
store calls, so under concurrent writes ``total`` may not match the
returned page exactly.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from service_catalog_api.app.core.db import ServiceRepository
from service_catalog_api.app.schemas.service import (
    ServiceCreate,
    ServiceListResponse,
    ServiceRead,
    ServiceUpdate,
)
from service_catalog_api.app.services.validators import ListQuery

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # BSON dates keep milliseconds only; truncate so the created entry
    # equals what is read back later.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class CatalogService:
    """Operations on catalog entries."""

    @classmethod
    def list_services(cls, repository: ServiceRepository, query: ListQuery) -> ServiceListResponse:
        """Return one page of entries matching ``query`` and the total count."""
        pagination = query.pagination
        documents = repository.find(
            query.filter,
            sort_field=query.sort.field,
            sort_order=query.sort.order,
            skip=pagination.skip,
            limit=pagination.page_size,
        )
        total = repository.count(query.filter)
        return ServiceListResponse(
            data=[ServiceRead.from_document(doc) for doc in documents],
            page=pagination.page,
            page_size=pagination.page_size,
            total=total,
        )

    @classmethod
    def get_service(cls, repository: ServiceRepository, service_id: str) -> Optional[ServiceRead]:
        document = repository.find_one(service_id)
        if document is None:
            return None
        return ServiceRead.from_document(document)

    @classmethod
    def create_service(cls, repository: ServiceRepository, data: ServiceCreate) -> ServiceRead:
        """Persist a new entry with a generated id and creation time."""
        service = ServiceRead(
            id=str(uuid.uuid4()),
            name=data.name,
            description=data.description,
            versions=list(data.versions),
            created_at=_utcnow(),
        )
        document = service.model_dump(exclude={"id"})
        document["_id"] = service.id
        repository.insert(document)
        logger.info("Created service %s", service.id)
        return service

    @classmethod
    def update_service(cls, repository: ServiceRepository, service_id: str, data: ServiceUpdate) -> bool:
        """Replace the provided fields of an entry.

        Only ``name``, ``description`` and ``versions`` can change.
        Returns ``False`` when no entry has ``service_id``.
        """
        matched = repository.update(service_id, data.changes())
        if matched:
            logger.info("Updated service %s", service_id)
        return matched > 0

    @classmethod
    def delete_service(cls, repository: ServiceRepository, service_id: str) -> bool:
        """Delete an entry; returns ``False`` if nothing was removed."""
        deleted = repository.delete(service_id)
        if deleted:
            logger.info("Deleted service %s", service_id)
        return deleted > 0

"""
Catalog endpoints.

These routes expose CRUD operations for catalog entries.  Listing
supports pagination (``page``, ``pageSize``), sorting (``sortField``,
``sortOrder``) and a free text ``search`` over name and description.
Authentication is enforced by the application middleware.

Handlers are plain functions; FastAPI runs them in its worker thread
pool so blocking store calls do not stall the event loop.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from service_catalog_api.app.core.db import ServiceRepository, StoreError, get_service_repository
from service_catalog_api.app.schemas.service import (
    MessageResponse,
    ServiceCreate,
    ServiceListResponse,
    ServiceRead,
    ServiceUpdate,
)
from service_catalog_api.app.services.catalog_service import CatalogService
from service_catalog_api.app.services.validators import parse_list_query

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Service not found"


def _store_failure(operation: str, exc: StoreError) -> HTTPException:
    logger.error("Store error during %s: %s", operation, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.get("", response_model=ServiceListResponse)
def list_services(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    sort_field: Optional[str] = Query(None, alias="sortField"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    search: Optional[str] = Query(None),
    repository: ServiceRepository = Depends(get_service_repository),
) -> ServiceListResponse:
    """List catalog entries.

    - **page**, **pageSize** : pagination, both integers >= 1 (defaults 1 and 10).
    - **sortField** : `name` or `created_at` (default).
    - **sortOrder** : `1` ascending (default) or `-1` descending.
    - **search** : case-insensitive substring of name or description.
    """
    try:
        query = parse_list_query(page, page_size, sort_field, sort_order, search)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    try:
        return CatalogService.list_services(repository, query)
    except StoreError as e:
        raise _store_failure("list", e) from e


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(
    service_id: str,
    repository: ServiceRepository = Depends(get_service_repository),
) -> ServiceRead:
    """Retrieve a single entry by id.  Returns 404 if it does not exist."""
    try:
        service = CatalogService.get_service(repository, service_id)
    except StoreError as e:
        raise _store_failure("get", e) from e
    if service is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return service


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(
    service_in: ServiceCreate,
    repository: ServiceRepository = Depends(get_service_repository),
) -> ServiceRead:
    """Create an entry.  ``id`` and ``created_at`` are assigned by the server."""
    try:
        return CatalogService.create_service(repository, service_in)
    except StoreError as e:
        raise _store_failure("create", e) from e


@router.put("/{service_id}", response_model=MessageResponse)
def update_service(
    service_id: str,
    service_in: ServiceUpdate,
    repository: ServiceRepository = Depends(get_service_repository),
) -> MessageResponse:
    """Replace ``name``, ``description`` and/or ``versions`` of an entry."""
    if not service_in.changes():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one of name, description or versions is required",
        )
    try:
        updated = CatalogService.update_service(repository, service_id, service_in)
    except StoreError as e:
        raise _store_failure("update", e) from e
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return MessageResponse(message="Service updated successfully")


@router.delete("/{service_id}", response_model=MessageResponse)
def delete_service(
    service_id: str,
    repository: ServiceRepository = Depends(get_service_repository),
) -> MessageResponse:
    """Delete an entry.  Returns 404 if nothing was removed."""
    try:
        deleted = CatalogService.delete_service(repository, service_id)
    except StoreError as e:
        raise _store_failure("delete", e) from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return MessageResponse(message="Service deleted successfully")

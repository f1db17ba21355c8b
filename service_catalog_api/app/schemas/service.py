"""
Pydantic schemas for catalog entries.

A catalog entry ("service") has a system generated ``id``, a required
``name``, an optional ``description``, a list of ``versions`` and a
``created_at`` timestamp set on creation.  Request schemas never
accept ``id`` or ``created_at``; unknown keys in request bodies are
ignored.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ServiceCreate(BaseModel):
    """Schema for creating a new catalog entry."""

    name: str = Field(..., min_length=1, description="Display name of the service")
    description: str = Field("", description="Free text description")
    versions: List[str] = Field(default_factory=list, description="Published versions, in order")


class ServiceUpdate(BaseModel):
    """Schema for updating a catalog entry.

    Only the fields present in the request body are replaced; ``versions``
    is replaced as a whole.
    """

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    versions: Optional[List[str]] = None

    @field_validator("name", "description", "versions")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Return the fields that were sent in the request."""
        return self.model_dump(exclude_unset=True)


class ServiceRead(BaseModel):
    """Schema for reading a catalog entry."""

    id: str
    name: str
    description: str = ""
    versions: List[str] = Field(default_factory=list)
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # The driver returns naive datetimes unless the client is tz aware.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ServiceRead":
        """Build the schema from a stored document keyed by ``_id``."""
        return cls(
            id=document["_id"],
            name=document["name"],
            description=document.get("description") or "",
            versions=document.get("versions") or [],
            created_at=document["created_at"],
        )


class ServiceListResponse(BaseModel):
    """One page of catalog entries plus the total number of matches."""

    model_config = ConfigDict(populate_by_name=True)

    data: List[ServiceRead]
    page: int
    page_size: int = Field(..., alias="pageSize")
    total: int


class MessageResponse(BaseModel):
    """Confirmation returned by update and delete."""

    message: str

"""
User entity model.

This module contains the document entity stored in the ``users`` collection.
Documents keep the camelCase field names of the public JSON contract
(``createdAt``, ``updatedAt``) and the identifier lives in ``_id``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, Field

USERS_COLLECTION = "users"

DEFAULT_STATUS = "ACTIVE"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (BSON dates come back naive)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_storage_datetime(value: Optional[datetime]) -> Optional[datetime]:
    """Convert to the naive UTC datetime BSON stores."""
    if value is None:
        return None
    return as_utc(value).replace(tzinfo=None)


def to_object_id(entity_id: str) -> Any:
    """Map a string id to the value stored in ``_id``.

    Valid 24-hex strings are stored as ``ObjectId``; anything else is kept
    as the raw string.
    """
    if ObjectId.is_valid(entity_id):
        return ObjectId(entity_id)
    return entity_id


class User(BaseModel):
    """A user document.

    Includes the profile fields, the account status and audit timestamps.
    Field validation happens on the API schemas; the entity only carries data.
    """

    id: Optional[str] = Field(default=None, description="ObjectId hex string")
    name: str = Field(description="Display name of the user")
    email: str = Field(description="Unique e-mail address")
    phone: Optional[str] = Field(default=None, description="Phone number (international format)")
    role: str = Field(description="Role of the user (ADMIN, USER, GUEST)")
    status: str = Field(default=DEFAULT_STATUS, description="Account status (ACTIVE, INACTIVE, SUSPENDED)")
    address: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = Field(default=None)

    def to_document(self) -> Dict[str, Any]:
        """Build the MongoDB document for this user."""
        document: Dict[str, Any] = {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "status": self.status,
            "address": self.address,
            "createdAt": to_storage_datetime(self.created_at),
            "updatedAt": to_storage_datetime(self.updated_at),
        }
        if self.id:
            document["_id"] = to_object_id(self.id)
        return document

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> User:
        """Rebuild a user from a MongoDB document."""
        created_at = document.get("createdAt")
        updated_at = document.get("updatedAt")
        return cls(
            id=str(document["_id"]),
            name=document["name"],
            email=document["email"],
            phone=document.get("phone"),
            role=document["role"],
            status=document.get("status") or DEFAULT_STATUS,
            address=document.get("address"),
            created_at=as_utc(created_at) if created_at else utc_now(),
            updated_at=as_utc(updated_at) if updated_at else None,
        )

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role})"

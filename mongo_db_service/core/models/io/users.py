"""
Schema models for user API requests and responses.

These schemas are used for API serialization/deserialization and are separate
from the entity models to allow independent evolution of API contracts.
JSON keys are camelCase; snake_case keys are accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from mongo_db_service.core.database.entities.users import DEFAULT_STATUS, as_utc

PHONE_PATTERN = r"^\+?[0-9. ()-]{7,25}$"

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=100)]
RoleStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PhoneStr = Annotated[str, StringConstraints(pattern=PHONE_PATTERN)]


def normalize_email(value: str) -> str:
    """Normalize an e-mail address the way ``EmailStr`` stores it.

    Addresses that do not validate are returned unchanged.
    """
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        return value


def format_instant(value: datetime) -> str:
    """Render a datetime as ``yyyy-MM-ddTHH:mm:ss.SSSZ`` in UTC."""
    value = as_utc(value)
    return f"{value.strftime('%Y-%m-%dT%H:%M:%S')}.{value.microsecond // 1000:03d}Z"


class CamelModel(BaseModel):
    """Base for schemas exchanged as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserBase(CamelModel):
    """Validated user fields shared by create and update payloads."""

    name: NameStr = Field(description="Name of the user, 2 to 100 characters")
    email: EmailStr = Field(description="Valid and unique e-mail address")
    phone: Optional[PhoneStr] = Field(default=None, description="Phone number (international format)")
    role: RoleStr = Field(description="Role of the user (e.g. ADMIN, USER, GUEST)")
    status: RoleStr = Field(default=DEFAULT_STATUS, description="Account status (e.g. ACTIVE, INACTIVE, SUSPENDED)")
    address: Optional[str] = Field(default=None, description="Postal address")

    @field_validator("status", mode="before")
    @classmethod
    def _null_status_is_default(cls, value):
        return DEFAULT_STATUS if value is None else value


class UserCreate(UserBase):
    """Schema for creating a user. A blank id lets the store generate one."""

    id: Optional[str] = Field(default=None, description="Optional client-chosen id")


class UserUpdate(UserBase):
    """Schema for replacing the mutable fields of a user."""

    pass


class UserPatch(CamelModel):
    """Schema for partially updating a user."""

    name: Optional[NameStr] = None
    email: Optional[EmailStr] = None
    phone: Optional[PhoneStr] = None
    role: Optional[RoleStr] = None
    status: Optional[RoleStr] = None
    address: Optional[str] = None


class UserRead(CamelModel):
    """Schema for reading a user."""

    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    status: str
    address: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_serializer("created_at", "updated_at")
    def _serialize_instant(self, value: Optional[datetime]) -> Optional[str]:
        return format_instant(value) if value is not None else None

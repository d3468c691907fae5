"""
Response envelope and error body models.

Every successful endpoint answers with an ``ApiResponse`` envelope and every
handled failure with an ``ApiError`` body.
"""

from __future__ import annotations

from datetime import datetime
from http import HTTPStatus
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from mongo_db_service.core.database.entities.users import utc_now

from .users import format_instant

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int = Field(description="HTTP status code of the response")
    status: str = Field(description="Status marker (SUCCESS, ERROR)")
    message: str = Field(description="Additional descriptive message")
    data: Optional[T] = Field(default=None, description="Response data payload")


class ApiError(BaseModel):
    """Error body returned by the exception handlers."""

    timestamp: datetime = Field(default_factory=utc_now)
    status: int
    error: str
    message: str
    path: str

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return format_instant(value)

    @classmethod
    def of(cls, status_code: int, message: str, path: str) -> ApiError:
        """Build an error body for ``status_code`` with its standard reason phrase."""
        return cls(status=status_code, error=HTTPStatus(status_code).phrase, message=message, path=path)

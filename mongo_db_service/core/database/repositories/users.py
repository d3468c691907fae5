"""
User repository implementation.

This module provides data access operations for the ``users`` collection,
including CRUD operations and the derived lookups (by e-mail, role, status,
name fragment, creation time and e-mail domain).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from mongo_db_service.core.errors import DuplicateResourceError, ResourceNotFoundError
from mongo_db_service.core.logging_config import get_logger

from ..entities.users import User, to_object_id, to_storage_datetime, utc_now
from .base import AsyncBaseRepository, QueryBuilder

logger = get_logger(__name__)

# Filter names accepted by ``list`` mapped to document fields
EQUALITY_FILTERS = {
    "role": "role",
    "status": "status",
    "email": "email",
}

DEFAULT_SORT = [("createdAt", ASCENDING)]


def _duplicate_error(user: User, error: DuplicateKeyError) -> DuplicateResourceError:
    key_pattern = (error.details or {}).get("keyPattern") or {}
    if "_id" in key_pattern:
        return DuplicateResourceError(f"User already exists with id: {user.id}")
    return DuplicateResourceError(f"User already exists with email: {user.email}")


class UserRepository(AsyncBaseRepository[User]):
    """Repository for user documents."""

    def __init__(self, collection: Any) -> None:
        """Initialize repository with the users collection.

        Args:
            collection: Async handle on the ``users`` collection
        """
        super().__init__(collection, User)

    async def _find(
        self, query: Dict[str, Any], limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[User]:
        cursor = self.collection.find(query, sort=DEFAULT_SORT, **QueryBuilder.pagination(limit, offset))
        documents = await cursor.to_list(length=None)
        return [User.from_document(document) for document in documents]

    async def create(self, user: User) -> User:
        """Insert a new user document.

        A fresh ObjectId is generated when the user carries no id.

        Args:
            user: User to persist

        Returns:
            The stored user, id included

        Raises:
            DuplicateResourceError: The e-mail or id is already taken
        """
        if user.updated_at is None:
            user.updated_at = utc_now()
        document = user.to_document()
        document.setdefault("_id", ObjectId())
        try:
            await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key on insert for email={user.email}: {e}")
            raise _duplicate_error(user, e) from e
        return User.from_document(document)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by id.

        Args:
            user_id: User id

        Returns:
            User or None
        """
        document = await self.collection.find_one({"_id": to_object_id(user_id)})
        return User.from_document(document) if document else None

    async def update(self, user: User) -> User:
        """Replace an existing user document and refresh ``updated_at``.

        Args:
            user: User with updated fields; ``id`` selects the document

        Returns:
            Updated user

        Raises:
            ResourceNotFoundError: No document has this id
            DuplicateResourceError: The new e-mail belongs to another user
        """
        if not user.id:
            raise ValueError("Cannot update a user without an id")
        user.updated_at = utc_now()
        document = user.to_document()
        document.pop("_id", None)
        try:
            result = await self.collection.replace_one({"_id": to_object_id(user.id)}, document)
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key on update of user id={user.id}: {e}")
            raise _duplicate_error(user, e) from e
        if result.matched_count == 0:
            raise ResourceNotFoundError(f"User not found: {user.id}")
        return user

    async def delete(self, user_id: str) -> bool:
        """Delete a user by id.

        Args:
            user_id: User id to delete

        Returns:
            True if deleted, False if not found
        """
        result = await self.collection.delete_one({"_id": to_object_id(user_id)})
        return result.deleted_count > 0

    async def list(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[User]:
        """List users with optional pagination and filtering.

        Args:
            limit: Maximum documents to return
            offset: Documents to skip
            filters: ``role``, ``status`` and ``email`` (exact), ``name``
                (contains, case-insensitive), ``email_domain`` and
                ``created_after`` (datetime)

        Returns:
            List of users ordered by creation time
        """
        query: Dict[str, Any] = {}
        if filters:
            QueryBuilder.apply_filters(query, filters, EQUALITY_FILTERS)
            if filters.get("name"):
                query["name"] = QueryBuilder.contains_ignore_case(filters["name"])
            if filters.get("email_domain"):
                query["email"] = QueryBuilder.ends_with_ignore_case(f"@{filters['email_domain'].lstrip('@')}")
            if filters.get("created_after") is not None:
                query["createdAt"] = {"$gt": to_storage_datetime(filters["created_after"])}
        return await self._find(query, limit, offset)

    async def find_all(self) -> List[User]:
        """Get every user."""
        return await self._find({})

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by e-mail.

        Args:
            email: User e-mail

        Returns:
            User or None
        """
        document = await self.collection.find_one({"email": email})
        return User.from_document(document) if document else None

    async def exists_by_email(self, email: str) -> bool:
        """Check whether a user with the given e-mail exists."""
        document = await self.collection.find_one({"email": email}, {"_id": 1})
        return document is not None

    async def find_by_role(self, role: str) -> List[User]:
        """Find all users with a given role."""
        return await self._find({"role": role})

    async def find_by_status(self, status: str) -> List[User]:
        """Find all users by status (ACTIVE, INACTIVE, SUSPENDED, ...)."""
        return await self._find({"status": status})

    async def find_by_name_containing(self, name_part: str) -> List[User]:
        """Find all users whose name contains the fragment, ignoring case."""
        return await self._find({"name": QueryBuilder.contains_ignore_case(name_part)})

    async def find_created_after(self, timestamp: datetime) -> List[User]:
        """Find users created strictly after ``timestamp``."""
        return await self._find({"createdAt": {"$gt": to_storage_datetime(timestamp)}})

    async def find_by_email_domain(self, domain: str) -> List[User]:
        """Find users whose e-mail belongs to ``domain`` (e.g. "gmail.com"), ignoring case."""
        return await self._find({"email": QueryBuilder.ends_with_ignore_case(f"@{domain.lstrip('@')}")})

"""
User Service.

Business rules for managing users on top of the ``UserRepository``:
not-found handling, e-mail uniqueness, id generation and field copying on
updates.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mongo_db_service.core.database.entities.users import User, utc_now
from mongo_db_service.core.database.repositories.users import UserRepository
from mongo_db_service.core.errors import DuplicateResourceError, ResourceNotFoundError
from mongo_db_service.core.logging_config import get_logger
from mongo_db_service.core.models.io.users import normalize_email

logger = get_logger(__name__)

# Fields copied from a payload onto the stored user on update
UPDATABLE_FIELDS = ("name", "email", "phone", "role", "status", "address")

# Fields that may not be cleared by a partial update
REQUIRED_FIELDS = ("name", "email", "role", "status")


class UserService:
    """Service layer for user CRUD operations."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def find_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[User]:
        """Get users from the database, optionally filtered and paginated."""
        if filters or limit is not None or offset is not None:
            logger.info(f"Retrieving users with filters={filters} limit={limit} offset={offset}")
            return await self.repository.list(limit=limit, offset=offset, filters=filters)
        logger.info("Retrieving all users from MongoDB")
        return await self.repository.find_all()

    async def find_by_id(self, user_id: str) -> User:
        """Find user by id or raise ``ResourceNotFoundError``."""
        logger.info(f"Searching user by id={user_id}")
        user = await self.repository.get_by_id(user_id)
        if user is None:
            logger.error(f"User not found with id={user_id}")
            raise ResourceNotFoundError(f"User not found: {user_id}")
        return user

    async def find_by_email(self, email: str) -> User:
        """Find user by e-mail or raise ``ResourceNotFoundError``.

        The address is normalized as on create, so any spelling that
        validates to the stored form matches.
        """
        logger.info(f"Searching user by email={email}")
        user = await self.repository.find_by_email(normalize_email(email))
        if user is None:
            logger.error(f"User not found with email={email}")
            raise ResourceNotFoundError(f"User not found with email: {email}")
        return user

    async def create(self, user: User) -> User:
        """
        Create a new user.

        A blank id is dropped so that MongoDB generates one.

        Raises:
            DuplicateResourceError: The e-mail or the explicit id is taken.
        """
        if not (user.id and user.id.strip()):
            user.id = None
        elif await self.repository.get_by_id(user.id) is not None:
            raise DuplicateResourceError(f"User already exists with id: {user.id}")

        if await self.repository.exists_by_email(user.email):
            logger.warning(f"Rejecting new user, email={user.email} already registered")
            raise DuplicateResourceError(f"User already exists with email: {user.email}")

        user.updated_at = utc_now()
        logger.info(f"Saving new user with email={user.email} and role={user.role}")
        return await self.repository.create(user)

    async def update(self, user_id: str, updated: User) -> User:
        """Replace the mutable fields of an existing user."""
        existing = await self.find_by_id(user_id)
        logger.info(f"Updating user id={user_id} with new values")

        changes = updated.model_dump(include=set(UPDATABLE_FIELDS))
        return await self._apply(existing, changes)

    async def patch(self, user_id: str, changes: Dict[str, Any]) -> User:
        """Copy only the provided fields onto an existing user."""
        existing = await self.find_by_id(user_id)
        logger.info(f"Patching user id={user_id} fields={sorted(changes)}")

        for field in REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                raise ValueError(f"{field} cannot be null")
        return await self._apply(existing, {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS})

    async def delete(self, user_id: str) -> None:
        """Delete a user by id."""
        existing = await self.find_by_id(user_id)
        logger.info(f"Deleting user with id={user_id} and email={existing.email}")
        await self.repository.delete(user_id)

    async def _apply(self, existing: User, changes: Dict[str, Any]) -> User:
        new_email = changes.get("email")
        if new_email and new_email != existing.email:
            owner = await self.repository.find_by_email(new_email)
            if owner is not None and owner.id != existing.id:
                logger.warning(f"Rejecting update of user id={existing.id}, email={new_email} already registered")
                raise DuplicateResourceError(f"User already exists with email: {new_email}")

        for field, value in changes.items():
            setattr(existing, field, value)
        return await self.repository.update(existing)

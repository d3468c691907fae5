"""
Base repository interfaces and utilities.

This module provides the foundational repository patterns and interfaces
used across all repository implementations in the database layer.
Built on the async PyMongo collection API.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel

# Generic type for document entities
EntityType = TypeVar("EntityType", bound=BaseModel)


class AsyncBaseRepository(ABC, Generic[EntityType]):
    """Base async repository interface with common CRUD operations over a MongoDB collection."""

    def __init__(self, collection: Any, model: Type[EntityType]) -> None:
        """Initialize repository with an async collection and the entity class.

        Args:
            collection: Async collection handle (``AsyncCollection`` or a compatible mock)
            model: Entity class for this repository
        """
        self.collection = collection
        self.model = model

    @abstractmethod
    async def create(self, entity: EntityType) -> EntityType:
        """Create a new document.

        Args:
            entity: Entity instance to persist

        Returns:
            Persisted entity with generated fields populated
        """

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> Optional[EntityType]:
        """Get entity by its identifier.

        Args:
            entity_id: Document id

        Returns:
            Entity instance or None if not found
        """

    @abstractmethod
    async def update(self, entity: EntityType) -> EntityType:
        """Replace an existing document.

        Args:
            entity: Entity instance with updated fields

        Returns:
            Updated entity instance
        """

    @abstractmethod
    async def delete(self, entity_id: str) -> bool:
        """Delete a document by its identifier.

        Args:
            entity_id: Document id

        Returns:
            True if deleted, False if not found
        """

    @abstractmethod
    async def list(
        self, limit: Optional[int] = None, offset: Optional[int] = None, filters: Optional[Dict[str, Any]] = None
    ) -> List[EntityType]:
        """List entities with optional pagination and filtering.

        Args:
            limit: Maximum number of documents to return
            offset: Number of documents to skip
            filters: Dictionary of field filters

        Returns:
            List of entity instances
        """


class QueryBuilder:
    """Utility class for building MongoDB query documents."""

    @staticmethod
    def apply_filters(query: Dict[str, Any], filters: Dict[str, Any], fields: Dict[str, str]) -> Dict[str, Any]:
        """Add equality filters to a query document.

        Args:
            query: Query document to extend
            filters: Dictionary of field filters
            fields: Mapping of accepted filter names to document field names

        Returns:
            The extended query document
        """
        for key, value in filters.items():
            if value is not None and key in fields:
                query[fields[key]] = value
        return query

    @staticmethod
    def contains_ignore_case(value: str) -> Dict[str, Any]:
        """Case-insensitive substring match, with the value taken literally."""
        return {"$regex": re.escape(value), "$options": "i"}

    @staticmethod
    def ends_with_ignore_case(value: str) -> Dict[str, Any]:
        """Case-insensitive suffix match, with the value taken literally."""
        return {"$regex": f"{re.escape(value)}$", "$options": "i"}

    @staticmethod
    def pagination(limit: Optional[int], offset: Optional[int]) -> Dict[str, int]:
        """Build ``find()`` keyword arguments for pagination.

        Args:
            limit: Maximum number of documents
            offset: Number of documents to skip

        Returns:
            ``skip``/``limit`` keyword arguments (0 means no bound)
        """
        return {"skip": offset or 0, "limit": limit or 0}

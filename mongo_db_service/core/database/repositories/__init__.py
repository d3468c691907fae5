"""
Data access layer, one repository per collection.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .users import UserRepository

__all__ = ["AsyncBaseRepository", "QueryBuilder", "UserRepository"]

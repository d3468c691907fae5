"""
Database entity models.

Entities are the documents persisted in MongoDB, one module per collection.
"""

from .users import USERS_COLLECTION, User

__all__ = ["USERS_COLLECTION", "User"]

"""
MongoDB data layer for mongo-db-service.

Structure:
- entities/: Document models, one module per collection
- repositories/: Data access layer, one repository per collection
- session.py: Shared client, database dependency, index setup and ping
"""

from .session import (
    close_db,
    get_client,
    get_database,
    init_db,
    ping_database,
)

__all__ = [
    "close_db",
    "get_client",
    "get_database",
    "init_db",
    "ping_database",
]

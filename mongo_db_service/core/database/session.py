"""
Global MongoDB client and database management.

This module manages the shared ``AsyncMongoClient`` used throughout the
application, the database dependency for FastAPI endpoints, index creation
at startup and the ping used by the health endpoint.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from mongo_db_service.core.logging_config import get_logger
from mongo_db_service.server.core import constant
from mongo_db_service.server.core.config import settings

from .entities.users import USERS_COLLECTION

logger = get_logger(__name__)

_client: Optional[AsyncMongoClient] = None


def get_client() -> AsyncMongoClient:
    """Return the shared client, creating it on first use.

    The driver connects lazily, so building the client never blocks.
    """
    global _client
    if _client is None:
        mongodb = settings.mongodb
        logger.info(f"Creating MongoDB client for database '{mongodb.database}'")
        _client = AsyncMongoClient(
            mongodb.uri,
            serverSelectionTimeoutMS=mongodb.server_selection_timeout_ms,
            appname=constant.PROJECT_NAME,
        )
    return _client


def get_database() -> AsyncDatabase:
    """
    Dependency provider for the application database.

    Returns:
        AsyncDatabase: The configured MongoDB database.
    """
    return get_client()[settings.mongodb.database]


async def init_db(database: Optional[Any] = None) -> None:
    """
    Initialize the database.

    Creates the unique e-mail index and the creation-time index on the
    ``users`` collection. Index creation is idempotent.
    """
    db = database if database is not None else get_database()
    users = db[USERS_COLLECTION]
    await users.create_index([("email", ASCENDING)], unique=True, name="uniq_email")
    await users.create_index([("createdAt", ASCENDING)], name="idx_created_at")
    logger.info(f"Indexes ensured on collection '{USERS_COLLECTION}'")


async def ping_database(database: Optional[Any] = None) -> Dict[str, Any]:
    """
    Check that MongoDB answers.

    Returns:
        Details for the health report (database name and server version).

    Raises:
        pymongo.errors.PyMongoError: The server is unreachable or refused the command.
    """
    db = database if database is not None else get_database()
    await db.command("ping")
    build_info = await db.command("buildInfo")
    return {"database": db.name, "version": build_info.get("version")}


async def close_db() -> None:
    """Close the shared client, if one was created."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None
        logger.info("MongoDB client closed")

"""
Unit tests for FastAPI application lifespan management.

Tests verify that startup ensures the database indexes, that a failing
database does not prevent startup, and that shutdown closes the client.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI
from pymongo.errors import ServerSelectionTimeoutError

from mongo_db_service.server.core import constant
from mongo_db_service.server.main import app, lifespan

pytestmark = pytest.mark.asyncio


class TestLifespan:
    async def test_startup_initializes_and_shutdown_closes(self):
        with (
            patch("mongo_db_service.server.main.init_db", new_callable=AsyncMock) as mock_init_db,
            patch("mongo_db_service.server.main.close_db", new_callable=AsyncMock) as mock_close_db,
        ):
            async with lifespan(FastAPI()):
                mock_init_db.assert_awaited_once()
                mock_close_db.assert_not_called()

            mock_close_db.assert_awaited_once()

    async def test_startup_survives_database_failure(self):
        with (
            patch(
                "mongo_db_service.server.main.init_db",
                new_callable=AsyncMock,
                side_effect=ServerSelectionTimeoutError("no servers"),
            ),
            patch("mongo_db_service.server.main.close_db", new_callable=AsyncMock) as mock_close_db,
            patch("mongo_db_service.server.main.logger") as mock_logger,
        ):
            async with lifespan(FastAPI()):
                mock_logger.error.assert_called_once()

            mock_close_db.assert_awaited_once()


class TestApplication:
    def test_routes_are_registered(self):
        paths = {route.path for route in app.routes}

        assert constant.USERS_API in paths
        assert f"{constant.USERS_API}/{{user_id}}" in paths
        assert f"{constant.USERS_API}/email/{{email}}" in paths
        assert f"{constant.ACTUATOR_PATH}/health" in paths
        assert f"{constant.ACTUATOR_PATH}/info" in paths

    def test_openapi_is_served_under_api_prefix(self):
        assert app.openapi_url == f"{constant.API_V1_STR}/openapi.json"
        assert app.title == constant.PROJECT_NAME
        assert app.version == constant.VERSION

    def test_users_base_path(self):
        assert constant.USERS_API == "/api/v1/spring-boot-mongo-db-service/users"

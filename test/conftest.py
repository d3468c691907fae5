import os
from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

# Run the suite under the test profile, before the app settings are loaded
os.environ["MONGO_DB_SERVICE_PROFILE"] = "test"
os.environ.setdefault("MONGO_DB_SERVICE_ENABLE_FILE_LOGGING", "false")

from mongo_db_service.core.database.entities.users import USERS_COLLECTION, User  # noqa: E402
from mongo_db_service.core.database.repositories.users import UserRepository  # noqa: E402
from mongo_db_service.server.services.users import UserService  # noqa: E402

TEST_DATABASE = "mongo_db_service_test"


@pytest.fixture
def sample_user() -> User:
    """A stored-looking user, as the service would return it."""
    return User(
        id="123",
        name="John Doe",
        email="john@example.com",
        role="USER",
        created_at=datetime(2024, 1, 15, 10, 30, 0, 123000, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 15, 10, 30, 0, 123000, tzinfo=timezone.utc),
    )


@pytest.fixture
def mongo_db():
    """An in-memory MongoDB database, fresh for each test."""
    client = AsyncMongoMockClient()
    return client[TEST_DATABASE]


@pytest.fixture
def user_repository(mongo_db) -> UserRepository:
    return UserRepository(mongo_db[USERS_COLLECTION])


@pytest.fixture
def mock_user_service() -> AsyncMock:
    return AsyncMock(spec=UserService)


@pytest_asyncio.fixture(name="client")
async def client_fixture(mock_user_service: AsyncMock) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose endpoints talk to a mocked ``UserService``."""
    from mongo_db_service.server.main import app
    from mongo_db_service.server.services.deps import get_user_service

    app.dependency_overrides[get_user_service] = lambda: mock_user_service

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(name="db_client")
async def db_client_fixture(mongo_db) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the real service and repository over an in-memory MongoDB."""
    from mongo_db_service.core.database import get_database, init_db
    from mongo_db_service.server.main import app

    await init_db(mongo_db)
    app.dependency_overrides[get_database] = lambda: mongo_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()

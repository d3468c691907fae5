"""Unit tests for server services dependencies.

Tests verify that the UserServiceDep dependency injection wires a
UserService over the users collection of the injected database.
"""

from mongo_db_service.core.database.repositories.users import UserRepository
from mongo_db_service.server.services.deps import (
    UserServiceDep,
    get_user_repository,
    get_user_service,
)
from mongo_db_service.server.services.users import UserService


class TestUserServiceDep:
    """Test UserServiceDep dependency injection."""

    def test_user_service_dep_is_annotated(self):
        assert hasattr(UserServiceDep, "__metadata__")

    def test_user_service_dep_uses_get_user_service(self):
        depends_obj = UserServiceDep.__metadata__[0]

        assert depends_obj.dependency == get_user_service

    def test_user_service_dep_type_annotation(self):
        assert UserServiceDep.__origin__ is UserService


class TestProviders:
    def test_repository_uses_users_collection(self, mongo_db):
        repository = get_user_repository(mongo_db)

        assert isinstance(repository, UserRepository)
        assert repository.collection.name == "users"

    def test_service_wraps_repository(self, user_repository):
        service = get_user_service(user_repository)

        assert isinstance(service, UserService)
        assert service.repository is user_repository

"""
Service Dependencies.

Provides the ``UserService`` for API endpoints, built per request on top of
the shared MongoDB database.
"""

from typing import Annotated, Any

from fastapi import Depends

from mongo_db_service.core.database import get_database
from mongo_db_service.core.database.entities.users import USERS_COLLECTION
from mongo_db_service.core.database.repositories.users import UserRepository
from mongo_db_service.server.services.users import UserService


def get_user_repository(database: Any = Depends(get_database)) -> UserRepository:
    return UserRepository(database[USERS_COLLECTION])


def get_user_service(repository: UserRepository = Depends(get_user_repository)) -> UserService:
    return UserService(repository)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]

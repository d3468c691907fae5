"""
API endpoints for managing users.

Provides CRUD operations for user documents stored in MongoDB. Every success
payload is wrapped in the ``ApiResponse`` envelope.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Query, Response, status

from mongo_db_service.core.database.entities.users import User
from mongo_db_service.core.logging_config import get_logger
from mongo_db_service.core.models.io.responses import ApiResponse
from mongo_db_service.core.models.io.users import UserCreate, UserPatch, UserRead, UserUpdate
from mongo_db_service.server.core import constant
from mongo_db_service.server.services.deps import UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


def _envelope(status_code: int, message: str, data=None) -> ApiResponse:
    return ApiResponse(
        status_code=status_code,
        status=constant.STATUS_SUCCESS,
        message=message,
        data=data,
    )


@router.get(
    "",
    response_model=ApiResponse[List[UserRead]],
    summary="List Users",
    description="Retrieve all users, optionally filtered by role, status, name fragment, e-mail domain or creation time.",
    response_description="Envelope holding the list of users.",
)
async def all_users(
    service: UserServiceDep,
    role: Optional[str] = None,
    user_status: Optional[str] = Query(default=None, alias="status"),
    name: Optional[str] = Query(default=None, description="Case-insensitive name fragment"),
    email_domain: Optional[str] = Query(default=None, description="E-mail domain such as gmail.com"),
    email_domain_camel: Optional[str] = Query(default=None, alias="emailDomain"),
    created_after: Optional[datetime] = Query(default=None, description="Only users created after this instant"),
    created_after_camel: Optional[datetime] = Query(default=None, alias="createdAfter"),
    limit: Optional[int] = Query(default=None, ge=1),
    offset: Optional[int] = Query(default=None, ge=0),
) -> ApiResponse:
    """
    List users.

    - **role**: exact role match.
    - **status**: exact status match.
    - **name**: case-insensitive substring of the name.
    - **email_domain** / **emailDomain**: e-mail domain such as `gmail.com`.
    - **created_after** / **createdAfter**: only users created strictly after this instant.
    - **limit** / **offset**: pagination.
    """
    logger.info("Fetching all users")
    filters = {
        key: value
        for key, value in {
            "role": role,
            "status": user_status,
            "name": name,
            "email_domain": email_domain if email_domain is not None else email_domain_camel,
            "created_after": created_after if created_after is not None else created_after_camel,
        }.items()
        if value is not None
    }
    users = await service.find_all(filters=filters or None, limit=limit, offset=offset)
    return _envelope(status.HTTP_200_OK, constant.MSG_USERS_FETCHED, [UserRead.model_validate(u) for u in users])


@router.get(
    "/email/{email}",
    response_model=ApiResponse[UserRead],
    summary="Get User by E-mail",
    responses={404: {"description": "User not found"}},
)
async def by_email(email: str, service: UserServiceDep) -> ApiResponse:
    """Get a user by e-mail address."""
    logger.info(f"Fetching user with email={email}")
    user = await service.find_by_email(email)
    return _envelope(status.HTTP_200_OK, constant.MSG_USER_FETCHED, UserRead.model_validate(user))


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserRead],
    summary="Get User by ID",
    responses={404: {"description": "User not found"}},
)
async def by_id(user_id: str, service: UserServiceDep) -> ApiResponse:
    """Get a user by id."""
    logger.info(f"Fetching user with id={user_id}")
    user = await service.find_by_id(user_id)
    return _envelope(status.HTTP_200_OK, constant.MSG_USER_FETCHED, UserRead.model_validate(user))


@router.post(
    "",
    response_model=ApiResponse[UserRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create User",
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "Invalid user data"},
        409: {"description": "E-mail or id already in use"},
    },
)
async def create(payload: UserCreate, response: Response, service: UserServiceDep) -> ApiResponse:
    """
    Create a new user.

    The response carries a `Location` header pointing at the new user.
    """
    logger.info(f"Creating new user with email={payload.email} and role={payload.role}")
    created = await service.create(User(**payload.model_dump()))
    response.headers["Location"] = f"{constant.USERS_API}/{created.id}"
    return _envelope(status.HTTP_201_CREATED, constant.MSG_USER_CREATED, UserRead.model_validate(created))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserRead],
    summary="Update User",
    responses={404: {"description": "User not found"}, 409: {"description": "E-mail already in use"}},
)
async def update(user_id: str, payload: UserUpdate, service: UserServiceDep) -> ApiResponse:
    """Replace name, email, phone, role, status and address of a user."""
    logger.info(f"Updating user with id={user_id}")
    updated = await service.update(user_id, User(id=user_id, **payload.model_dump()))
    return _envelope(status.HTTP_200_OK, constant.MSG_USER_UPDATED, UserRead.model_validate(updated))


@router.patch(
    "/{user_id}",
    response_model=ApiResponse[UserRead],
    summary="Partially Update User",
    responses={404: {"description": "User not found"}, 409: {"description": "E-mail already in use"}},
)
async def patch(user_id: str, payload: UserPatch, service: UserServiceDep) -> ApiResponse:
    """Update only the fields present in the request body."""
    logger.info(f"Patching user with id={user_id}")
    updated = await service.patch(user_id, payload.model_dump(exclude_unset=True))
    return _envelope(status.HTTP_200_OK, constant.MSG_USER_UPDATED, UserRead.model_validate(updated))


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    summary="Delete User",
    responses={404: {"description": "User not found"}},
)
async def delete(user_id: str, service: UserServiceDep) -> ApiResponse:
    """
    Delete a user.

    Answers 200 with an envelope whose `statusCode` is 204 and `data` is null.
    """
    logger.info(f"Deleting user with id={user_id}")
    await service.delete(user_id)
    return _envelope(status.HTTP_204_NO_CONTENT, constant.MSG_USER_DELETED)

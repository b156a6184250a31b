"""User Routes — CRUD endpoints for the user resource.

Invariants:
    - Bodies validated by UserCreate before the handler runs (400 on failure)
    - Non-integer or out-of-range (32-bit) path ids rejected by FastAPI path validation (400)
    - Handlers are the only layer mapping service errors to status codes:
        POST   -> 500, GET /{id} -> 404, GET list -> 500, PUT -> 500, DELETE -> 500
    - Every classified failure is logged before responding
    - GET /users always reads DEFAULT_LIST_LIMIT rows from DEFAULT_LIST_OFFSET

Design Decisions:
    - GET /{id} reports 404 for any service failure while PUT reports 500 even
      when the user is missing; both mappings are kept as published
    - List paging is fixed; query parameters are not read
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.domain_types import (
    DEFAULT_LIST_LIMIT, DEFAULT_LIST_OFFSET, USER_ID_MAX, USER_ID_MIN, UserId,
)
from userapi.core.errors import ErrorContext, ResourceNotFoundError, UserApiError
from userapi.infrastructure.database import get_db
from userapi.infrastructure.observability import request_id_var
from userapi.infrastructure.user_repository import SqlAlchemyUserRepository
from userapi.schemas.user import UserCreate, UserResponse
from userapi.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])

UserIdPath = Annotated[int, Path(ge=USER_ID_MIN, le=USER_ID_MAX)]


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    """Build the per-request service over the request's DB session."""
    return UserService(SqlAlchemyUserRepository(db))


def _log_failure(operation: str, exc: UserApiError, user_id: int | None = None):
    logger.error(
        f"{operation} user failed: {exc.message}",
        extra={"error_code": exc.code, "user_id": user_id},
    )


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    """Create a user."""
    try:
        return await service.create_user(body.name, body.dob)
    except UserApiError as e:
        _log_failure("create", e)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user",
        )


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """List users (first page only)."""
    try:
        return await service.list_users(DEFAULT_LIST_LIMIT, DEFAULT_LIST_OFFSET)
    except UserApiError as e:
        _log_failure("list", e)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list users",
        )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UserIdPath, service: UserService = Depends(get_user_service),
):
    """Get one user. Any failure is reported as not found."""
    try:
        return await service.get_user(UserId(user_id))
    except UserApiError as e:
        _log_failure("get", e, user_id)
        raise HTTPException(
            status.HTTP_404_NOT_FOUND,
            detail=ResourceNotFoundError(
                "User", str(user_id),
                ErrorContext(request_id=request_id_var.get(), user_id=user_id),
            ).to_response(),
        )


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UserIdPath,
    body: UserCreate,
    service: UserService = Depends(get_user_service),
):
    """Replace a user's name and dob."""
    try:
        return await service.update_user(UserId(user_id), body.name, body.dob)
    except UserApiError as e:
        _log_failure("update", e, user_id)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update user",
        )


@router.delete(
    "/{user_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_user(
    user_id: UserIdPath, service: UserService = Depends(get_user_service),
):
    """Delete a user. Deleting an unknown id succeeds."""
    try:
        await service.delete_user(UserId(user_id))
    except UserApiError as e:
        _log_failure("delete", e, user_id)
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# =============================================================================
# app/routers/users.py - User Management Endpoints
# =============================================================================
# Account administration. Every route requires the admin role.
# Admins cannot demote, deactivate, or delete themselves.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.exceptions import PermissionDeniedError
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.user import UserResponse, UserUpdate
from core.services.user_service import user_service
from core.tables import UserRole

router = APIRouter()


@router.get("", response_model=PaginatedResponse[UserResponse])
async def list_users(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    admin: AuthUser = Depends(require_admin),
):
    users, total = await user_service.list(session, page=page, page_size=page_size)
    return PaginatedResponse(
        data=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    user = await user_service.get(session, user_id)
    return ApiResponse(data=UserResponse.model_validate(user))


@router.patch("/{user_id}", response_model=ApiResponse[UserResponse])
async def update_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    request: UserUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    """Change a user's name, role, or active flag."""
    if user_id == admin.id and (
        request.is_active is False
        or (request.role is not None and request.role != UserRole.ADMIN)
    ):
        raise PermissionDeniedError("You cannot demote or deactivate your own account")

    user = await user_service.update(session, user_id, request)
    return ApiResponse(message="User updated", data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    if user_id == admin.id:
        raise PermissionDeniedError("You cannot delete your own account")

    await user_service.delete(session, user_id)
    return MessageResponse(message="User deleted")

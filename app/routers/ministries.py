# =============================================================================
# app/routers/ministries.py - Ministry Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.exceptions import NotFoundError
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.ministry import MinistryCreate, MinistryResponse, MinistryUpdate
from core.services.directory_service import ministry_service

router = APIRouter()


@router.get("", response_model=PaginatedResponse[MinistryResponse])
async def list_ministries(session: DbSession, page: Page = 1, page_size: PageSize = 20):
    """List active ministries alphabetically."""
    ministries, total = await ministry_service.list_ministries(session, page=page, page_size=page_size)
    return PaginatedResponse(
        data=[MinistryResponse.model_validate(m) for m in ministries],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{ministry_id}", response_model=ApiResponse[MinistryResponse])
async def get_ministry(
    ministry_id: Annotated[UUID, Path(description="Ministry UUID")],
    session: DbSession,
):
    ministry = await ministry_service.get(session, ministry_id)
    if not ministry.is_active:
        raise NotFoundError("Ministry", ministry_id)
    return ApiResponse(data=MinistryResponse.model_validate(ministry))


@router.post("", response_model=ApiResponse[MinistryResponse], status_code=201)
async def create_ministry(
    request: MinistryCreate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    ministry = await ministry_service.create(session, request)
    return ApiResponse(message="Ministry created", data=MinistryResponse.model_validate(ministry))


@router.put("/{ministry_id}", response_model=ApiResponse[MinistryResponse])
async def update_ministry(
    ministry_id: Annotated[UUID, Path(description="Ministry UUID")],
    request: MinistryUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    ministry = await ministry_service.update(session, ministry_id, request)
    return ApiResponse(message="Ministry updated", data=MinistryResponse.model_validate(ministry))


@router.delete("/{ministry_id}", response_model=MessageResponse)
async def delete_ministry(
    ministry_id: Annotated[UUID, Path(description="Ministry UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    await ministry_service.delete(session, ministry_id)
    return MessageResponse(message="Ministry deleted")

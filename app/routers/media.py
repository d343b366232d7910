# =============================================================================
# app/routers/media.py - Media Library Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.content import MediaCreate, MediaResponse, MediaUpdate
from core.services.directory_service import media_service
from core.tables import MediaType

router = APIRouter()


@router.get("", response_model=PaginatedResponse[MediaResponse])
async def list_media(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    media_type: Annotated[MediaType | None, Query(description="video, audio, or image")] = None,
):
    items, total = await media_service.list_media(
        session, page=page, page_size=page_size, media_type=media_type
    )
    return PaginatedResponse(
        data=[MediaResponse.model_validate(m) for m in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{media_id}", response_model=ApiResponse[MediaResponse])
async def get_media(
    media_id: Annotated[UUID, Path(description="Media UUID")],
    session: DbSession,
):
    item = await media_service.get(session, media_id)
    return ApiResponse(data=MediaResponse.model_validate(item))


@router.post("", response_model=ApiResponse[MediaResponse], status_code=201)
async def create_media(
    request: MediaCreate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    item = await media_service.create(session, request)
    return ApiResponse(message="Media created", data=MediaResponse.model_validate(item))


@router.put("/{media_id}", response_model=ApiResponse[MediaResponse])
async def update_media(
    media_id: Annotated[UUID, Path(description="Media UUID")],
    request: MediaUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    item = await media_service.update(session, media_id, request)
    return ApiResponse(message="Media updated", data=MediaResponse.model_validate(item))


@router.delete("/{media_id}", response_model=MessageResponse)
async def delete_media(
    media_id: Annotated[UUID, Path(description="Media UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    await media_service.delete(session, media_id)
    return MessageResponse(message="Media deleted")

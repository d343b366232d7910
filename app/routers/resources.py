# =============================================================================
# app/routers/resources.py - Downloadable Resource Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.exceptions import NotFoundError
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.content import ResourceCreate, ResourceResponse, ResourceUpdate
from core.services.directory_service import resource_service

router = APIRouter()


@router.get("", response_model=PaginatedResponse[ResourceResponse])
async def list_resources(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    category: Annotated[str | None, Query(max_length=100)] = None,
):
    """List published resources, optionally by category."""
    resources, total = await resource_service.list_resources(
        session, page=page, page_size=page_size, category=category
    )
    return PaginatedResponse(
        data=[ResourceResponse.model_validate(r) for r in resources],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{resource_id}", response_model=ApiResponse[ResourceResponse])
async def get_resource(
    resource_id: Annotated[UUID, Path(description="Resource UUID")],
    session: DbSession,
):
    resource = await resource_service.get(session, resource_id)
    if not resource.is_published:
        raise NotFoundError("Resource", resource_id)
    return ApiResponse(data=ResourceResponse.model_validate(resource))


@router.post("", response_model=ApiResponse[ResourceResponse], status_code=201)
async def create_resource(
    request: ResourceCreate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    resource = await resource_service.create(session, request)
    return ApiResponse(message="Resource created", data=ResourceResponse.model_validate(resource))


@router.put("/{resource_id}", response_model=ApiResponse[ResourceResponse])
async def update_resource(
    resource_id: Annotated[UUID, Path(description="Resource UUID")],
    request: ResourceUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    resource = await resource_service.update(session, resource_id, request)
    return ApiResponse(message="Resource updated", data=ResourceResponse.model_validate(resource))


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: Annotated[UUID, Path(description="Resource UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    await resource_service.delete(session, resource_id)
    return MessageResponse(message="Resource deleted")

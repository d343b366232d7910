# =============================================================================
# app/routers/members.py - Membership Directory Endpoints
# =============================================================================
# The directory holds personal details, so every route is admin only.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import require_admin
from app.dependencies import DbSession
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.ministry import MemberCreate, MemberResponse, MemberUpdate
from core.services.directory_service import member_service, ministry_service

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=PaginatedResponse[MemberResponse])
async def list_members(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    q: Annotated[str | None, Query(max_length=100, description="Search name or email")] = None,
):
    members, total = await member_service.search(session, page=page, page_size=page_size, query=q)
    return PaginatedResponse(
        data=[MemberResponse.model_validate(m) for m in members],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{member_id}", response_model=ApiResponse[MemberResponse])
async def get_member(
    member_id: Annotated[UUID, Path(description="Member UUID")],
    session: DbSession,
):
    member = await member_service.get(session, member_id)
    return ApiResponse(data=MemberResponse.model_validate(member))


@router.post("", response_model=ApiResponse[MemberResponse], status_code=201)
async def create_member(request: MemberCreate, session: DbSession):
    """
    Add a member.

    Raises:
        404: If ministry_id refers to a ministry that doesn't exist
    """
    if request.ministry_id is not None:
        await ministry_service.get(session, request.ministry_id)
    member = await member_service.create(session, request)
    return ApiResponse(message="Member created", data=MemberResponse.model_validate(member))


@router.put("/{member_id}", response_model=ApiResponse[MemberResponse])
async def update_member(
    member_id: Annotated[UUID, Path(description="Member UUID")],
    request: MemberUpdate,
    session: DbSession,
):
    if request.ministry_id is not None:
        await ministry_service.get(session, request.ministry_id)
    member = await member_service.update(session, member_id, request)
    return ApiResponse(message="Member updated", data=MemberResponse.model_validate(member))


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_member(
    member_id: Annotated[UUID, Path(description="Member UUID")],
    session: DbSession,
):
    await member_service.delete(session, member_id)
    return MessageResponse(message="Member deleted")

# =============================================================================
# app/routers/prayer.py - Prayer Request Endpoints
# =============================================================================
# Anyone can submit a request. The public prayer wall shows only approved
# requests whose authors opted in; admins moderate everything else.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.prayer import (
    PrayerRequestCreate,
    PrayerRequestResponse,
    PrayerStatusUpdate,
    PublicPrayerResponse,
)
from core.services.prayer_service import prayer_service
from core.tables import PrayerStatus

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=201)
async def submit_prayer_request(request: PrayerRequestCreate, session: DbSession):
    """
    Submit a prayer request.

    Requests are reviewed before appearing on the prayer wall.
    """
    await prayer_service.create(session, request)
    return MessageResponse(message="Thank you. Our prayer team has received your request.")


@router.get("", response_model=PaginatedResponse[PublicPrayerResponse])
async def list_public_prayers(session: DbSession, page: Page = 1, page_size: PageSize = 20):
    """Prayer wall: approved public requests, anonymous ones without names."""
    records, total = await prayer_service.list_public(session, page=page, page_size=page_size)
    return PaginatedResponse(
        data=[PublicPrayerResponse.from_record(r) for r in records],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/all", response_model=PaginatedResponse[PrayerRequestResponse])
async def list_all_prayers(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    status: Annotated[PrayerStatus | None, Query(description="Filter by status")] = None,
    admin: AuthUser = Depends(require_admin),
):
    """Every request, including contact details. Admin only."""
    records, total = await prayer_service.list_all(
        session, page=page, page_size=page_size, status=status
    )
    return PaginatedResponse(
        data=[PrayerRequestResponse.model_validate(r) for r in records],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.patch("/{request_id}/status", response_model=ApiResponse[PrayerRequestResponse])
async def set_prayer_status(
    request_id: Annotated[UUID, Path(description="Prayer request UUID")],
    request: PrayerStatusUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    """Approve, mark answered, or archive a request. Admin only."""
    record = await prayer_service.set_status(session, request_id, request.status)
    return ApiResponse(
        message=f"Prayer request marked {record.status.value}",
        data=PrayerRequestResponse.model_validate(record),
    )


@router.delete("/{request_id}", response_model=MessageResponse)
async def delete_prayer_request(
    request_id: Annotated[UUID, Path(description="Prayer request UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    await prayer_service.delete(session, request_id)
    return MessageResponse(message="Prayer request deleted")

# =============================================================================
# app/routers/events.py - Event Endpoints
# =============================================================================
# Public listing of published events; admins manage the calendar.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.exceptions import NotFoundError
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.event import EventCreate, EventResponse, EventUpdate
from core.services.event_service import event_service

router = APIRouter()


@router.get("", response_model=PaginatedResponse[EventResponse])
async def list_events(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    upcoming: Annotated[bool, Query(description="Only events starting from now on")] = False,
):
    """List published events in start order."""
    events, total = await event_service.list_events(
        session, page=page, page_size=page_size, upcoming=upcoming
    )
    return PaginatedResponse(
        data=[EventResponse.model_validate(e) for e in events],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{event_id}", response_model=ApiResponse[EventResponse])
async def get_event(
    event_id: Annotated[UUID, Path(description="Event UUID")],
    session: DbSession,
):
    """Get a published event."""
    event = await event_service.get(session, event_id)
    if not event.is_published:
        raise NotFoundError("Event", event_id)
    return ApiResponse(data=EventResponse.model_validate(event))


@router.post("", response_model=ApiResponse[EventResponse], status_code=201)
async def create_event(
    request: EventCreate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    """Create an event. Admin only."""
    event = await event_service.create(session, request)
    return ApiResponse(message="Event created", data=EventResponse.model_validate(event))


@router.put("/{event_id}", response_model=ApiResponse[EventResponse])
async def update_event(
    event_id: Annotated[UUID, Path(description="Event UUID")],
    request: EventUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    """Update an event. Admin only."""
    event = await event_service.update(session, event_id, request)
    return ApiResponse(message="Event updated", data=EventResponse.model_validate(event))


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: Annotated[UUID, Path(description="Event UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    """Delete an event. Admin only."""
    await event_service.delete(session, event_id)
    return MessageResponse(message="Event deleted")

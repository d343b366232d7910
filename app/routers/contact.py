# =============================================================================
# app/routers/contact.py - Contact Form Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.contact import ContactMessageCreate, ContactMessageResponse
from core.services.contact_service import contact_service

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(request: ContactMessageCreate, session: DbSession):
    """Submit the contact form."""
    await contact_service.create(session, request)
    return MessageResponse(message="Thank you for reaching out. We'll be in touch soon.")


@router.get("", response_model=PaginatedResponse[ContactMessageResponse])
async def list_messages(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    unread: Annotated[bool, Query(description="Only unread messages")] = False,
    admin: AuthUser = Depends(require_admin),
):
    """List contact messages, newest first. Admin only."""
    messages, total = await contact_service.list_messages(
        session, page=page, page_size=page_size, unread_only=unread
    )
    return PaginatedResponse(
        data=[ContactMessageResponse.model_validate(m) for m in messages],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{message_id}", response_model=ApiResponse[ContactMessageResponse])
async def get_message(
    message_id: Annotated[UUID, Path(description="Message UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    message = await contact_service.get(session, message_id)
    return ApiResponse(data=ContactMessageResponse.model_validate(message))


@router.patch("/{message_id}/read", response_model=ApiResponse[ContactMessageResponse])
async def mark_read(
    message_id: Annotated[UUID, Path(description="Message UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    message = await contact_service.update(session, message_id, {"is_read": True})
    return ApiResponse(message="Message marked as read", data=ContactMessageResponse.model_validate(message))


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message(
    message_id: Annotated[UUID, Path(description="Message UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    await contact_service.delete(session, message_id)
    return MessageResponse(message="Message deleted")

# =============================================================================
# app/routers/newsletter.py - Newsletter Subscription Endpoints
# =============================================================================

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.contact import NewsletterSubscribe, NewsletterUnsubscribe, SubscriberResponse
from core.services.contact_service import newsletter_service
from core.tables import NewsletterSubscriber

router = APIRouter()


@router.post("/subscribe", response_model=ApiResponse[SubscriberResponse])
async def subscribe(request: NewsletterSubscribe, session: DbSession):
    """
    Subscribe to the newsletter.

    Returns 201 for a new address and 200 when an existing (or previously
    unsubscribed) address is reactivated.
    """
    subscriber, created = await newsletter_service.subscribe(session, request)
    body = ApiResponse(
        message="Subscribed successfully" if created else "You're already subscribed",
        data=SubscriberResponse.model_validate(subscriber),
    )
    return JSONResponse(status_code=201 if created else 200, content=body.model_dump(mode="json"))


@router.post("/unsubscribe", response_model=MessageResponse)
async def unsubscribe(request: NewsletterUnsubscribe, session: DbSession):
    """Stop receiving the newsletter."""
    await newsletter_service.unsubscribe(session, request.email)
    return MessageResponse(message="You have been unsubscribed")


@router.get("/subscribers", response_model=PaginatedResponse[SubscriberResponse])
async def list_subscribers(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    admin: AuthUser = Depends(require_admin),
):
    """List active subscribers. Admin only."""
    subscribers, total = await newsletter_service.list(
        session,
        page=page,
        page_size=page_size,
        conditions=[NewsletterSubscriber.is_active.is_(True)],
    )
    return PaginatedResponse(
        data=[SubscriberResponse.model_validate(s) for s in subscribers],
        total=total,
        page=page,
        page_size=page_size,
    )

# =============================================================================
# core/services/contact_service.py - Contact Form and Newsletter Logic
# =============================================================================

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from core.models.contact import NewsletterSubscribe
from core.services.crud_service import CrudService
from core.tables import ContactMessage, NewsletterSubscriber

logger = logging.getLogger(__name__)


class ContactService(CrudService[ContactMessage]):
    """Service for contact form messages."""

    def __init__(self):
        super().__init__(ContactMessage, "Contact message")

    async def list_messages(
        self,
        session: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        unread_only: bool = False,
    ) -> tuple[list[ContactMessage], int]:
        conditions = [ContactMessage.is_read.is_(False)] if unread_only else []
        return await self.list(session, page=page, page_size=page_size, conditions=conditions)


class NewsletterService(CrudService[NewsletterSubscriber]):
    """
    Service for newsletter subscriptions.

    Subscribing is idempotent: an existing address is reactivated rather
    than duplicated.
    """

    def __init__(self):
        super().__init__(NewsletterSubscriber, "Subscriber")

    async def subscribe(
        self,
        session: AsyncSession,
        data: NewsletterSubscribe,
    ) -> tuple[NewsletterSubscriber, bool]:
        """
        Subscribe an address.

        Returns:
            Tuple of (subscriber, created) where created is False when the
            address was already on file
        """
        email = data.email.lower()
        existing = await self.get_by(session, email=email)

        if existing is None:
            subscriber = await self.create(session, {"email": email, "name": data.name})
            return subscriber, True

        values = {"is_active": True, "unsubscribed_at": None}
        if data.name:
            values["name"] = data.name
        subscriber = await self.update(session, existing.id, values)
        return subscriber, False

    async def unsubscribe(self, session: AsyncSession, email: str) -> NewsletterSubscriber:
        """
        Deactivate an address.

        Raises:
            NotFoundError: If the address was never subscribed
        """
        existing = await self.get_by(session, email=email.lower())
        if existing is None:
            raise NotFoundError(self.label, email)

        if not existing.is_active:
            return existing

        logger.info(f"Unsubscribed newsletter address: {existing.id}")
        return await self.update(
            session,
            existing.id,
            {"is_active": False, "unsubscribed_at": datetime.now(timezone.utc)},
        )


contact_service = ContactService()
newsletter_service = NewsletterService()

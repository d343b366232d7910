# =============================================================================
# core/services/admin_service.py - Admin Dashboard Logic
# =============================================================================

from sqlalchemy.ext.asyncio import AsyncSession

from core.services.blog_service import blog_service
from core.services.contact_service import contact_service, newsletter_service
from core.services.directory_service import member_service, ministry_service
from core.services.event_service import event_service
from core.services.prayer_service import prayer_service
from core.services.user_service import user_service
from core.tables import (
    BlogPost,
    ContactMessage,
    NewsletterSubscriber,
    PrayerRequest,
    PrayerStatus,
)


class AdminService:
    """Aggregate counts for the admin dashboard."""

    @staticmethod
    async def dashboard_stats(session: AsyncSession) -> dict[str, int]:
        """
        Returns:
            Dict of counter name -> value
        """
        return {
            "users": await user_service.count(session),
            "members": await member_service.count(session),
            "ministries": await ministry_service.count(session),
            "events": await event_service.count(session),
            "blog_posts": await blog_service.count(session),
            "published_blog_posts": await blog_service.count(
                session, [BlogPost.is_published.is_(True)]
            ),
            "pending_prayer_requests": await prayer_service.count(
                session, [PrayerRequest.status == PrayerStatus.PENDING]
            ),
            "unread_contact_messages": await contact_service.count(
                session, [ContactMessage.is_read.is_(False)]
            ),
            "active_subscribers": await newsletter_service.count(
                session, [NewsletterSubscriber.is_active.is_(True)]
            ),
        }

# =============================================================================
# core/services/event_service.py - Event Business Logic
# =============================================================================

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from core.services.crud_service import CrudService
from core.tables import Event


class EventService(CrudService[Event]):
    """Service for church events."""

    def __init__(self):
        super().__init__(Event, "Event", order_by=Event.starts_at.asc())

    async def list_events(
        self,
        session: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        upcoming: bool = False,
        include_unpublished: bool = False,
    ) -> tuple[list[Event], int]:
        """
        List events in start order.

        Args:
            upcoming: Only events starting from now on
            include_unpublished: Admin view; includes drafts
        """
        conditions = []
        if not include_unpublished:
            conditions.append(Event.is_published.is_(True))
        if upcoming:
            now = datetime.now(timezone.utc)
            conditions.append(Event.starts_at >= now)

        return await self.list(session, page=page, page_size=page_size, conditions=conditions)


event_service = EventService()

# =============================================================================
# core/services/prayer_service.py - Prayer Request Business Logic
# =============================================================================

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from core.services.crud_service import CrudService
from core.tables import PrayerRequest, PrayerStatus

# Statuses shown on the public prayer wall
PUBLIC_STATUSES = (PrayerStatus.APPROVED, PrayerStatus.ANSWERED)


class PrayerService(CrudService[PrayerRequest]):
    """Service for prayer requests."""

    def __init__(self):
        super().__init__(PrayerRequest, "Prayer request")

    async def list_public(
        self,
        session: AsyncSession,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[PrayerRequest], int]:
        """Approved or answered requests whose authors opted in to sharing."""
        return await self.list(
            session,
            page=page,
            page_size=page_size,
            conditions=[
                PrayerRequest.is_public.is_(True),
                PrayerRequest.status.in_(PUBLIC_STATUSES),
            ],
        )

    async def list_all(
        self,
        session: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        status: PrayerStatus | None = None,
    ) -> tuple[list[PrayerRequest], int]:
        conditions = [PrayerRequest.status == status] if status else []
        return await self.list(session, page=page, page_size=page_size, conditions=conditions)

    async def set_status(
        self,
        session: AsyncSession,
        request_id: UUID,
        status: PrayerStatus,
    ) -> PrayerRequest:
        return await self.update(session, request_id, {"status": status})


prayer_service = PrayerService()

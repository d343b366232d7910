# =============================================================================
# core/services/directory_service.py - Ministries, Members, Resources, Media
# =============================================================================
# These resources need nothing beyond the shared CRUD operations plus a
# filter or two, so each is a configured CrudService.
# =============================================================================

from sqlalchemy.ext.asyncio import AsyncSession

from core.services.crud_service import CrudService
from core.tables import Media, MediaType, Member, Ministry, Resource


class MinistryService(CrudService[Ministry]):
    def __init__(self):
        super().__init__(Ministry, "Ministry", order_by=Ministry.name.asc())

    async def list_ministries(self, session: AsyncSession, page=1, page_size=20, include_inactive=False):
        conditions = [] if include_inactive else [Ministry.is_active.is_(True)]
        return await self.list(session, page=page, page_size=page_size, conditions=conditions)


class MemberService(CrudService[Member]):
    def __init__(self):
        super().__init__(Member, "Member", order_by=Member.last_name.asc())

    async def search(self, session: AsyncSession, page=1, page_size=20, query: str | None = None):
        conditions = []
        if query:
            pattern = f"%{query}%"
            conditions.append(
                Member.first_name.ilike(pattern)
                | Member.last_name.ilike(pattern)
                | Member.email.ilike(pattern)
            )
        return await self.list(session, page=page, page_size=page_size, conditions=conditions)


class ResourceService(CrudService[Resource]):
    def __init__(self):
        super().__init__(Resource, "Resource")

    async def list_resources(
        self,
        session: AsyncSession,
        page=1,
        page_size=20,
        category: str | None = None,
        include_unpublished=False,
    ):
        conditions = [] if include_unpublished else [Resource.is_published.is_(True)]
        if category:
            conditions.append(Resource.category == category)
        return await self.list(session, page=page, page_size=page_size, conditions=conditions)


class MediaService(CrudService[Media]):
    def __init__(self):
        super().__init__(Media, "Media")

    async def list_media(self, session: AsyncSession, page=1, page_size=20, media_type: MediaType | None = None):
        conditions = [Media.media_type == media_type] if media_type else []
        return await self.list(session, page=page, page_size=page_size, conditions=conditions)


ministry_service = MinistryService()
member_service = MemberService()
resource_service = ResourceService()
media_service = MediaService()

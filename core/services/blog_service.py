# =============================================================================
# core/services/blog_service.py - Blog Business Logic
# =============================================================================
# Slugs are unique. When a post is created without one, it is derived from
# the title and suffixed (-2, -3, ...) until free. Publishing stamps
# published_at the first time a post goes live.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError
from core.models.content import BlogPostCreate, BlogPostUpdate, slugify
from core.services.crud_service import CrudService
from core.tables import BlogPost


class BlogService(CrudService[BlogPost]):
    """Service for blog posts."""

    def __init__(self):
        super().__init__(BlogPost, "Blog post")

    async def list_posts(
        self,
        session: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        include_drafts: bool = False,
    ) -> tuple[list[BlogPost], int]:
        conditions = [] if include_drafts else [BlogPost.is_published.is_(True)]
        order = BlogPost.published_at.desc() if not include_drafts else None
        return await self.list(
            session, page=page, page_size=page_size, conditions=conditions, order_by=order
        )

    async def get_published_by_slug(self, session: AsyncSession, slug: str) -> BlogPost:
        """
        Raises:
            NotFoundError: If no published post has this slug
        """
        post = await self.get_by(session, slug=slug, is_published=True)
        if post is None:
            raise NotFoundError(self.label, slug)
        return post

    async def _unique_slug(self, session: AsyncSession, base: str) -> str:
        slug, suffix = base, 2
        while await self.get_by(session, slug=slug) is not None:
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    async def create_post(
        self,
        session: AsyncSession,
        data: BlogPostCreate,
        author_id: UUID | None = None,
    ) -> BlogPost:
        """
        Raises:
            ConflictError: If an explicit slug is already taken
        """
        values = data.model_dump()

        if data.slug:
            if await self.get_by(session, slug=data.slug) is not None:
                raise ConflictError("Slug is already in use", details={"slug": data.slug})
        else:
            values["slug"] = await self._unique_slug(session, slugify(data.title))

        values["author_id"] = author_id
        if data.is_published:
            values["published_at"] = datetime.now(timezone.utc)

        return await self.create(session, values)

    async def update_post(
        self,
        session: AsyncSession,
        post_id: UUID,
        data: BlogPostUpdate,
    ) -> BlogPost:
        post = await self.get(session, post_id)
        values = data.model_dump(exclude_unset=True)

        if values.get("slug") and values["slug"] != post.slug:
            if await self.get_by(session, slug=values["slug"]) is not None:
                raise ConflictError("Slug is already in use", details={"slug": values["slug"]})

        if values.get("is_published") and post.published_at is None:
            values["published_at"] = datetime.now(timezone.utc)

        return await self.update(session, post_id, values)


blog_service = BlogService()

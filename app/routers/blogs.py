# =============================================================================
# app/routers/blogs.py - Blog Endpoints
# =============================================================================
# Readers fetch published posts by slug; admins write and publish.
# Admin routes address posts by id since drafts may share a working title.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, require_admin
from app.dependencies import DbSession
from app.routers._params import Page, PageSize
from core.models.common import ApiResponse, MessageResponse, PaginatedResponse
from core.models.content import BlogPostCreate, BlogPostResponse, BlogPostUpdate
from core.services.blog_service import blog_service

router = APIRouter()


@router.get("", response_model=PaginatedResponse[BlogPostResponse])
async def list_posts(session: DbSession, page: Page = 1, page_size: PageSize = 20):
    """List published posts, newest first."""
    posts, total = await blog_service.list_posts(session, page=page, page_size=page_size)
    return PaginatedResponse(
        data=[BlogPostResponse.model_validate(p) for p in posts],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/drafts", response_model=PaginatedResponse[BlogPostResponse])
async def list_all_posts(
    session: DbSession,
    page: Page = 1,
    page_size: PageSize = 20,
    admin: AuthUser = Depends(require_admin),
):
    """List every post including drafts. Admin only."""
    posts, total = await blog_service.list_posts(
        session, page=page, page_size=page_size, include_drafts=True
    )
    return PaginatedResponse(
        data=[BlogPostResponse.model_validate(p) for p in posts],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{slug}", response_model=ApiResponse[BlogPostResponse])
async def get_post(
    slug: Annotated[str, Path(max_length=255, description="Post slug")],
    session: DbSession,
):
    post = await blog_service.get_published_by_slug(session, slug)
    return ApiResponse(data=BlogPostResponse.model_validate(post))


@router.post("", response_model=ApiResponse[BlogPostResponse], status_code=201)
async def create_post(
    request: BlogPostCreate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    """Create a post. The slug is generated from the title if omitted."""
    post = await blog_service.create_post(session, request, author_id=admin.id)
    return ApiResponse(message="Blog post created", data=BlogPostResponse.model_validate(post))


@router.put("/{post_id}", response_model=ApiResponse[BlogPostResponse])
async def update_post(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    request: BlogPostUpdate,
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    post = await blog_service.update_post(session, post_id, request)
    return ApiResponse(message="Blog post updated", data=BlogPostResponse.model_validate(post))


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    session: DbSession,
    admin: AuthUser = Depends(require_admin),
):
    await blog_service.delete(session, post_id)
    return MessageResponse(message="Blog post deleted")

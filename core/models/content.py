# =============================================================================
# core/models/content.py - Resource, Media, and Blog Schemas
# =============================================================================

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.tables import MediaType

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _validate_slug(value: str | None) -> str | None:
    if value is not None and not SLUG_PATTERN.match(value):
        raise ValueError("slug may contain only lowercase letters, digits and hyphens")
    return value


# -----------------------------------------------------------------------------
# Resources (downloadable files: sermon notes, study guides, forms)
# -----------------------------------------------------------------------------

class ResourceBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    file_url: str = Field(..., min_length=1, max_length=1024)
    is_published: bool = True


class ResourceCreate(ResourceBase):
    pass


class ResourceUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, max_length=100)
    file_url: str | None = Field(default=None, min_length=1, max_length=1024)
    is_published: bool | None = None


class ResourceResponse(ResourceBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


# -----------------------------------------------------------------------------
# Media (sermon videos, podcasts, photo galleries)
# -----------------------------------------------------------------------------

class MediaBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    media_type: MediaType
    url: str = Field(..., min_length=1, max_length=1024)
    thumbnail_url: str | None = Field(default=None, max_length=1024)
    description: str | None = None
    published_at: datetime | None = None


class MediaCreate(MediaBase):
    pass


class MediaUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    media_type: MediaType | None = None
    url: str | None = Field(default=None, min_length=1, max_length=1024)
    thumbnail_url: str | None = Field(default=None, max_length=1024)
    description: str | None = None
    published_at: datetime | None = None


class MediaResponse(MediaBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


# -----------------------------------------------------------------------------
# Blog
# -----------------------------------------------------------------------------

class BlogPostBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    excerpt: str | None = Field(default=None, max_length=500)
    content: str = Field(..., min_length=1)
    cover_image_url: str | None = Field(default=None, max_length=1024)
    is_published: bool = False


class BlogPostCreate(BlogPostBase):
    """
    Slug is derived from the title when omitted.

    Example:
        {"title": "Easter Reflections", "content": "...", "is_published": true}
    """
    slug: str | None = Field(default=None, max_length=255)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value: str | None) -> str | None:
        return _validate_slug(value)


class BlogPostUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    excerpt: str | None = Field(default=None, max_length=500)
    content: str | None = Field(default=None, min_length=1)
    cover_image_url: str | None = Field(default=None, max_length=1024)
    is_published: bool | None = None

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value: str | None) -> str | None:
        return _validate_slug(value)


class BlogPostResponse(BlogPostBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    author_id: UUID | None
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime


def slugify(text: str) -> str:
    """
    Lowercase, hyphen-separated slug.

    Example:
        slugify("Easter Reflections: Week 1")  # "easter-reflections-week-1"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug or "post"

# =============================================================================
# core/tables.py - ORM Table Definitions
# =============================================================================
# SQLAlchemy declarative models for every resource the API serves.
# Pydantic schemas in core/models/ describe the API contract; these classes
# describe storage. Services translate between the two.
# =============================================================================

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


class TimestampMixin:
    """Adds id and created/updated timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )


# =============================================================================
# Enums
# =============================================================================

class UserRole(str, Enum):
    MEMBER = "member"
    ADMIN = "admin"


class PrayerStatus(str, Enum):
    """
    Moderation states for prayer requests.

    Flow: pending -> approved -> answered, or pending -> archived
    """
    PENDING = "pending"
    APPROVED = "approved"
    ANSWERED = "answered"
    ARCHIVED = "archived"


class MediaType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    IMAGE = "image"


def _enum(enum_cls: type[Enum]) -> SAEnum:
    # Store the lowercase values, not the member names
    return SAEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=20,
    )


# =============================================================================
# Accounts
# =============================================================================

class User(TimestampMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(255))
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[UserRole] = mapped_column(_enum(UserRole), default=UserRole.MEMBER)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    blog_posts: Mapped[list[BlogPost]] = relationship(back_populates="author")


# =============================================================================
# Church Life
# =============================================================================

class Event(TimestampMixin, Base):
    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    location: Mapped[str | None] = mapped_column(String(255))
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    ends_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)


class Ministry(TimestampMixin, Base):
    __tablename__ = "ministries"

    name: Mapped[str] = mapped_column(String(255), unique=True)
    description: Mapped[str | None] = mapped_column(Text)
    leader_name: Mapped[str | None] = mapped_column(String(255))
    meeting_time: Mapped[str | None] = mapped_column(String(255))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    members: Mapped[list[Member]] = relationship(back_populates="ministry")


class Member(TimestampMixin, Base):
    __tablename__ = "members"

    first_name: Mapped[str] = mapped_column(String(120))
    last_name: Mapped[str] = mapped_column(String(120))
    email: Mapped[str | None] = mapped_column(String(255), index=True)
    phone: Mapped[str | None] = mapped_column(String(50))
    address: Mapped[str | None] = mapped_column(String(500))
    joined_on: Mapped[date | None] = mapped_column(Date)
    ministry_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("ministries.id", ondelete="SET NULL")
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    ministry: Mapped[Ministry | None] = relationship(back_populates="members")


class PrayerRequest(TimestampMixin, Base):
    __tablename__ = "prayer_requests"

    name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    request: Mapped[str] = mapped_column(Text)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False)
    status: Mapped[PrayerStatus] = mapped_column(
        _enum(PrayerStatus), default=PrayerStatus.PENDING, index=True
    )


# =============================================================================
# Communication
# =============================================================================

class ContactMessage(TimestampMixin, Base):
    __tablename__ = "contact_messages"

    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    subject: Mapped[str | None] = mapped_column(String(255))
    message: Mapped[str] = mapped_column(Text)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False)


class NewsletterSubscriber(TimestampMixin, Base):
    __tablename__ = "newsletter_subscribers"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    unsubscribed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


# =============================================================================
# Content
# =============================================================================

class Resource(TimestampMixin, Base):
    __tablename__ = "resources"

    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column(String(100), index=True)
    file_url: Mapped[str] = mapped_column(String(1024))
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)


class Media(TimestampMixin, Base):
    __tablename__ = "media"

    title: Mapped[str] = mapped_column(String(255))
    media_type: Mapped[MediaType] = mapped_column(_enum(MediaType), index=True)
    url: Mapped[str] = mapped_column(String(1024))
    thumbnail_url: Mapped[str | None] = mapped_column(String(1024))
    description: Mapped[str | None] = mapped_column(Text)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class BlogPost(TimestampMixin, Base):
    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    excerpt: Mapped[str | None] = mapped_column(String(500))
    content: Mapped[str] = mapped_column(Text)
    cover_image_url: Mapped[str | None] = mapped_column(String(1024))
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    author_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )

    author: Mapped[User | None] = relationship(back_populates="blog_posts")

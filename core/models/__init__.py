# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: Success envelopes shared by every endpoint
# - user.py: Registration, login, and account schemas
# - event.py: Church event schemas
# - ministry.py: Ministry and member directory schemas
# - prayer.py: Prayer request schemas
# - contact.py: Contact form and newsletter schemas
# - content.py: Resource, media, and blog schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .common import ApiResponse, MessageResponse, PaginatedResponse
from .user import LoginRequest, TokenResponse, UserCreate, UserResponse, UserUpdate
from .event import EventCreate, EventResponse, EventUpdate
from .ministry import (
    MemberCreate,
    MemberResponse,
    MemberUpdate,
    MinistryCreate,
    MinistryResponse,
    MinistryUpdate,
)
from .prayer import (
    PrayerRequestCreate,
    PrayerRequestResponse,
    PrayerStatusUpdate,
    PublicPrayerResponse,
)
from .contact import (
    ContactMessageCreate,
    ContactMessageResponse,
    NewsletterSubscribe,
    NewsletterUnsubscribe,
    SubscriberResponse,
)
from .content import (
    BlogPostCreate,
    BlogPostResponse,
    BlogPostUpdate,
    MediaCreate,
    MediaResponse,
    MediaUpdate,
    ResourceCreate,
    ResourceResponse,
    ResourceUpdate,
    slugify,
)

__all__ = [
    # Envelopes
    "ApiResponse",
    "MessageResponse",
    "PaginatedResponse",
    # Users
    "LoginRequest",
    "TokenResponse",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
    # Events
    "EventCreate",
    "EventResponse",
    "EventUpdate",
    # Ministries / members
    "MemberCreate",
    "MemberResponse",
    "MemberUpdate",
    "MinistryCreate",
    "MinistryResponse",
    "MinistryUpdate",
    # Prayer
    "PrayerRequestCreate",
    "PrayerRequestResponse",
    "PrayerStatusUpdate",
    "PublicPrayerResponse",
    # Contact / newsletter
    "ContactMessageCreate",
    "ContactMessageResponse",
    "NewsletterSubscribe",
    "NewsletterUnsubscribe",
    "SubscriberResponse",
    # Content
    "BlogPostCreate",
    "BlogPostResponse",
    "BlogPostUpdate",
    "MediaCreate",
    "MediaResponse",
    "MediaUpdate",
    "ResourceCreate",
    "ResourceResponse",
    "ResourceUpdate",
    "slugify",
]

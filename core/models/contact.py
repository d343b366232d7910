# =============================================================================
# core/models/contact.py - Contact Form and Newsletter Schemas
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactMessageCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=50)
    subject: str | None = Field(default=None, max_length=255)
    message: str = Field(..., min_length=1, max_length=10000)


class ContactMessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    phone: str | None
    subject: str | None
    message: str
    is_read: bool
    created_at: datetime


# -----------------------------------------------------------------------------
# Newsletter
# -----------------------------------------------------------------------------

class NewsletterSubscribe(BaseModel):
    email: EmailStr
    name: str | None = Field(default=None, max_length=255)


class NewsletterUnsubscribe(BaseModel):
    email: EmailStr


class SubscriberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str | None
    is_active: bool
    created_at: datetime
    unsubscribed_at: datetime | None = None

# =============================================================================
# core/models/prayer.py - Prayer Request Schemas
# =============================================================================
# Anyone may submit a prayer request. Requests start as "pending" and only
# approved, public ones are shown on the prayer wall.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.tables import PrayerStatus


class PrayerRequestCreate(BaseModel):
    """
    Example:
        {"name": "Ruth", "request": "Please pray for my mother's recovery", "is_public": true}
    """
    name: str | None = Field(default=None, max_length=255)
    email: EmailStr | None = None
    request: str = Field(..., min_length=1, max_length=5000)
    is_anonymous: bool = False
    is_public: bool = False


class PrayerStatusUpdate(BaseModel):
    status: PrayerStatus


class PrayerRequestResponse(BaseModel):
    """Full record, admin view."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None
    email: str | None
    request: str
    is_anonymous: bool
    is_public: bool
    status: PrayerStatus
    created_at: datetime


class PublicPrayerResponse(BaseModel):
    """Prayer wall entry. Contact details are never exposed."""
    id: UUID
    name: str | None
    request: str
    status: PrayerStatus
    created_at: datetime

    @classmethod
    def from_record(cls, record) -> "PublicPrayerResponse":
        return cls(
            id=record.id,
            name=None if record.is_anonymous else record.name,
            request=record.request,
            status=record.status,
            created_at=record.created_at,
        )

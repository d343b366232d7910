# =============================================================================
# core/models/event.py - Event Schemas
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    starts_at: datetime
    ends_at: datetime | None = None
    image_url: str | None = Field(default=None, max_length=1024)
    is_published: bool = True


class EventCreate(EventBase):
    """
    Schema for creating an event.

    Example:
        {
            "title": "Sunday Worship",
            "location": "Main Sanctuary",
            "starts_at": "2024-06-02T10:00:00Z",
            "ends_at": "2024-06-02T11:30:00Z"
        }
    """

    @model_validator(mode="after")
    def check_dates(self):
        if self.ends_at is not None and self.ends_at < self.starts_at:
            raise ValueError("ends_at must not be before starts_at")
        return self


class EventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    location: str | None = Field(default=None, max_length=255)
    starts_at: datetime | None = None
    ends_at: datetime | None = None
    image_url: str | None = Field(default=None, max_length=1024)
    is_published: bool | None = None


class EventResponse(EventBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime

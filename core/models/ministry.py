# =============================================================================
# core/models/ministry.py - Ministry and Member Schemas
# =============================================================================

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class MinistryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    leader_name: str | None = Field(default=None, max_length=255)
    meeting_time: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, max_length=1024)
    is_active: bool = True


class MinistryCreate(MinistryBase):
    pass


class MinistryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    leader_name: str | None = Field(default=None, max_length=255)
    meeting_time: str | None = Field(default=None, max_length=255)
    image_url: str | None = Field(default=None, max_length=1024)
    is_active: bool | None = None


class MinistryResponse(MinistryBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


# -----------------------------------------------------------------------------
# Members (church membership directory, admin only)
# -----------------------------------------------------------------------------

class MemberBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    joined_on: date | None = None
    ministry_id: UUID | None = None
    is_active: bool = True


class MemberCreate(MemberBase):
    pass


class MemberUpdate(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=120)
    last_name: str | None = Field(default=None, min_length=1, max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)
    joined_on: date | None = None
    ministry_id: UUID | None = None
    is_active: bool | None = None


class MemberResponse(MemberBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime

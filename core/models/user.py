# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# Registration, login, and account management payloads.
# Password hashes never appear in any response model.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.tables import UserRole


class UserCreate(BaseModel):
    """
    Schema for registering a new account.

    Example:
        {"email": "grace@example.org", "full_name": "Grace Hopper", "password": "s3cret-pass"}
    """
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Admin-side account changes. Only provided fields are applied."""
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    role: UserRole | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str
    role: UserRole
    is_active: bool
    created_at: datetime


class TokenResponse(BaseModel):
    """Returned by login and registration."""
    success: bool = True
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserResponse

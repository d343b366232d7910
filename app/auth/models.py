# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from core.tables import UserRole


class AuthUser(BaseModel):
    """
    Authenticated user resolved from a bearer token.

    Role and active flag come from the database, not the token, so a
    demoted or deactivated account loses access immediately.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID
    email: str
    full_name: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class TokenPayload(BaseModel):
    """Decoded JWT claims issued by this API."""
    sub: str  # User ID
    email: str | None = None
    role: str | None = None
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp

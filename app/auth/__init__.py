# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication for the API.
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
# =============================================================================

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models import AuthUser, TokenPayload
from app.auth.tokens import create_access_token, decode_access_token

__all__ = [
    "get_current_user",
    "require_admin",
    "AuthUser",
    "TokenPayload",
    "create_access_token",
    "decode_access_token",
]

# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
#
#   @router.delete("/{id}", dependencies=[Depends(require_admin)])
#   async def admin_only(...): ...
# =============================================================================

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.auth.tokens import decode_access_token
from app.dependencies import DbSession
from app.exceptions import AuthenticationError, NotFoundError, PermissionDeniedError
from core.services.user_service import user_service

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. auto_error is off so a missing header
# produces our own 401 envelope instead of FastAPI's 403.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    session: DbSession,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Resolve the user behind the bearer token.

    Raises:
        AuthenticationError: 401 if the token is missing, invalid, expired,
            or belongs to a deleted or deactivated account
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_access_token(credentials.credentials)

    try:
        user_id = UUID(payload.sub)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {payload.sub}")
        raise AuthenticationError("Invalid token")

    try:
        user = await user_service.get(session, user_id)
    except NotFoundError:
        raise AuthenticationError("Account no longer exists")

    if not user.is_active:
        raise AuthenticationError("Account is deactivated")

    return AuthUser.model_validate(user)


async def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    """
    Allow only administrators.

    Raises:
        PermissionDeniedError: 403 if the user is not an admin
    """
    if not user.is_admin:
        logger.info(f"Denied admin access to user {user.id}")
        raise PermissionDeniedError()
    return user

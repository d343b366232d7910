# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Account registration, login, and the current user's profile.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser
from app.auth.tokens import create_access_token
from app.dependencies import DbSession
from core.models.common import ApiResponse
from core.models.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from core.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: UserCreate, session: DbSession):
    """
    Create a member account and return an access token.

    Raises:
        409: If the email is already registered
    """
    user = await user_service.register(session, request)
    token, expires_in = create_access_token(user)
    logger.info(f"Registered user: {user.id}")

    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, session: DbSession):
    """
    Exchange email and password for an access token.

    Raises:
        401: If the credentials are wrong or the account is deactivated
    """
    user = await user_service.authenticate(session, request.email, request.password)
    token, expires_in = create_access_token(user)

    return TokenResponse(
        access_token=token,
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user_info(
    session: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    record = await user_service.get(session, user.id)
    return ApiResponse(data=UserResponse.model_validate(record))

# =============================================================================
# app/auth/tokens.py - Access Token Issuing and Verification
# =============================================================================
# HS256 JWTs signed with SECRET_KEY.
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import TokenPayload
from app.config import settings
from app.exceptions import AuthenticationError
from core.tables import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_access_token(
    user: User,
    secret_key: str | None = None,
    expires_minutes: int | None = None,
) -> tuple[str, int]:
    """
    Issue a signed access token for a user.

    Returns:
        Tuple of (token, lifetime in seconds)
    """
    lifetime = timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    token = jwt.encode(claims, secret_key or settings.SECRET_KEY, algorithm=ALGORITHM)
    return token, int(lifetime.total_seconds())


def decode_access_token(token: str, secret_key: str | None = None) -> TokenPayload:
    """
    Verify a token's signature and expiry.

    Raises:
        AuthenticationError: If the token is expired, tampered with, or malformed
    """
    try:
        claims = jwt.decode(token, secret_key or settings.SECRET_KEY, algorithms=[ALGORITHM])
        return TokenPayload(**claims)
    except ExpiredSignatureError:
        logger.info("JWT token has expired")
        raise AuthenticationError("Token has expired")
    except (JWTError, ValidationError) as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthenticationError("Invalid token")

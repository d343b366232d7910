# =============================================================================
# app/rate_limit.py - Request Rate Limiting
# =============================================================================
# Each application gets its own slowapi Limiter, built from its settings and
# stored on app.state.limiter where SlowAPIMiddleware looks for it.
#
# RATE_LIMIT is an application limit: one counter per client shared by every
# API route, not one per route. Health checks are exempt.
#
# Clients are keyed by remote address. Behind a proxy, uvicorn's proxy
# header handling rewrites the client address from X-Forwarded-For.
# =============================================================================

import logging
from collections.abc import Callable, Iterable

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from app.config import Settings
from app.exceptions import error_envelope

logger = logging.getLogger(__name__)


def build_limiter(settings: Settings, exempt: Iterable[Callable] = ()) -> Limiter:
    """
    Create the limiter for one application.

    Args:
        settings: Supplies RATE_LIMIT, RATE_LIMIT_ENABLED, RATE_LIMIT_STORAGE_URI
        exempt: Route handlers that are never counted or limited

    Returns:
        Limiter: Ready to be set as app.state.limiter
    """
    limiter = Limiter(
        key_func=get_remote_address,
        application_limits=[settings.RATE_LIMIT],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        headers_enabled=True,
        enabled=settings.RATE_LIMIT_ENABLED,
    )
    for handler in exempt:
        limiter.exempt(handler)
    return limiter


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with the standard envelope and the rate limit headers."""
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")
    response = JSONResponse(
        status_code=429,
        content=error_envelope(
            "Too many requests, please try again later.",
            "RATE_LIMITED",
        ),
    )
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response

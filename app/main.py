# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Church API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   python -m app.server                  # production entry point
#   uvicorn app.main:app --reload         # local development
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import exc as sa_exc
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import Settings, get_settings
from app.exceptions import (
    ChurchApiException,
    church_api_exception_handler,
    error_envelope,
    http_exception_handler,
    validation_exception_handler,
)
from app.lifecycle import LifecycleManager, ShutdownReason
from app.middleware import (
    BodySizeLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from app.rate_limit import build_limiter, rate_limit_exceeded_handler
from app.routers import (
    admin,
    blogs,
    contact,
    events,
    health,
    media,
    members,
    ministries,
    newsletter,
    prayer,
    resources,
    users,
)
from lib.database import (
    POOL_ACQUIRE_TIMEOUT_SECONDS,
    DatabaseError,
    DatabasePool,
    PoolState,
    PoolTimeoutError,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: open the connection pool, install shutdown hooks
    - Shutdown: drain the pool (once), remove the hooks
    """
    settings: Settings = app.state.settings
    pool: DatabasePool = app.state.pool
    lifecycle: LifecycleManager = app.state.lifecycle

    logger.info(f"Starting Church API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    if pool.state is PoolState.UNINITIALIZED:
        pool.open()
    lifecycle.install(asyncio.get_running_loop())

    try:
        yield
    finally:
        logger.info("Shutting down Church API")
        await lifecycle.shutdown(ShutdownReason.SERVER_STOP)
        lifecycle.uninstall()


# =============================================================================
# Error Stages
# =============================================================================

async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Pool exhaustion or a closing pool fails this request only."""
    logger.warning(f"Database unavailable for {request.method} {request.url.path}: {exc.code}")
    return JSONResponse(
        status_code=503,
        content=error_envelope("Service temporarily unavailable, please retry", exc.code),
        headers={"Retry-After": "5"},
    )


async def pool_timeout_handler(request: Request, exc: sa_exc.TimeoutError) -> JSONResponse:
    return await database_error_handler(request, PoolTimeoutError(POOL_ACQUIRE_TIMEOUT_SECONDS))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last stage for anything no other handler claimed.

    The client gets a generic 500; the process starts shutting down since
    its state can no longer be trusted.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    request.app.state.lifecycle.trigger(ShutdownReason.UNCAUGHT_EXCEPTION, exc)
    return JSONResponse(
        status_code=500,
        content=error_envelope("Internal server error"),
    )


# =============================================================================
# Application Factory
# =============================================================================

API_ROUTERS = [
    (auth_routes.router, "/api/auth", "Auth"),
    (events.router, "/api/events", "Events"),
    (ministries.router, "/api/ministries", "Ministries"),
    (prayer.router, "/api/prayer", "Prayer"),
    (contact.router, "/api/contact", "Contact"),
    (newsletter.router, "/api/newsletter", "Newsletter"),
    (admin.router, "/api/admin", "Admin"),
    (users.router, "/api/users", "Users"),
    (resources.router, "/api/resources", "Resources"),
    (media.router, "/api/media", "Media"),
    (members.router, "/api/members", "Members"),
    (blogs.router, "/api/blogs", "Blogs"),
]


def create_app(
    settings: Settings | None = None,
    pool: DatabasePool | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Defaults to the environment-loaded settings
        pool: Defaults to a new, unopened DatabasePool for DATABASE_URL.
            The lifespan opens it on startup and drains it on shutdown.

    Returns:
        FastAPI: Configured application. Its pool, lifecycle manager, and
        settings are on app.state.
    """
    settings = settings or get_settings()
    if pool is None:
        pool = DatabasePool(
            settings.DATABASE_URL,
            use_ssl=settings.DATABASE_SSL,
            echo=settings.DEBUG,
        )

    app = FastAPI(
        title="Church API",
        description="Backend for the church website: events, ministries, prayer, "
                    "contact, newsletter, members, media, resources, and blog.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.pool = pool
    app.state.lifecycle = LifecycleManager(
        pool,
        shutdown_on_unhandled_async_error=settings.SHUTDOWN_ON_UNHANDLED_ASYNC_ERROR,
    )

    # -------------------------------------------------------------------------
    # Middleware (last added runs first)
    # -------------------------------------------------------------------------

    app.add_middleware(
        RequestLoggingMiddleware,
        log_format="dev" if settings.is_development else "combined",
    )
    app.add_middleware(BodySizeLimitMiddleware, max_bytes=settings.max_body_size_bytes)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    app.add_exception_handler(ChurchApiException, church_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(sa_exc.TimeoutError, pool_timeout_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # -------------------------------------------------------------------------
    # Routers
    # -------------------------------------------------------------------------

    app.include_router(health.router, tags=["Health"])
    for router, prefix, tag in API_ROUTERS:
        app.include_router(router, prefix=prefix, tags=[tag])

    # Only /api is rate limited; health checks and docs are exempt
    app.state.limiter = build_limiter(
        settings,
        exempt=[
            route.endpoint
            for route in app.routes
            if hasattr(route, "endpoint") and not route.path.startswith("/api")
        ],
    )

    return app


app = create_app()

# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# Mounted at the root (not under /api): never rate limited, never
# written to the access log.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text

from app.dependencies import PoolDep
from lib.database import DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Liveness response."""
    status: str
    env: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    pool: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Liveness check.

    Returns 200 while the process is up. Does not touch the database.
    """
    return HealthResponse(
        status="ok",
        env=request.app.state.settings.ENVIRONMENT,
        timestamp=_now(),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request, pool: PoolDep):
    """
    Readiness check.

    Borrows a pooled connection and runs SELECT 1. Returns 503 when the
    database is unreachable, the pool is exhausted, or shutdown has begun.
    """
    try:
        async with pool.connection() as conn:
            await conn.execute(text("SELECT 1"))
        database = "healthy"
    except DatabaseError as e:
        database = f"unhealthy: {e.code}"
    except Exception as e:
        logger.warning(f"Readiness check failed: {e}")
        database = f"unhealthy: {str(e)[:50]}"

    ready = database == "healthy"
    body = ReadinessResponse(
        status="ready" if ready else "degraded",
        database=database,
        pool=pool.state.value,
        timestamp=_now(),
    )
    return JSONResponse(status_code=200 if ready else 503, content=body.model_dump())

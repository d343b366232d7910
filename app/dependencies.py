# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The connection pool lives on app.state (set by create_app) and is handed
# to route handlers from there, never imported as a module global.
# =============================================================================

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.lifecycle import LifecycleManager
from lib.database import DatabasePool


def get_pool(request: Request) -> DatabasePool:
    """Return the application's connection pool."""
    return request.app.state.pool


def get_lifecycle(request: Request) -> LifecycleManager:
    """Return the application's shutdown coordinator."""
    return request.app.state.lifecycle


async def get_db_session(
    pool: Annotated[DatabasePool, Depends(get_pool)],
) -> AsyncIterator[AsyncSession]:
    """
    Borrow a database session for one request.

    The connection goes back to the pool when the request finishes.
    """
    async with pool.session() as session:
        yield session


# Type aliases for dependency injection
PoolDep = Annotated[DatabasePool, Depends(get_pool)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

# =============================================================================
# lib/database.py - Database Connection Pool
# =============================================================================
# Owns the single shared SQLAlchemy async engine (and its connection pool)
# for the process. The pool moves through:
#
#   UNINITIALIZED -> OPEN -> DRAINING -> CLOSED
#                                    \-> FAILED   (disposal raised)
#
# Nothing leaves CLOSED or FAILED. drain() is one-shot: a second call while
# draining or after closing does nothing.
#
# Usage:
#   pool = DatabasePool(settings.DATABASE_URL)
#   pool.open()
#   async with pool.session() as session:
#       await session.execute(...)
#   await pool.drain()
# =============================================================================

from __future__ import annotations

import logging
import ssl
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any

from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


# =============================================================================
# Pool Tuning
# =============================================================================

POOL_MAX_SIZE = 10                  # hard cap on concurrent connections
POOL_IDLE_TIMEOUT_SECONDS = 30.0    # pooled connections are recycled after 30s
POOL_ACQUIRE_TIMEOUT_SECONDS = 10.0 # wait at most 10s for a free connection

# libpq connection options that asyncpg does not understand
_LIBPQ_ONLY_QUERY_KEYS = ("sslmode", "sslrootcert", "sslcert", "sslkey")


# =============================================================================
# Errors
# =============================================================================

class DatabaseError(ApplicationError):
    """Base error for connection pool operations."""

    def __init__(self, message: str, code: str = "DATABASE_ERROR", **kwargs):
        super().__init__(message, code=code, **kwargs)


class PoolStateError(DatabaseError):
    """Raised when an operation is not valid in the pool's current state."""

    def __init__(self, message: str):
        super().__init__(message, code="POOL_STATE_ERROR")


class PoolClosedError(DatabaseError):
    """Raised when borrowing from a pool that is not open."""

    def __init__(self, state: PoolState):
        super().__init__(
            f"Database pool is not accepting connections (state: {state.value})",
            code="POOL_CLOSED",
            suggestion="The service is shutting down; retry against another instance",
            details={"state": state.value},
        )


class PoolTimeoutError(DatabaseError):
    """Raised when no connection frees up within the acquisition timeout."""

    def __init__(self, timeout: float):
        super().__init__(
            f"Timed out after {timeout:g}s waiting for a database connection",
            code="POOL_TIMEOUT",
            suggestion="The database is busy; retry the request shortly",
            details={"timeout_seconds": timeout},
        )


class PoolDrainError(DatabaseError):
    """Raised when closing the pool fails during shutdown."""

    def __init__(self, error: str):
        super().__init__(
            f"Failed to close database pool: {error}",
            code="POOL_DRAIN_ERROR",
            details={"error": error},
        )


# =============================================================================
# URL / TLS Helpers
# =============================================================================

def normalize_database_url(raw_url: str) -> URL:
    """
    Turn a connection string into a URL for the async engine.

    postgres:// and postgresql:// URLs are switched to the asyncpg driver and
    stripped of libpq-only options. Other URLs are returned unchanged.

    Example:
        normalize_database_url("postgres://u:p@db/app?sslmode=require")
        # postgresql+asyncpg://u:***@db/app
    """
    url = make_url(raw_url)
    if url.get_backend_name() not in ("postgres", "postgresql"):
        return url
    return url.set(drivername="postgresql+asyncpg").difference_update_query(
        _LIBPQ_ONLY_QUERY_KEYS
    )


def build_ssl_context() -> ssl.SSLContext:
    """
    TLS context for hosted Postgres.

    Encrypts the connection but does not verify the server certificate.
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


# =============================================================================
# Pool
# =============================================================================

class PoolState(str, Enum):
    """Lifecycle states of the connection pool."""
    UNINITIALIZED = "uninitialized"
    OPEN = "open"
    DRAINING = "draining"
    CLOSED = "closed"
    FAILED = "failed"


class DatabasePool:
    """
    The process-wide database connection pool.

    One instance is created at startup, handed to request handlers through
    dependency injection, and drained exactly once at shutdown.

    Example:
        pool = DatabasePool("postgresql://...")
        pool.open()

        async with pool.session() as session:
            result = await session.execute(select(Event))

        await pool.drain()
        assert pool.state is PoolState.CLOSED
    """

    def __init__(
        self,
        database_url: str,
        use_ssl: bool = True,
        echo: bool = False,
        engine_factory: Callable[..., AsyncEngine] = create_async_engine,
    ):
        self._url = normalize_database_url(database_url)
        self._use_ssl = use_ssl
        self._echo = echo
        self._engine_factory = engine_factory
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._state = PoolState.UNINITIALIZED

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def url(self) -> URL:
        return self._url

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise PoolStateError("Database pool has not been opened")
        return self._engine

    def engine_options(self) -> dict[str, Any]:
        """Keyword arguments passed to the engine factory."""
        options: dict[str, Any] = {
            "echo": self._echo,
            "pool_size": POOL_MAX_SIZE,
            "max_overflow": 0,
            "pool_timeout": POOL_ACQUIRE_TIMEOUT_SECONDS,
            "pool_recycle": POOL_IDLE_TIMEOUT_SECONDS,
            "pool_pre_ping": True,
        }
        if self._use_ssl and self._url.get_backend_name() == "postgresql":
            options["connect_args"] = {"ssl": build_ssl_context()}
        return options

    def open(self) -> None:
        """
        Create the engine and session factory.

        Raises:
            PoolStateError: If the pool was already opened (or closed)
        """
        if self._state is not PoolState.UNINITIALIZED:
            raise PoolStateError(
                f"Database pool can only be opened once (state: {self._state.value})"
            )

        self._engine = self._engine_factory(self._url, **self.engine_options())
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._state = PoolState.OPEN
        logger.info(
            f"Database pool open: {self._url.render_as_string(hide_password=True)} "
            f"(max={POOL_MAX_SIZE}, acquire_timeout={POOL_ACQUIRE_TIMEOUT_SECONDS:g}s)"
        )

    def _ensure_open(self) -> None:
        if self._state is not PoolState.OPEN:
            raise PoolClosedError(self._state)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Borrow an ORM session for the duration of the block.

        The underlying connection is checked out on first use and returned
        when the block exits.

        Raises:
            PoolClosedError: If the pool is not open
            PoolTimeoutError: If no connection frees up in time
        """
        self._ensure_open()
        async with self._session_factory() as session:
            try:
                yield session
            except sa_exc.TimeoutError as e:
                logger.warning(f"Database connection acquisition timed out: {e}")
                raise PoolTimeoutError(POOL_ACQUIRE_TIMEOUT_SECONDS) from e

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """
        Borrow a raw connection for the duration of the block.

        Raises:
            PoolClosedError: If the pool is not open
            PoolTimeoutError: If no connection frees up in time
        """
        self._ensure_open()
        try:
            conn = await self._engine.connect()
        except sa_exc.TimeoutError as e:
            logger.warning(f"Database connection acquisition timed out: {e}")
            raise PoolTimeoutError(POOL_ACQUIRE_TIMEOUT_SECONDS) from e

        try:
            yield conn
        finally:
            await conn.close()

    async def drain(self) -> bool:
        """
        Close every pooled connection and reject further borrows.

        Only the first call does any work; later calls are no-ops.

        Returns:
            True if this call performed the drain, False if it was a no-op

        Raises:
            PoolDrainError: If disposing the engine fails
        """
        if self._state is PoolState.UNINITIALIZED:
            self._state = PoolState.CLOSED
            logger.info("Database pool was never opened; marked closed")
            return True

        if self._state is not PoolState.OPEN:
            logger.debug(f"Ignoring drain request (state: {self._state.value})")
            return False

        self._state = PoolState.DRAINING
        logger.info("Closing database pool...")
        try:
            await self._engine.dispose()
        except Exception as e:
            self._state = PoolState.FAILED
            raise PoolDrainError(str(e)) from e

        self._state = PoolState.CLOSED
        logger.info("Database pool closed")
        return True

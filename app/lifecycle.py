# =============================================================================
# app/lifecycle.py - Process Shutdown Coordination
# =============================================================================
# Turns every way the process can be told to stop into one shutdown path:
#
#   SIGTERM / SIGINT              -> loop signal handlers
#   uncaught exception            -> sys.excepthook, threading.excepthook,
#                                    and the API's catch-all error handler
#   unobserved task failure       -> loop exception handler (opt-in)
#   server stopping on its own    -> FastAPI lifespan exit
#
# The first trigger wins. It asks the server to stop and starts the pool
# drain; every later trigger is a no-op. The drain result decides the
# process exit code: 0 when the pool closed cleanly, 1 when it did not.
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import signal
import sys
import threading
from collections.abc import Callable
from enum import Enum
from typing import Any

from lib.database import DatabasePool

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class ShutdownReason(str, Enum):
    """Events that start the shutdown sequence."""
    SIGTERM = "SIGTERM"
    SIGINT = "SIGINT"
    UNCAUGHT_EXCEPTION = "uncaughtException"
    UNHANDLED_REJECTION = "unhandledRejection"
    SERVER_STOP = "serverStop"


_SIGNAL_REASONS = {
    signal.SIGTERM: ShutdownReason.SIGTERM,
    signal.SIGINT: ShutdownReason.SIGINT,
}


class LifecycleManager:
    """
    Owns the shutdown latch for one process.

    Example:
        lifecycle = LifecycleManager(pool, request_stop=stop_server)
        lifecycle.install(asyncio.get_running_loop())
        ...
        code = await lifecycle.shutdown(ShutdownReason.SERVER_STOP)
    """

    def __init__(
        self,
        pool: DatabasePool,
        request_stop: Callable[[], None] | None = None,
        shutdown_on_unhandled_async_error: bool = False,
    ):
        self.pool = pool
        self.request_stop = request_stop
        self.shutdown_on_unhandled_async_error = shutdown_on_unhandled_async_error

        self.reason: ShutdownReason | None = None
        self.exit_code: int | None = None

        self._latch = threading.Lock()
        self._triggered = False
        self._shutdown_future: asyncio.Future[int] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._signals_installed: list[int] = []
        self._previous_excepthook: Callable[..., Any] | None = None
        self._previous_thread_excepthook: Callable[..., Any] | None = None
        self._previous_loop_handler: Callable[..., Any] | None = None

    @property
    def triggered(self) -> bool:
        return self._triggered

    # -------------------------------------------------------------------------
    # Hook installation
    # -------------------------------------------------------------------------

    def install(self, loop: asyncio.AbstractEventLoop) -> None:
        """
        Register signal, excepthook, and loop exception handlers.

        Signal handlers can only be registered from the main thread; elsewhere
        (e.g. under a test client) they are skipped.
        """
        self._loop = loop

        if threading.current_thread() is threading.main_thread():
            for signum, reason in _SIGNAL_REASONS.items():
                try:
                    loop.add_signal_handler(signum, self.trigger, reason)
                except NotImplementedError:
                    logger.debug(f"Signal handlers not supported by this loop; skipping {reason.value}")
                    break
                self._signals_installed.append(signum)

        self._previous_excepthook = sys.excepthook
        sys.excepthook = self._handle_uncaught

        self._previous_thread_excepthook = threading.excepthook
        threading.excepthook = self._handle_thread_uncaught

        self._previous_loop_handler = loop.get_exception_handler()
        loop.set_exception_handler(self._handle_loop_exception)

        logger.debug("Shutdown hooks installed")

    def uninstall(self) -> None:
        """Restore whatever handlers were in place before install()."""
        if self._loop is None:
            return

        for signum in self._signals_installed:
            self._loop.remove_signal_handler(signum)
        self._signals_installed.clear()

        if sys.excepthook == self._handle_uncaught:
            sys.excepthook = self._previous_excepthook or sys.__excepthook__
        if threading.excepthook == self._handle_thread_uncaught:
            threading.excepthook = self._previous_thread_excepthook or threading.__excepthook__
        if not self._loop.is_closed():
            self._loop.set_exception_handler(self._previous_loop_handler)

        logger.debug("Shutdown hooks removed")

    def _handle_uncaught(self, exc_type, exc, tb) -> None:
        (self._previous_excepthook or sys.__excepthook__)(exc_type, exc, tb)
        self.trigger(ShutdownReason.UNCAUGHT_EXCEPTION, exc)

    def _handle_thread_uncaught(self, args) -> None:
        (self._previous_thread_excepthook or threading.__excepthook__)(args)
        self.trigger(ShutdownReason.UNCAUGHT_EXCEPTION, args.exc_value)

    def _handle_loop_exception(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        if self._previous_loop_handler is not None:
            self._previous_loop_handler(loop, context)
        else:
            loop.default_exception_handler(context)

        exc = context.get("exception")
        if exc is None:
            return

        if self.shutdown_on_unhandled_async_error:
            self.trigger(ShutdownReason.UNHANDLED_REJECTION, exc)
        else:
            logger.error(f"Unhandled error in background task: {exc!r}")

    # -------------------------------------------------------------------------
    # Shutdown
    # -------------------------------------------------------------------------

    def trigger(self, reason: ShutdownReason, exc: BaseException | None = None) -> bool:
        """
        Start shutdown once.

        Safe to call from any thread and from signal handlers.

        Returns:
            True if this call started shutdown, False if it was already underway
        """
        with self._latch:
            if self._triggered:
                logger.info(f"Received {reason.value} while shutting down; ignoring")
                return False
            self._triggered = True
            self.reason = reason

        if exc is not None:
            logger.error(f"Received {reason.value}: {exc!r}. Closing DB pool...")
        else:
            logger.warning(f"Received {reason.value}. Closing DB pool...")

        self._schedule_shutdown(reason)

        if self.request_stop is not None:
            self.request_stop()
        return True

    def _schedule_shutdown(self, reason: ShutdownReason) -> None:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is not None:
            self._ensure_shutdown_future(reason)
        elif self._loop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._ensure_shutdown_future, reason)
        else:
            logger.warning("No event loop available; pool will be drained when the server stops")

    def _ensure_shutdown_future(self, reason: ShutdownReason) -> asyncio.Future[int]:
        if self._shutdown_future is None:
            self._shutdown_future = asyncio.ensure_future(self._run_shutdown(reason))
        return self._shutdown_future

    async def shutdown(self, reason: ShutdownReason = ShutdownReason.SERVER_STOP) -> int:
        """
        Drain the pool (once) and return the process exit code.

        Concurrent and repeated callers all wait on the same drain.
        """
        with self._latch:
            if not self._triggered:
                self._triggered = True
                self.reason = reason
        future = self._ensure_shutdown_future(self.reason or reason)
        return await asyncio.shield(future)

    async def _run_shutdown(self, reason: ShutdownReason) -> int:
        try:
            await self.pool.drain()
        except Exception:
            logger.exception(f"Error during DB shutdown (trigger: {reason.value})")
            self.exit_code = EXIT_FAILURE
        else:
            logger.info(f"Shutdown complete (trigger: {reason.value})")
            self.exit_code = EXIT_OK
        return self.exit_code

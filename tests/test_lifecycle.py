# =============================================================================
# tests/test_lifecycle.py - Shutdown Coordination Tests
# =============================================================================
# Tests for app/lifecycle.py:
# - The first trigger wins; later triggers are ignored
# - The pool is drained exactly once however many triggers arrive
# - Exit code is 0 on a clean drain and 1 when the drain fails
# - Signal and exception hooks route into the same latch
# =============================================================================

import asyncio
import os
import signal
import sys
import threading
from unittest.mock import MagicMock

import pytest

from app.lifecycle import EXIT_FAILURE, EXIT_OK, LifecycleManager, ShutdownReason
from lib.database import PoolState


@pytest.fixture
def open_pool(make_pool):
    pool = make_pool()
    pool.open()
    return pool


class TestTriggerLatch:
    """Tests for LifecycleManager.trigger()."""

    def test_first_trigger_wins(self, open_pool):
        lifecycle = LifecycleManager(open_pool)

        async def run():
            first = lifecycle.trigger(ShutdownReason.SIGTERM)
            second = lifecycle.trigger(ShutdownReason.SIGINT)
            code = await lifecycle.shutdown()
            return first, second, code

        first, second, code = asyncio.run(run())

        assert first is True
        assert second is False
        assert lifecycle.reason is ShutdownReason.SIGTERM
        assert code == EXIT_OK

    def test_pool_drained_once_for_many_triggers(self, open_pool, fake_engine):
        fake_engine.dispose_delay = 0.05
        lifecycle = LifecycleManager(open_pool)

        async def run():
            lifecycle.trigger(ShutdownReason.SIGTERM)
            lifecycle.trigger(ShutdownReason.UNCAUGHT_EXCEPTION, RuntimeError("boom"))
            return await asyncio.gather(
                lifecycle.shutdown(),
                lifecycle.shutdown(ShutdownReason.SERVER_STOP),
            )

        codes = asyncio.run(run())

        assert codes == [EXIT_OK, EXIT_OK]
        assert fake_engine.dispose_calls == 1
        assert open_pool.state is PoolState.CLOSED

    def test_request_stop_called_once(self, open_pool):
        request_stop = MagicMock()
        lifecycle = LifecycleManager(open_pool, request_stop=request_stop)

        async def run():
            lifecycle.trigger(ShutdownReason.SIGINT)
            lifecycle.trigger(ShutdownReason.SIGTERM)
            await lifecycle.shutdown()

        asyncio.run(run())

        request_stop.assert_called_once_with()

    def test_shutdown_without_trigger_records_server_stop(self, open_pool):
        lifecycle = LifecycleManager(open_pool)

        code = asyncio.run(lifecycle.shutdown())

        assert code == EXIT_OK
        assert lifecycle.triggered
        assert lifecycle.reason is ShutdownReason.SERVER_STOP
        # A late trigger does nothing once shutdown has run
        assert lifecycle.trigger(ShutdownReason.SIGTERM) is False


class TestExitCodes:
    """The drain outcome decides the exit code."""

    def test_clean_drain_exits_zero(self, open_pool):
        lifecycle = LifecycleManager(open_pool)

        assert asyncio.run(lifecycle.shutdown()) == EXIT_OK
        assert lifecycle.exit_code == 0

    def test_failed_drain_exits_one(self, open_pool, fake_engine):
        fake_engine.dispose_error = ConnectionError("server closed the connection")
        lifecycle = LifecycleManager(open_pool)

        assert asyncio.run(lifecycle.shutdown()) == EXIT_FAILURE
        assert lifecycle.exit_code == 1
        assert open_pool.state is PoolState.FAILED

    def test_unopened_pool_exits_zero(self, make_pool):
        lifecycle = LifecycleManager(make_pool())

        assert asyncio.run(lifecycle.shutdown()) == EXIT_OK


class TestHooks:
    """Tests for install() / uninstall()."""

    def test_loop_errors_logged_by_default(self, open_pool):
        lifecycle = LifecycleManager(open_pool)

        async def run():
            loop = asyncio.get_running_loop()
            lifecycle.install(loop)
            try:
                loop.call_exception_handler({
                    "message": "Task exception was never retrieved",
                    "exception": ValueError("lost"),
                })
            finally:
                lifecycle.uninstall()

        asyncio.run(run())

        assert not lifecycle.triggered

    def test_loop_errors_trigger_when_enabled(self, open_pool, fake_engine):
        lifecycle = LifecycleManager(open_pool, shutdown_on_unhandled_async_error=True)

        async def run():
            loop = asyncio.get_running_loop()
            lifecycle.install(loop)
            try:
                loop.call_exception_handler({
                    "message": "Task exception was never retrieved",
                    "exception": ValueError("lost"),
                })
                return await lifecycle.shutdown()
            finally:
                lifecycle.uninstall()

        code = asyncio.run(run())

        assert lifecycle.reason is ShutdownReason.UNHANDLED_REJECTION
        assert code == EXIT_OK
        assert fake_engine.dispose_calls == 1

    def test_excepthook_triggers_shutdown(self, open_pool, monkeypatch):
        previous = MagicMock()
        monkeypatch.setattr(sys, "excepthook", previous)
        lifecycle = LifecycleManager(open_pool)

        async def run():
            lifecycle.install(asyncio.get_running_loop())
            try:
                error = RuntimeError("crash")
                sys.excepthook(RuntimeError, error, None)
                return await lifecycle.shutdown()
            finally:
                lifecycle.uninstall()

        code = asyncio.run(run())

        previous.assert_called_once()
        assert lifecycle.reason is ShutdownReason.UNCAUGHT_EXCEPTION
        assert code == EXIT_OK
        assert sys.excepthook is previous

    def test_trigger_from_another_thread(self, open_pool, fake_engine):
        lifecycle = LifecycleManager(open_pool)

        async def run():
            lifecycle.install(asyncio.get_running_loop())
            try:
                worker = threading.Thread(
                    target=lifecycle.trigger,
                    args=(ShutdownReason.UNCAUGHT_EXCEPTION, RuntimeError("worker died")),
                )
                worker.start()
                worker.join()
                await asyncio.sleep(0.05)
                return await lifecycle.shutdown()
            finally:
                lifecycle.uninstall()

        code = asyncio.run(run())

        assert code == EXIT_OK
        assert fake_engine.dispose_calls == 1

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
    def test_sigterm_twice_drains_once(self, open_pool, fake_engine):
        request_stop = MagicMock()
        lifecycle = LifecycleManager(open_pool, request_stop=request_stop)

        async def run():
            lifecycle.install(asyncio.get_running_loop())
            try:
                if signal.SIGTERM not in lifecycle._signals_installed:
                    pytest.skip("signal handlers unavailable in this thread")
                os.kill(os.getpid(), signal.SIGTERM)
                await asyncio.sleep(0.05)
                os.kill(os.getpid(), signal.SIGTERM)
                await asyncio.sleep(0.05)
                return await lifecycle.shutdown()
            finally:
                lifecycle.uninstall()

        code = asyncio.run(run())

        assert code == EXIT_OK
        assert lifecycle.reason is ShutdownReason.SIGTERM
        assert fake_engine.dispose_calls == 1
        request_stop.assert_called_once_with()


class TestShutdownPolicySetting:
    """SHUTDOWN_ON_UNHANDLED_ASYNC_ERROR reaches the app's lifecycle manager."""

    def test_off_by_default(self, make_app):
        assert make_app().state.lifecycle.shutdown_on_unhandled_async_error is False

    def test_enabled_from_settings(self, make_app):
        app = make_app(SHUTDOWN_ON_UNHANDLED_ASYNC_ERROR=True)

        assert app.state.lifecycle.shutdown_on_unhandled_async_error is True

# =============================================================================
# tests/test_server.py - Process Entry Point Tests
# =============================================================================
# Tests for app/server.py with uvicorn replaced by a stub:
# - The served app is app.main.app, so the process has exactly one pool
# - A shutdown trigger asks the server to exit
# =============================================================================

import pytest

import app.main as main_module
from app import server
from lib.database import DatabasePool


class StubServer:
    """Stands in for uvicorn.Server; run() fires the lifecycle's stop request."""

    instances = []

    def __init__(self, config):
        self.config = config
        self.should_exit = False
        StubServer.instances.append(self)

    def run(self):
        self.config.app.state.lifecycle.request_stop()


@pytest.fixture
def stub_server(monkeypatch):
    StubServer.instances = []
    monkeypatch.setattr(server.uvicorn, "Server", StubServer)
    # server.main() wires request_stop on the module-level app; undo it afterwards
    monkeypatch.setattr(main_module.app.state.lifecycle, "request_stop", None)
    return StubServer


class TestServerMain:
    """Tests for server.main()."""

    def test_serves_the_module_level_app(self, stub_server):
        server.main()

        assert stub_server.instances[0].config.app is main_module.app

    def test_no_second_pool_is_built(self, stub_server, monkeypatch):
        constructed = []
        original_init = DatabasePool.__init__

        def counting_init(self, *args, **kwargs):
            constructed.append(self)
            original_init(self, *args, **kwargs)

        monkeypatch.setattr(DatabasePool, "__init__", counting_init)

        server.main()

        assert constructed == []
        assert isinstance(main_module.app.state.pool, DatabasePool)

    def test_stop_request_reaches_uvicorn(self, stub_server):
        server.main()

        assert stub_server.instances[0].should_exit is True

    def test_exits_1_when_lifespan_never_ran(self, stub_server):
        # The stub never starts the app, so the pool was never drained
        assert server.main() == 1

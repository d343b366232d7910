# =============================================================================
# app/server.py - Process Entry Point
# =============================================================================
# Startup order:
#   1. Load and validate settings. Missing DATABASE_URL -> exit 1 before any
#      socket is bound.
#   2. Import the application (its pool is constructed, not yet connected).
#   3. Run uvicorn. The lifespan opens the pool and installs shutdown hooks.
#   4. When the server stops, exit with the lifecycle's code: 0 if the pool
#      drained cleanly, 1 otherwise.
#
# Usage:
#   python -m app.server
# =============================================================================

import logging
import sys

import uvicorn

from app.exceptions import ConfigurationError

logger = logging.getLogger("app.server")


def main() -> int:
    """
    Run the API server until shutdown.

    Returns:
        Process exit code
    """
    try:
        from app.config import get_settings
        settings = get_settings()
    except ConfigurationError as e:
        logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.critical(f"Startup aborted: {e.message}")
        return 1

    # The module-level app owns the process's only pool
    from app.main import app

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.API_HOST,
            port=settings.API_PORT,
            proxy_headers=True,
            forwarded_allow_ips=settings.TRUSTED_PROXY_IPS,
            log_config=None,
            access_log=False,
            server_header=False,
        )
    )

    lifecycle = app.state.lifecycle

    def request_stop() -> None:
        server.should_exit = True

    lifecycle.request_stop = request_stop

    server.run()

    if lifecycle.exit_code is None:
        # Server never reached the lifespan (e.g. port already in use)
        logger.error("Server stopped before the application started")
        return 1
    return lifecycle.exit_code


if __name__ == "__main__":
    sys.exit(main())

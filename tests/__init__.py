# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Church API:
# - test_config.py: Settings loading and startup validation
# - test_database.py: Connection pool configuration and state machine
# - test_lifecycle.py: Shutdown triggers, latch, and exit codes
# - test_app.py: Health, 404, error envelope, and middleware behavior
# - test_auth.py: Password hashing, tokens, and auth dependencies
# - test_services.py: CRUD and resource services with mocked sessions
# - test_routers.py: Resource endpoints with patched services
# - test_server.py: Process entry point with uvicorn stubbed
#
# Run tests with: pytest
# =============================================================================

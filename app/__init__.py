# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the web application:
# - main.py: App factory, middleware stack, error handlers
# - server.py: Process entry point (python -m app.server)
# - config.py: Environment variable loading and settings
# - lifecycle.py: Shutdown triggers and exit codes
# - middleware.py / rate_limit.py: Request pipeline stages
# - auth/: Accounts, tokens, and role checks
# - routers/: API endpoint definitions organized by resource
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

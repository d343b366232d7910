# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain layer:
# - tables.py: SQLAlchemy ORM tables
# - models/: Pydantic schemas for request/response validation
# - services/: Database operations and business rules
#
# Routes in app/ stay thin and delegate to these services.
# =============================================================================

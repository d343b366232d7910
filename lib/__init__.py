# =============================================================================
# lib/ - Standalone Infrastructure Modules
# =============================================================================
# This package contains modules with no dependency on the web layer:
# - database.py: The process-wide connection pool and its state machine
# - security.py: Password hashing
# - utils.py: Base error class
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import (
    DatabaseError,
    DatabasePool,
    PoolClosedError,
    PoolDrainError,
    PoolState,
    PoolStateError,
    PoolTimeoutError,
)
from lib.security import hash_password, verify_password
from lib.utils import ApplicationError

__all__ = [
    # Database
    "DatabaseError",
    "DatabasePool",
    "PoolClosedError",
    "PoolDrainError",
    "PoolState",
    "PoolStateError",
    "PoolTimeoutError",
    # Security
    "hash_password",
    "verify_password",
    # Utils
    "ApplicationError",
]

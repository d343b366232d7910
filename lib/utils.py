# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Base error type for the lib/ layer. lib/ has no dependency on the web app,
# so these errors carry a code and context but no HTTP status; app/main.py
# maps them to responses.
# =============================================================================

from typing import Any


class ApplicationError(Exception):
    """
    Base error class for library errors.

    Attributes:
        code: Error code for categorization (e.g. POOL_TIMEOUT)
        message: Human-readable error message
        suggestion: What the caller can do about it, if anything
        details: Additional context for logs

    Example:
        class PoolTimeoutError(ApplicationError):
            def __init__(self, timeout: float):
                super().__init__(f"Timed out after {timeout}s", code="POOL_TIMEOUT")
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" ({self.suggestion})"
        return result

# =============================================================================
# core/models/common.py - Shared Response Envelopes
# =============================================================================
# Every successful response is wrapped in the same envelope:
#   {"success": true, "data": ..., "message": "..."}
# Lists add pagination fields.
# =============================================================================

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for a single item."""
    success: bool = True
    message: str | None = None
    data: T | None = None


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for a page of items."""
    success: bool = True
    data: list[T] = Field(default_factory=list)
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)


class MessageResponse(BaseModel):
    """Envelope with no payload (e.g. after a delete)."""
    success: bool = True
    message: str

# =============================================================================
# app/routers/_params.py - Shared Query Parameters
# =============================================================================

from typing import Annotated

from fastapi import Query

Page = Annotated[int, Query(ge=1, description="Page number")]
PageSize = Annotated[int, Query(ge=1, le=100, description="Items per page")]

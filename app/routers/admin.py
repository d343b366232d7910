# =============================================================================
# app/routers/admin.py - Admin Dashboard Endpoints
# =============================================================================
# Every route in this router requires the admin role.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import require_admin
from app.dependencies import DbSession
from core.models.common import ApiResponse
from core.services.admin_service import AdminService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=ApiResponse[dict[str, int]])
async def dashboard_stats(session: DbSession):
    """Counts for the admin dashboard (pending prayers, unread messages, ...)."""
    stats = await AdminService.dashboard_stats(session)
    return ApiResponse(data=stats)

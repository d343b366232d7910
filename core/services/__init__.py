# =============================================================================
# core/services/ - Business Logic Services
# =============================================================================
# Services sit between the API routes and the database. Each one is bound
# to an ORM table and receives a borrowed AsyncSession per call.
# =============================================================================

from core.services.admin_service import AdminService
from core.services.blog_service import blog_service
from core.services.contact_service import contact_service, newsletter_service
from core.services.crud_service import CrudService
from core.services.directory_service import (
    media_service,
    member_service,
    ministry_service,
    resource_service,
)
from core.services.event_service import event_service
from core.services.prayer_service import prayer_service
from core.services.user_service import user_service

__all__ = [
    "AdminService",
    "CrudService",
    "blog_service",
    "contact_service",
    "event_service",
    "media_service",
    "member_service",
    "ministry_service",
    "newsletter_service",
    "prayer_service",
    "resource_service",
    "user_service",
]

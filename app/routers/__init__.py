# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Liveness and readiness checks (mounted at the root)
# - events.py, ministries.py, prayer.py, contact.py, newsletter.py
# - admin.py, users.py, members.py: admin-only management
# - resources.py, media.py, blogs.py: published content
#
# Each router is mounted in main.py under /api/<feature>.
# =============================================================================

from . import admin
from . import blogs
from . import contact
from . import events
from . import health
from . import media
from . import members
from . import ministries
from . import newsletter
from . import prayer
from . import resources
from . import users

__all__ = [
    "admin",
    "blogs",
    "contact",
    "events",
    "health",
    "media",
    "members",
    "ministries",
    "newsletter",
    "prayer",
    "resources",
    "users",
]

"""
Route handlers. ``fallback`` must be included last: its catch-all paths
answer preflights, unknown POST paths and every other method.
"""

from gateway.routes.admin import router as admin_router
from gateway.routes.fallback import router as fallback_router
from gateway.routes.submissions import router as submissions_router

__all__ = [
    "admin_router",
    "fallback_router",
    "submissions_router",
]

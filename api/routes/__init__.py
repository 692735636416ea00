"""
API Routes Package.

Aggregates all API routers for inclusion in the main FastAPI application.
"""

from fastapi import APIRouter

from api.routes.downloads import router as downloads_router
from api.routes.health import router as health_router
from api.routes.reports import router as reports_router
from api.routes.users import router as users_router

# JSON API lives under /api; downloads are served from the site root
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(users_router)
api_router.include_router(reports_router)

__all__ = [
    "api_router",
    "downloads_router",
    "health_router",
    "reports_router",
    "users_router",
]

"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from guestmenu.api.v1.dependencies (no manual store/service construction).
"""

from fastapi import APIRouter

from guestmenu.api.v1.endpoints import events, health, subdomains, users

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(subdomains.router, prefix="/subdomains", tags=["subdomains"])
api_router.include_router(events.router, prefix="/events", tags=["events"])

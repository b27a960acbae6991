"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
their collaborators from adminpanel.api.v1.dependencies.
"""

from fastapi import APIRouter

from adminpanel.api.v1.endpoints import dashboard, health, notifications

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)

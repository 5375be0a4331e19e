"""
API v1 router.

Aggregates all v1 endpoints.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import channels, equilibrium

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(
    channels.router, prefix="/channels", tags=["Strain channels"]
)
api_router.include_router(
    equilibrium.router, prefix="/equilibrium", tags=["Equilibrium"]
)

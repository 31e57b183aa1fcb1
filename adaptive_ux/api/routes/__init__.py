"""API routes."""

from fastapi import APIRouter

from adaptive_ux.api.routes import interactions, layouts

api_router = APIRouter()

api_router.include_router(interactions.router, prefix="/interactions", tags=["interactions"])
api_router.include_router(layouts.router, prefix="/layouts", tags=["layouts"])
api_router.include_router(layouts.adjustments_router, prefix="/adjustments", tags=["adjustments"])

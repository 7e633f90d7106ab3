"""API v1 router aggregation.

This module combines all v1 API routers into a single router
that can be mounted on the main FastAPI application.
"""

from fastapi import APIRouter

from .benefit_tiers import router as benefit_tiers_router
from .health import router as health_router
from .quotes import router as quotes_router

# Create main v1 router
router = APIRouter(prefix="/api/v1")

# Include all sub-routers
router.include_router(health_router, tags=["health"])
router.include_router(quotes_router, tags=["quotes"])
router.include_router(benefit_tiers_router, tags=["benefit-tiers"])


__all__ = ["router"]

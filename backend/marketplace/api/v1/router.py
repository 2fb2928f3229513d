"""
API v1 router aggregation.

WHAT: Combine all v1 endpoint routers
WHY: Single place to register all API routes
HOW: Include routers from endpoints with prefixes
"""

from fastapi import APIRouter

from .endpoints import status, profiles, items, orders, reviews

# Create main v1 router
api_router = APIRouter()

api_router.include_router(status.router, prefix="/api/v1", tags=["status"])
api_router.include_router(profiles.router, prefix="/api/v1", tags=["profiles"])
api_router.include_router(items.router, prefix="/api/v1", tags=["items"])
api_router.include_router(orders.router, prefix="/api/v1", tags=["orders"])
api_router.include_router(reviews.router, prefix="/api/v1", tags=["reviews"])

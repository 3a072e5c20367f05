"""
API router - aggregates all endpoint modules under /api.
"""

from fastapi import APIRouter

from aubazaar.api.endpoints import auth, categories, dashboard, health, listings, messages, profile

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(listings.router, prefix="/listings", tags=["listings"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

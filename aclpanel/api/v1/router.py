"""
API v1 router.
"""
from fastapi import APIRouter

from aclpanel.api.v1.endpoints import access, health, users

api_router = APIRouter()

# Health check endpoint (no prefix, so it's /api/v1/health)
api_router.include_router(health.router, tags=["health"])

api_router.include_router(access.router, prefix="/access", tags=["access"])
api_router.include_router(users.router, prefix="/admin/users", tags=["users"])

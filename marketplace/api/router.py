"""
API router - mounts health, auth and item endpoints under /api.
"""

from fastapi import APIRouter

from marketplace.api.endpoints import auth, health, items
from marketplace.schemas.common import ErrorResponse

_ERRORS = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 500)}

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"], responses=_ERRORS)
api_router.include_router(items.router, prefix="/items", tags=["items"], responses=_ERRORS)

"""
Health checks for load balancers and monitoring.
"""

from fastapi import APIRouter

from marketplace.config import get_settings

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"success": True, "status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready():
    return {"success": True, "status": "ready"}

"""Health check endpoints"""

from fastapi import APIRouter, Request

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(request: Request):
    """Basic health check, including whether the store client is up"""
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy",
        "service": "amora-backend",
        "store_initialized": bool(store and store.is_initialized),
    }

# medaccess/api/routers/health.py

from fastapi import APIRouter, Request

from medaccess.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check with caller principal and correlation ID from request state."""
    settings = get_settings()
    return {
        "status": "ok",
        "principal_id": request.state.principal_id,
        "correlation_id": request.state.correlation_id,
        "environment": settings.environment,
        "version": settings.version,
    }

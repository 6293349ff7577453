"""
Health check routes for the gateway
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from gateway_service import __version__

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "gateway-service",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
        "backend": request.app.state.config.backend_api_url,
    }

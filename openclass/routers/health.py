# openclass/routers/health.py
"""Health check endpoints."""
from datetime import datetime, timezone
from fastapi import APIRouter, Request
import logging
import time

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
async def health_check(request: Request):
    """Basic liveness check that doesn't touch external services"""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "timestamp": _now(),
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "environment": settings.environment,
        "version": settings.app_version,
    }


@router.get("/health/full")
async def full_health_check(request: Request):
    """Comprehensive health check"""
    components = {
        "database": "healthy" if await request.app.state.db.health_check() else "unhealthy",
        "cache": "healthy" if request.app.state.cache.enabled else "disabled",
    }
    overall_status = "ok" if components["database"] == "healthy" else "degraded"
    if overall_status != "ok":
        logger.warning(f"Health degraded: {components}")
    return {"status": overall_status, "components": components, "timestamp": _now()}


@router.get("/")
async def root(request: Request):
    settings = request.app.state.settings
    return {
        "message": "OpenClass API Server",
        "version": settings.app_version,
        "status": "running",
        "timestamp": _now(),
    }

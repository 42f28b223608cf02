"""Health check and monitoring routes"""
import time
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from teachplan import __version__
from teachplan.api.schemas import HealthResponse


def create_health_router(start_time: float) -> APIRouter:
    """Create health check router.

    Args:
        start_time: Server start time for uptime calculation

    Returns:
        FastAPI router with health endpoints
    """
    router = APIRouter(tags=["Health"])

    @router.get("/api/v1/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(),
            version=__version__,
            uptime=time.time() - start_time,
        )

    @router.get("/metrics")
    async def get_metrics():
        """Prometheus metrics endpoint"""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return router

"""
Health check endpoint

GET /api/health - process liveness and uptime. Does not call Doku@WEB.
"""
import time
from datetime import datetime
from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from dokuweb_gateway import __version__
from dokuweb_gateway.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Application start time for uptime calculation
APP_START_TIME = time.time()


class HealthResponse(BaseModel):
    """Basic health check response"""
    status: str = Field(..., description="Overall status: healthy, degraded")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    version: str = Field(..., description="Application version")
    uptime_seconds: float = Field(..., description="Application uptime in seconds")
    dokuweb_configured: bool = Field(..., description="Whether API credentials are set")


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
)
async def basic_health_check() -> HealthResponse:
    """
    Always returns 200; status is "degraded" when credentials are missing
    """
    configured = get_settings().dokuweb_configured
    return HealthResponse(
        status="healthy" if configured else "degraded",
        timestamp=datetime.utcnow(),
        version=__version__,
        uptime_seconds=round(time.time() - APP_START_TIME, 2),
        dokuweb_configured=configured,
    )

# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from cleaning_actions import OPERATOR_REGISTRY, __version__

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual component checks."""
    operators: str
    llm: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version=__version__,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    The service is ready once operators are registered. Without an OpenAI
    key it still serves /actions/apply, so a missing key only degrades it.
    """
    checks = ChecksResponse(
        operators=f"{len(OPERATOR_REGISTRY)} registered" if OPERATOR_REGISTRY else "none registered",
        llm="configured" if settings.llm_configured else "not configured",
    )

    if not OPERATOR_REGISTRY:
        status = "unavailable"
    elif not settings.llm_configured:
        status = "degraded"
    else:
        status = "ready"

    return ReadinessResponse(
        status=status,
        checks=checks,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

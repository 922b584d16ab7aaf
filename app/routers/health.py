# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# These are for external orchestration; nothing in the app calls them.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import ContextDep
from app.exceptions import ServiceUnavailableError
from lib.datastore import DatastoreError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Datastore-backed health check response."""
    status: str
    database: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Datastore unreachable"}},
)
async def health_check(context: ContextDep) -> HealthResponse:
    """
    Health check endpoint.

    Performs a trivial round-trip against the datastore.
    Returns 503 if the datastore doesn't answer.
    """
    try:
        await context.datastore.ping()
    except DatastoreError as e:
        logger.warning(f"Health check failed: {e}")
        raise ServiceUnavailableError() from e

    return HealthResponse(status="healthy", database="connected")


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check() -> LivenessResponse:
    """
    Liveness check endpoint.

    Returns whether the service process is alive, without touching the
    datastore. Used by Kubernetes/Docker for restart decisions.
    """
    return LivenessResponse(
        status="alive",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )

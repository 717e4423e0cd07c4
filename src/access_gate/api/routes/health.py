"""Health check endpoint.

Reports liveness plus which gate variant is being served. Used by Docker
healthchecks, load balancers, and monitoring systems.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from access_gate import __version__
from access_gate.logging_config import get_logger
from access_gate.schemas.gate import HealthResponse

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns the health status of the application and its gate.",
)
async def health_check(request: Request) -> HealthResponse:
    gate = getattr(request.app.state, "gate", None)
    if gate is None:
        logger.error("health.gate_missing")
        return HealthResponse(status="degraded", version=__version__)

    return HealthResponse(
        status="ok",
        version=__version__,
        variant=gate.variant.value,
        notifications=len(gate.channel),
    )

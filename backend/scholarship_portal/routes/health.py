"""
Scholarship Portal Backend — Liveness & Health Routes
======================================================

What:  GET / (plain-text liveness) and GET /health (dependency report).
Who:   Load balancers, Docker health checks, monitoring.

Status levels:
    - healthy:   database reachable, payment gateway usable
    - degraded:  database reachable, payment gateway unconfigured or circuit open
    - unhealthy: database unreachable (HTTP 503)
"""

import time

from fastapi import APIRouter, Request, Response
from fastapi.responses import PlainTextResponse

from scholarship_portal import __version__
from scholarship_portal.schemas.common import HealthResponse
from scholarship_portal.services.payment_service import CircuitBreaker, payment_service

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Liveness probe")
async def root() -> str:
    return "Server is running..."


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Check the database (SELECT 1) and the payment gateway state.

    The gateway is not called; its circuit breaker state and configuration
    are reported instead, so health checks never spend Stripe API quota.
    """
    overall = "healthy"

    database = request.app.state.database
    if await database.ping():
        db_status = "connected"
    else:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503

    if not payment_service.is_configured:
        gateway_status = "not_configured"
    elif payment_service.circuit_breaker.state == CircuitBreaker.OPEN:
        gateway_status = "circuit_open"
    else:
        gateway_status = "configured"

    if gateway_status != "configured" and overall == "healthy":
        overall = "degraded"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        payment_gateway=gateway_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

"""
Mflix API: Health Check Route
=============================

What:  Liveness/readiness check for Docker and load balancers.
How:   One `ping` admin command through the shared client, timed.

    healthy:   ping answered          → 200
    unhealthy: ping failed or no URI  → 503 (stop routing traffic here)
"""

import logging
import time

from fastapi import APIRouter, Response

from mflix_api import __version__
from mflix_api import database
from mflix_api.config import settings
from mflix_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    # No retry: report the state as of now, the caller polls again anyway
    started = time.perf_counter()
    try:
        await database.ping()
    except Exception as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        response.status_code = 503
        db_status, latency_ms = "disconnected", None
    else:
        db_status = "connected"
        latency_ms = round((time.perf_counter() - started) * 1000, 2)

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=__version__,
        database=db_status,
        database_name=settings.mongodb_database,
        ping_ms=latency_ms,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

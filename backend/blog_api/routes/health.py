"""
Blog API Backend: Health Check Route
=====================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs SELECT 1 against the store and reports aggregate status.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   store reachable (HTTP 200)
    - unhealthy: store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from blog_api import __version__
from blog_api.database import get_engine
from blog_api.schemas.post import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """Probe the store with a lightweight query and report uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

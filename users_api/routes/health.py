"""
Users API - Health Check Route
==============================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB through the shared client handle and reports status.
Who:   Called by container health checks and monitoring systems.

Status levels:
    - healthy:   MongoDB answered the ping (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from users_api import __version__
from users_api.database import MongoHandle, get_mongo
from users_api.schemas.user import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    mongo: MongoHandle = Depends(get_mongo),
) -> HealthResponse:
    """
    Check the health of the service and its database.

    A `ping` command is the cheapest round-trip that proves the server is
    reachable and the client is usable.
    """
    if await mongo.ping():
        db_status = "connected"
        overall = "healthy"
    else:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

"""
TripNest Backend — Health Check Route
=======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings the MongoDB deployment (the same `ping` the server issues at
       startup) and reports connectivity, version and uptime.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   store answered the ping
    - unhealthy: store unreachable (still HTTP 200; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Depends

from tripnest import __version__
from tripnest.database import MongoStore, get_store
from tripnest.schemas.tourist_spot import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Reports whether the document store answers a ping.",
)
async def health_check(store: MongoStore = Depends(get_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

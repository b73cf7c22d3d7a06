"""
Bookworm Backend - Health Check Route
======================================

What:  GET /health for load balancers and container health checks.
How:   Pings the document store; reports "unhealthy" when the ping fails.
       Always answers 200 so a health poller never sees an error itself.
"""

import logging
import time

from fastapi import APIRouter, Depends

from bookworm import __version__
from bookworm.database import DocumentStore, get_store
from bookworm.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    if not await store.ping():
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: document store unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

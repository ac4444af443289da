"""
Blog API Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs SELECT 1 against the shared engine and reports the result.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import time

from fastapi import APIRouter, Depends, Response, status

from blog_api import __version__
from blog_api.database import Database
from blog_api.dependencies import get_database
from blog_api.schemas.blog import HealthResponse

router = APIRouter(tags=["Health"])

# Reported as uptime; set when the module is first imported
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

"""
Footprints Backend — Health Check Route
========================================

What:  Health check endpoint for container and load balancer probes.
How:   Probes the trip table and the photos bucket and reports both.

Status levels:
    - healthy:   table and bucket reachable (HTTP 200)
    - degraded:  bucket unreachable; trip CRUD still works (HTTP 200)
    - unhealthy: table unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from footprints import __version__
from footprints.database import get_db_session
from footprints.schemas.trip import HealthResponse
from footprints.services.storage_service import StorageService, get_storage_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Trip table unreachable", "model": HealthResponse}},
    summary="Service health check",
    description="Reports trip table and photo bucket reachability plus uptime.",
)
async def health_check(
    response: Response,
    db: AsyncSession = Depends(get_db_session),
    storage: StorageService = Depends(get_storage_service),
) -> HealthResponse:
    """
    Check details:
        Database: SELECT 1 on the request session
        Storage:  HEAD on the photos bucket
    """
    db_status = "connected"
    storage_status = "available"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Bucket ──────────────────────────────────────────────────────
    if not await storage.check_bucket():
        storage_status = "unavailable"
        overall = "degraded" if overall != "unhealthy" else overall

    if overall == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

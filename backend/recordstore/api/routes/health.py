"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 once the store is corrupted (readiness)

Design Decisions:
    - Separate liveness/readiness: a corrupted store must be taken out of
      rotation and restarted, not kept serving an unknown state
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from recordstore.infrastructure.record_store import RecordStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "recordstore-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(store: RecordStore = Depends(get_store)):
    """Readiness probe — fails once the store state is unknown."""
    if store.corrupted:
        logger.critical("Readiness failed: record store corrupted")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "store_corrupted",
            },
        )
    return {"status": "ready", "checks": {"record_store": "healthy"}}

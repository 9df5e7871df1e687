"""Health & Readiness Probes — liveness, readiness and referential-integrity checks.

Invariants:
    - GET /api/health/ always returns 200 if process is up (liveness)
    - GET /api/health/ready returns 503 if database is unreachable (readiness)
    - GET /api/health/integrity returns 503 if any user/place reference disagrees

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Integrity audit reads both tables in one session; the comparison is pure (core/)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import select

from yourplaces.core.referential_integrity import find_integrity_violations, summarize
from yourplaces.infrastructure import database
from yourplaces.infrastructure.database import DatabaseSessionManager, get_session_manager
from yourplaces.models.place import Place
from yourplaces.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "yourplaces-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


@router.get("/integrity")
async def integrity_check(
    db_manager: DatabaseSessionManager = Depends(get_session_manager),
):
    """Audit User.places against Place.creator_id across all rows."""
    async with db_manager.session() as db:
        users = (await db.execute(select(User.id, User.places))).all()
        places = (await db.execute(select(Place.id, Place.creator_id))).all()
    report = summarize(find_integrity_violations(
        {user_id: refs for user_id, refs in users},
        {place_id: creator_id for place_id, creator_id in places},
    ))
    if not report["consistent"]:
        logger.error(
            f"Referential integrity violated: {len(report['violations'])} issue(s)",
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=report,
        )
    return report

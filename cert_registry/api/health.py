"""Health and readiness endpoints.

  /health (liveness):  the process answers; dependency status is reported
                       but a degraded dependency still returns 200, so an
                       orchestrator does not restart a live container.
  /ready (readiness):  503 when the ledger database is configured but
                       unreachable.  Without the database nothing can be
                       issued, so traffic should go elsewhere.  Redis is
                       not critical: events stay in the ledger log.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from cert_registry.db import engine as db_engine
from cert_registry.db import redis as db_redis

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    checks = {
        "database": await db_engine.check_connection(),
        "redis": await db_redis.check_connection(),
    }
    overall = "degraded" if "degraded" in checks.values() else "ok"
    return {"status": overall, "checks": checks}


@router.get("/ready")
async def ready() -> Response:
    if await db_engine.check_connection() == "degraded":
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)

"""Prometheus scrape endpoint (text exposition format, not JSON).

Besides HTTP traffic this exposes the ledger counters: issuer grants,
certificates issued and destroyed, authorization denials and batch
sizes.  Restrict it at the network edge in production.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )

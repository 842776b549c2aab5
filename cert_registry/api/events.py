"""Read access to the ledger's append-only event log.

Observers page through the log with ``after=<last seq seen>``; the
order is the order of commit, and entries are never rewritten.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from cert_registry.api.dependencies import CallerDep, LedgerDep
from cert_registry.models.event import EVENT_TYPES

router = APIRouter(prefix="/v1/events", tags=["events"])


class EventOut(BaseModel):
    id: str
    seq: int
    type: str
    occurred_at: int
    payload: dict


@router.get("", response_model=list[EventOut])
async def list_events(
    caller: CallerDep,
    ledger: LedgerDep,
    type: str | None = None,
    after: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
) -> list[EventOut]:
    if type is not None and type not in EVENT_TYPES:
        raise HTTPException(status_code=422, detail=f"unknown event type {type!r}")
    events = await ledger.events.read(type=type, after=after, limit=limit)
    return [
        EventOut(
            id=str(e.id),
            seq=e.seq or 0,
            type=e.type,
            occurred_at=e.occurred_at,
            payload=dict(e.payload),
        )
        for e in events
    ]

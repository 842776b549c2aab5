"""PostgreSQL implementation of EventLog."""

from __future__ import annotations

import json
from dataclasses import replace

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cert_registry.db.tables import LedgerEventRow
from cert_registry.models.event import LedgerEvent


class PgEventLog:
    """Satisfies the EventLog Protocol; ``seq`` comes from the bigserial key."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, event: LedgerEvent) -> LedgerEvent:
        row = LedgerEventRow(
            id=event.id,
            type=event.type,
            occurred_at=event.occurred_at,
            payload_json=json.dumps(event.payload, sort_keys=True),
        )
        self._session.add(row)
        await self._session.flush()
        return replace(event, seq=row.seq)

    async def read(
        self,
        *,
        type: str | None = None,
        after: int = 0,
        limit: int = 100,
    ) -> list[LedgerEvent]:
        stmt = select(LedgerEventRow).where(LedgerEventRow.seq > after)
        if type is not None:
            stmt = stmt.where(LedgerEventRow.type == type)
        stmt = stmt.order_by(LedgerEventRow.seq).limit(limit)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [
            LedgerEvent(
                id=r.id,
                type=r.type,
                occurred_at=r.occurred_at,
                payload=json.loads(r.payload_json),
                seq=r.seq,
            )
            for r in rows
        ]

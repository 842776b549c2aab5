from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from cert_registry.models.event import LedgerEvent


class EventLog(Protocol):
    async def append(self, event: LedgerEvent) -> LedgerEvent: ...
    async def read(
        self,
        *,
        type: str | None = None,
        after: int = 0,
        limit: int = 100,
    ) -> list[LedgerEvent]: ...


class InMemoryEventLog:
    """Append-only list; ``seq`` starts at 1."""

    def __init__(self) -> None:
        self._events: list[LedgerEvent] = []

    async def append(self, event: LedgerEvent) -> LedgerEvent:
        stored = replace(event, seq=len(self._events) + 1)
        self._events.append(stored)
        return stored

    async def read(
        self,
        *,
        type: str | None = None,
        after: int = 0,
        limit: int = 100,
    ) -> list[LedgerEvent]:
        matched = [
            e
            for e in self._events
            if (e.seq or 0) > after and (type is None or e.type == type)
        ]
        return matched[:limit]

"""Observer feed for committed ledger events, on a Redis list.

The API publishes only after the ledger transaction commits, so
observers never see an event from an operation that rolled back.  The
durable record is the ledger's own event log; this feed is a
notification channel for off-ledger consumers such as the worker.

  Producer (API):    LPUSH event JSON onto the list
  Consumer (worker): BRPOP from the other end, FIFO

Delivery is at-most-once: a worker that dies mid-event loses it, and can
catch up from GET /v1/events using the last ``seq`` it saw.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from cert_registry.core.config import SETTINGS
from cert_registry.core.metrics import EVENT_FEED_PUBLISHED
from cert_registry.db.redis import redis_pool
from cert_registry.models.event import LedgerEvent

logger = logging.getLogger(__name__)

FEED_KEY = "ledger:events"


@runtime_checkable
class EventFeed(Protocol):
    async def publish(self, event: LedgerEvent) -> None: ...
    async def consume(self, timeout: int = 0) -> LedgerEvent | None: ...
    async def backlog(self) -> int: ...


class InMemoryEventFeed:
    """In-process feed for tests and single-process dev runs.

    Nothing drains it inside the API process, so it keeps only the newest
    ``maxlen`` events; older ones are dropped and stay readable from
    GET /v1/events.
    """

    def __init__(self, maxlen: int | None = None) -> None:
        self._events: deque[LedgerEvent] = deque(
            maxlen=SETTINGS.feed_backlog_max if maxlen is None else maxlen
        )

    async def publish(self, event: LedgerEvent) -> None:
        self._events.append(event)

    async def consume(self, timeout: int = 0) -> LedgerEvent | None:
        if not self._events and timeout > 0:
            # Stand-in for BRPOP's blocking wait
            await asyncio.sleep(timeout)
        if self._events:
            return self._events.popleft()
        return None

    async def backlog(self) -> int:
        return len(self._events)

    def reset(self) -> None:
        self._events.clear()


class RedisEventFeed:
    def __init__(
        self, redis_client, key: str = FEED_KEY, maxlen: int | None = None
    ) -> None:
        self._redis = redis_client
        self._key = key
        self._maxlen = SETTINGS.feed_backlog_max if maxlen is None else maxlen

    async def publish(self, event: LedgerEvent) -> None:
        await self._redis.lpush(self._key, json.dumps(event.to_dict(), sort_keys=True))
        # Newest entries sit at the head; drop the oldest past the cap.
        await self._redis.ltrim(self._key, 0, self._maxlen - 1)

    async def consume(self, timeout: int = 5) -> LedgerEvent | None:
        result = await self._redis.brpop(self._key, timeout=timeout)
        if result is None:
            return None
        _, raw = result
        return LedgerEvent.from_dict(json.loads(raw))

    async def backlog(self) -> int:
        return await self._redis.llen(self._key)


async def publish_all(feed: EventFeed, events: Iterable[LedgerEvent]) -> None:
    for event in events:
        await feed.publish(event)
        EVENT_FEED_PUBLISHED.labels(event_type=event.type).inc()
        logger.debug(
            "Published event seq=%s type=%s",
            event.seq,
            event.type,
            extra={"event_type": event.type},
        )


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

if redis_pool is not None:
    event_feed: EventFeed = RedisEventFeed(redis_pool)
else:
    event_feed = InMemoryEventFeed()

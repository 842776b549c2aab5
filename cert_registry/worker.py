"""Ledger event observer process.

RUN:  python -m cert_registry.worker

Consumes committed events from the observer feed (the Redis list the
API pushes to after each commit) and hands each one to the handler
registered for its type.  Same image as the API, different command:

  api:      uvicorn cert_registry.main:app --host 0.0.0.0 --port 8000
  observer: python -m cert_registry.worker

The handlers here only log.  They are the place to hang off-ledger
reactions such as notifying a recipient that a certificate arrived.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from cert_registry.core.config import SETTINGS
from cert_registry.core.logging import setup_logging
from cert_registry.models.event import (
    CERTIFICATE_DESTROYED,
    CERTIFICATE_ISSUED,
    ISSUER_CREATED,
    LedgerEvent,
)
from cert_registry.services.event_feed import EventFeed, event_feed

EventHandler = Callable[[LedgerEvent], Coroutine[Any, Any, None]]

logger = logging.getLogger("cert_registry.worker")

HANDLERS: dict[str, EventHandler] = {}


def register_handler(event_type: str):
    """Decorator: register a coroutine as the handler for an event type."""

    def decorator(func):
        HANDLERS[event_type] = func
        return func

    return decorator


@register_handler(ISSUER_CREATED)
async def handle_issuer_created(event: LedgerEvent) -> None:
    logger.info(
        "Issuer granted cap=%s name=%r address=%s",
        event.payload.get("issuer_cap_id"),
        event.payload.get("issuer_name"),
        event.payload.get("issuer_address"),
        extra={"event_type": event.type},
    )


@register_handler(CERTIFICATE_ISSUED)
async def handle_certificate_issued(event: LedgerEvent) -> None:
    logger.info(
        "Certificate %s issued by %s to %s type=%r",
        event.payload.get("certificate_id"),
        event.payload.get("issuer"),
        event.payload.get("recipient"),
        event.payload.get("certificate_type"),
        extra={"event_type": event.type},
    )


@register_handler(CERTIFICATE_DESTROYED)
async def handle_certificate_destroyed(event: LedgerEvent) -> None:
    logger.info(
        "Certificate %s destroyed by recipient %s",
        event.payload.get("certificate_id"),
        event.payload.get("recipient"),
        extra={"event_type": event.type},
    )


async def process_one(feed: EventFeed, timeout: int = 1) -> LedgerEvent | None:
    """Consume and dispatch a single event; None when the feed was empty."""
    event = await feed.consume(timeout=timeout)
    if event is None:
        return None

    handler = HANDLERS.get(event.type)
    if handler is None:
        logger.warning("No handler for event seq=%s type=%s", event.seq, event.type)
        return event
    try:
        await handler(event)
    except Exception:
        # At-most-once: log and keep consuming.  The ledger log still has it.
        logger.exception("Handler for event seq=%s type=%s failed", event.seq, event.type)
    return event


async def run_worker(feed: EventFeed = event_feed) -> None:
    logger.info("Observer started, handling: %s", sorted(HANDLERS))
    while True:
        await process_one(feed)


if __name__ == "__main__":
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    asyncio.run(run_worker())

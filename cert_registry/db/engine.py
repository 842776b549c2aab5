"""PostgreSQL backing for the ledger.

With DATABASE_URL set this module builds an asyncpg engine at import time
and hands out ledger transactions through ``session_scope()``.  Every
write an operation makes (credential, certificates, event rows) goes
through one scope, so a failure anywhere leaves the ledger untouched.

Without DATABASE_URL, ``engine`` and ``async_session_factory`` are None
and ``open_ledger()`` serves the in-memory stores instead.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from cert_registry.core.config import SETTINGS

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


engine: AsyncEngine | None = None
async_session_factory: async_sessionmaker[AsyncSession] | None = None

if SETTINGS.database_url:
    engine = create_async_engine(
        SETTINGS.database_url,
        echo=SETTINGS.is_dev,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )
    async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Yield a session whose work commits as a unit or not at all."""
    if async_session_factory is None:
        raise RuntimeError("DATABASE_URL is not set, no ledger database available")
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.warning("Ledger transaction rolled back")
            raise


async def check_connection() -> str:
    """Probe the database: "ok", "degraded" or "not_configured"."""
    if engine is None:
        return "not_configured"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Ledger database unreachable", exc_info=True)
        return "degraded"
    return "ok"


@asynccontextmanager
async def lifespan_db():
    if engine is None:
        logger.info("DATABASE_URL not set, ledger is in-memory")
        yield
        return

    logger.info("Ledger database: %s", engine.url.render_as_string(hide_password=True))
    yield
    await engine.dispose()
    logger.info("Ledger database engine disposed")

"""The ledger: the repositories one operation reads and writes together.

A ``Ledger`` is built per operation.  With DATABASE_URL set, its repos
share one SQLAlchemy session and ``open_ledger()`` commits or rolls back
that session as a unit.  Without it, the repos are process-wide
in-memory singletons; services validate every input before their first
write, so a failed operation leaves them untouched.

``emitted`` collects the events appended during the operation so they can
be published to observers once the transaction has committed.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from cert_registry.db import engine as db_engine
from cert_registry.models.event import LedgerEvent
from cert_registry.repos.certificate_repo import CertificateRepo, InMemoryCertificateRepo
from cert_registry.repos.credential_repo import CredentialRepo, InMemoryCredentialRepo
from cert_registry.repos.event_log import EventLog, InMemoryEventLog
from cert_registry.repos.pg_certificate_repo import PgCertificateRepo
from cert_registry.repos.pg_credential_repo import PgCredentialRepo
from cert_registry.repos.pg_event_log import PgEventLog


@dataclass(slots=True)
class Ledger:
    credentials: CredentialRepo
    certificates: CertificateRepo
    events: EventLog
    emitted: list[LedgerEvent] = field(default_factory=list)

    async def emit(self, event: LedgerEvent) -> LedgerEvent:
        stored = await self.events.append(event)
        self.emitted.append(stored)
        return stored


@dataclass(slots=True)
class InMemoryStores:
    credentials: InMemoryCredentialRepo = field(default_factory=InMemoryCredentialRepo)
    certificates: InMemoryCertificateRepo = field(
        default_factory=InMemoryCertificateRepo
    )
    events: InMemoryEventLog = field(default_factory=InMemoryEventLog)

    def reset(self) -> None:
        self.credentials = InMemoryCredentialRepo()
        self.certificates = InMemoryCertificateRepo()
        self.events = InMemoryEventLog()

    def ledger(self) -> Ledger:
        return Ledger(
            credentials=self.credentials,
            certificates=self.certificates,
            events=self.events,
        )


# Module-level in-memory state (used when DATABASE_URL is not set)
memory_stores = InMemoryStores()


@asynccontextmanager
async def open_ledger() -> AsyncIterator[Ledger]:
    """Yield a ledger for one operation, transactional when backed by Postgres."""
    if db_engine.async_session_factory is None:
        yield memory_stores.ledger()
        return

    async with db_engine.session_scope() as session:
        yield Ledger(
            credentials=PgCredentialRepo(session),
            certificates=PgCertificateRepo(session),
            events=PgEventLog(session),
        )

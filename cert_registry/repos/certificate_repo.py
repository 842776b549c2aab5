from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from cert_registry.models.certificate import Certificate

# Certificates are written once and deleted once.  The repos deliberately
# offer no update path: there is nothing to re-point ``recipient`` with.


class CertificateRepo(Protocol):
    async def get(self, cert_id: UUID) -> Certificate | None: ...
    async def add(self, cert: Certificate) -> None: ...
    async def add_many(self, certs: Sequence[Certificate]) -> None: ...
    async def delete(self, cert_id: UUID) -> bool: ...
    async def list_by_recipient(self, recipient: str) -> list[Certificate]: ...
    async def list_by_issuer(self, issuer: str) -> list[Certificate]: ...


class InMemoryCertificateRepo:
    def __init__(self) -> None:
        self._store: dict[UUID, Certificate] = {}

    async def get(self, cert_id: UUID) -> Certificate | None:
        return self._store.get(cert_id)

    async def add(self, cert: Certificate) -> None:
        if cert.id in self._store:
            raise ValueError("certificate id already exists")
        self._store[cert.id] = cert

    async def add_many(self, certs: Sequence[Certificate]) -> None:
        # Check the whole batch first so a collision stores nothing.
        ids = [c.id for c in certs]
        if len(set(ids)) != len(ids) or any(i in self._store for i in ids):
            raise ValueError("certificate id already exists")
        for cert in certs:
            self._store[cert.id] = cert

    async def delete(self, cert_id: UUID) -> bool:
        return self._store.pop(cert_id, None) is not None

    async def list_by_recipient(self, recipient: str) -> list[Certificate]:
        return [c for c in self._store.values() if c.recipient == recipient]

    async def list_by_issuer(self, issuer: str) -> list[Certificate]:
        return [c for c in self._store.values() if c.issuer == issuer]

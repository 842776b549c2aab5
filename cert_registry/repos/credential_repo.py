from __future__ import annotations

from typing import Protocol
from uuid import UUID

from cert_registry.models.credential import AdminCredential, IssuerCredential


class CredentialRepo(Protocol):
    async def get_admin(self) -> AdminCredential | None: ...
    async def set_admin(self, cap: AdminCredential) -> None: ...
    async def get_issuer(self, cap_id: UUID) -> IssuerCredential | None: ...
    async def add_issuer(self, cap: IssuerCredential) -> None: ...
    async def list_issuers_by_owner(self, owner: str) -> list[IssuerCredential]: ...


class InMemoryCredentialRepo:
    def __init__(self) -> None:
        self._admin: AdminCredential | None = None
        self._issuers: dict[UUID, IssuerCredential] = {}

    async def get_admin(self) -> AdminCredential | None:
        return self._admin

    async def set_admin(self, cap: AdminCredential) -> None:
        if self._admin is not None:
            raise ValueError("admin credential already exists")
        self._admin = cap

    async def get_issuer(self, cap_id: UUID) -> IssuerCredential | None:
        return self._issuers.get(cap_id)

    async def add_issuer(self, cap: IssuerCredential) -> None:
        if cap.id in self._issuers:
            raise ValueError("issuer credential id already exists")
        self._issuers[cap.id] = cap

    async def list_issuers_by_owner(self, owner: str) -> list[IssuerCredential]:
        return [c for c in self._issuers.values() if c.owner == owner]

"""PostgreSQL implementation of CredentialRepo."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cert_registry.db.tables import AdminCredentialRow, IssuerCredentialRow
from cert_registry.models.credential import AdminCredential, IssuerCredential


class PgCredentialRepo:
    """Satisfies the CredentialRepo Protocol using PostgreSQL via SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_admin(self) -> AdminCredential | None:
        stmt = select(AdminCredentialRow).limit(1)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return AdminCredential(id=row.id, owner=row.owner)

    async def set_admin(self, cap: AdminCredential) -> None:
        self._session.add(AdminCredentialRow(id=cap.id, owner=cap.owner, singleton=True))
        try:
            await self._session.flush()
        except IntegrityError:
            raise ValueError("admin credential already exists") from None

    async def get_issuer(self, cap_id: UUID) -> IssuerCredential | None:
        stmt = select(IssuerCredentialRow).where(IssuerCredentialRow.id == cap_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_issuer(row)

    async def add_issuer(self, cap: IssuerCredential) -> None:
        row = IssuerCredentialRow(
            id=cap.id,
            issuer_name=cap.issuer_name,
            issuer_address=cap.issuer_address,
            owner=cap.owner,
        )
        self._session.add(row)
        await self._session.flush()

    async def list_issuers_by_owner(self, owner: str) -> list[IssuerCredential]:
        stmt = select(IssuerCredentialRow).where(IssuerCredentialRow.owner == owner)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_issuer(r) for r in rows]


def _row_to_issuer(row: IssuerCredentialRow) -> IssuerCredential:
    return IssuerCredential(
        id=row.id,
        issuer_name=row.issuer_name,
        issuer_address=row.issuer_address,
        owner=row.owner,
    )

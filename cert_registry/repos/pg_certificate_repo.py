"""PostgreSQL implementation of CertificateRepo."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from cert_registry.db.tables import CertificateRow
from cert_registry.models.certificate import Certificate


class PgCertificateRepo:
    """Satisfies the CertificateRepo Protocol using PostgreSQL."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, cert_id: UUID) -> Certificate | None:
        stmt = select(CertificateRow).where(CertificateRow.id == cert_id)
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            return None
        return _row_to_certificate(row)

    async def add(self, cert: Certificate) -> None:
        self._session.add(_certificate_to_row(cert))
        await self._session.flush()

    async def add_many(self, certs: Sequence[Certificate]) -> None:
        self._session.add_all([_certificate_to_row(c) for c in certs])
        await self._session.flush()

    async def delete(self, cert_id: UUID) -> bool:
        stmt = delete(CertificateRow).where(CertificateRow.id == cert_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def list_by_recipient(self, recipient: str) -> list[Certificate]:
        stmt = (
            select(CertificateRow)
            .where(CertificateRow.recipient == recipient)
            .order_by(CertificateRow.issue_date)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_certificate(r) for r in rows]

    async def list_by_issuer(self, issuer: str) -> list[Certificate]:
        stmt = (
            select(CertificateRow)
            .where(CertificateRow.issuer == issuer)
            .order_by(CertificateRow.issue_date)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_certificate(r) for r in rows]


def _certificate_to_row(cert: Certificate) -> CertificateRow:
    return CertificateRow(
        id=cert.id,
        name=cert.name,
        description=cert.description,
        image_url=cert.image_url,
        recipient=cert.recipient,
        issuer=cert.issuer,
        issue_date=cert.issue_date,
        certificate_type=cert.certificate_type,
        cert_metadata=cert.metadata,
    )


def _row_to_certificate(row: CertificateRow) -> Certificate:
    return Certificate(
        id=row.id,
        name=row.name,
        description=row.description,
        image_url=row.image_url,
        recipient=row.recipient,
        issuer=row.issuer,
        issue_date=row.issue_date,
        certificate_type=row.certificate_type,
        metadata=row.cert_metadata,
    )

"""SQLAlchemy table definitions.

These map to the frozen dataclass domain models in cert_registry/models/.
Repos convert between rows and dataclasses; the domain models never see
a session.
"""

from __future__ import annotations

import uuid

from sqlalchemy import BigInteger, Boolean, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from cert_registry.db.engine import Base


class AdminCredentialRow(Base):
    __tablename__ = "admin_credentials"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    owner: Mapped[str] = mapped_column(Text, nullable=False)
    # Always TRUE; the unique constraint caps the table at one row.
    singleton: Mapped[bool] = mapped_column(
        Boolean, nullable=False, unique=True, default=True
    )


class IssuerCredentialRow(Base):
    __tablename__ = "issuer_credentials"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    issuer_name: Mapped[str] = mapped_column(Text, nullable=False)
    issuer_address: Mapped[str] = mapped_column(Text, nullable=False)
    owner: Mapped[str] = mapped_column(Text, nullable=False, index=True)


class CertificateRow(Base):
    __tablename__ = "certificates"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    recipient: Mapped[str] = mapped_column(Text, nullable=False)
    issuer: Mapped[str] = mapped_column(Text, nullable=False)
    issue_date: Mapped[int] = mapped_column(BigInteger, nullable=False)
    certificate_type: Mapped[str] = mapped_column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    cert_metadata: Mapped[str] = mapped_column("metadata", Text, nullable=False)

    __table_args__ = (
        Index("ix_certificates_recipient", "recipient"),
        Index("ix_certificates_issuer", "issuer"),
    )


class LedgerEventRow(Base):
    """Append-only; rows are inserted and never updated or deleted."""

    __tablename__ = "ledger_events"

    seq: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), unique=True, nullable=False, default=uuid.uuid4
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    occurred_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    payload_json: Mapped[str] = mapped_column(Text, nullable=False)

"""create ledger tables

Revision ID: 3b9e1c7d2a40
Revises:
Create Date: 2026-10-16 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3b9e1c7d2a40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "admin_credentials",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("owner", sa.Text(), nullable=False),
        sa.Column("singleton", sa.Boolean(), nullable=False, unique=True),
    )
    op.create_table(
        "issuer_credentials",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("issuer_name", sa.Text(), nullable=False),
        sa.Column("issuer_address", sa.Text(), nullable=False),
        sa.Column("owner", sa.Text(), nullable=False),
    )
    op.create_index(
        "ix_issuer_credentials_owner", "issuer_credentials", ["owner"]
    )
    op.create_table(
        "certificates",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("recipient", sa.Text(), nullable=False),
        sa.Column("issuer", sa.Text(), nullable=False),
        sa.Column("issue_date", sa.BigInteger(), nullable=False),
        sa.Column("certificate_type", sa.Text(), nullable=False),
        sa.Column("metadata", sa.Text(), nullable=False),
    )
    op.create_index("ix_certificates_recipient", "certificates", ["recipient"])
    op.create_index("ix_certificates_issuer", "certificates", ["issuer"])
    op.create_table(
        "ledger_events",
        sa.Column("seq", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("type", sa.String(length=64), nullable=False),
        sa.Column("occurred_at", sa.BigInteger(), nullable=False),
        sa.Column("payload_json", sa.Text(), nullable=False),
    )
    op.create_index("ix_ledger_events_type", "ledger_events", ["type"])


def downgrade() -> None:
    op.drop_index("ix_ledger_events_type", table_name="ledger_events")
    op.drop_table("ledger_events")
    op.drop_index("ix_certificates_issuer", table_name="certificates")
    op.drop_index("ix_certificates_recipient", table_name="certificates")
    op.drop_table("certificates")
    op.drop_index("ix_issuer_credentials_owner", table_name="issuer_credentials")
    op.drop_table("issuer_credentials")
    op.drop_table("admin_credentials")

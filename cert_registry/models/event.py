from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final
from uuid import UUID, uuid4

from cert_registry.models.certificate import Certificate
from cert_registry.models.credential import IssuerCredential

ISSUER_CREATED: Final = "IssuerCreated"
CERTIFICATE_ISSUED: Final = "CertificateIssued"
CERTIFICATE_DESTROYED: Final = "CertificateDestroyed"

EVENT_TYPES: Final = (ISSUER_CREATED, CERTIFICATE_ISSUED, CERTIFICATE_DESTROYED)


@dataclass(frozen=True, slots=True)
class LedgerEvent:
    """Append-only record of something the ledger did.

    ``seq`` is assigned by the event log when the event is appended and
    gives observers a total order to resume from.
    """

    id: UUID
    type: str
    occurred_at: int  # epoch milliseconds
    payload: dict[str, object] = field(default_factory=dict)
    seq: int | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "seq": self.seq,
            "type": self.type,
            "occurred_at": self.occurred_at,
            "payload": dict(self.payload),
        }

    @staticmethod
    def from_dict(data: dict) -> LedgerEvent:
        return LedgerEvent(
            id=UUID(data["id"]),
            type=data["type"],
            occurred_at=int(data["occurred_at"]),
            payload=dict(data.get("payload") or {}),
            seq=data.get("seq"),
        )

    @staticmethod
    def issuer_created(cap: IssuerCredential, *, occurred_at: int) -> LedgerEvent:
        return LedgerEvent(
            id=uuid4(),
            type=ISSUER_CREATED,
            occurred_at=occurred_at,
            payload={
                "issuer_cap_id": str(cap.id),
                "issuer_name": cap.issuer_name,
                "issuer_address": cap.issuer_address,
            },
        )

    @staticmethod
    def certificate_issued(cert: Certificate) -> LedgerEvent:
        return LedgerEvent(
            id=uuid4(),
            type=CERTIFICATE_ISSUED,
            occurred_at=cert.issue_date,
            payload={
                "certificate_id": str(cert.id),
                "recipient": cert.recipient,
                "issuer": cert.issuer,
                "certificate_type": cert.certificate_type,
                "issue_date": cert.issue_date,
            },
        )

    @staticmethod
    def certificate_destroyed(cert: Certificate, *, occurred_at: int) -> LedgerEvent:
        return LedgerEvent(
            id=uuid4(),
            type=CERTIFICATE_DESTROYED,
            occurred_at=occurred_at,
            payload={
                "certificate_id": str(cert.id),
                "recipient": cert.recipient,
                "issuer": cert.issuer,
            },
        )

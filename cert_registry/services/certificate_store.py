"""Certificate store: reading, verifying and destroying issued certificates.

The only state change offered here is ``destroy_certificate``, and only
the recipient may call it.  There is no operation that changes a
certificate's recipient or issuer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from uuid import UUID

from cert_registry.core.clock import Clock, system_clock
from cert_registry.core.metrics import CERTIFICATES_DESTROYED
from cert_registry.models.certificate import Certificate
from cert_registry.models.event import LedgerEvent
from cert_registry.models.principal import Principal
from cert_registry.repos.ledger import Ledger
from cert_registry.services.errors import NotFoundError, deny
from cert_registry.services.text import decode_text

logger = logging.getLogger(__name__)


async def get_certificate(ledger: Ledger, cert_id: UUID) -> Certificate:
    cert = await ledger.certificates.get(cert_id)
    if cert is None:
        raise NotFoundError(f"certificate {cert_id} not found")
    return cert


async def list_certificates(
    ledger: Ledger,
    *,
    recipient: str | None = None,
    issuer: str | None = None,
) -> list[Certificate]:
    if recipient is not None:
        recipient = decode_text(recipient, field="recipient")
    if issuer is not None:
        issuer = decode_text(issuer, field="issuer")
    if recipient is not None:
        certs = await ledger.certificates.list_by_recipient(recipient)
        if issuer is not None:
            certs = [c for c in certs if c.issuer == issuer]
        return certs
    if issuer is not None:
        return await ledger.certificates.list_by_issuer(issuer)
    return []


# ---------------------------------------------------------------------------
# Accessors
# ---------------------------------------------------------------------------


def get_certificate_name(cert: Certificate) -> str:
    return cert.name


def get_certificate_description(cert: Certificate) -> str:
    return cert.description


def get_certificate_image_url(cert: Certificate) -> str:
    return cert.image_url


def get_certificate_recipient(cert: Certificate) -> str:
    return cert.recipient


def get_certificate_issuer(cert: Certificate) -> str:
    return cert.issuer


def get_certificate_issue_date(cert: Certificate) -> int:
    return cert.issue_date


def get_certificate_type(cert: Certificate) -> str:
    return cert.certificate_type


def get_certificate_metadata(cert: Certificate) -> str:
    return cert.metadata


# Field name -> accessor, as exposed by GET /v1/certificates/{id}/{field}
ACCESSORS: dict[str, Callable[[Certificate], str | int]] = {
    "name": get_certificate_name,
    "description": get_certificate_description,
    "image_url": get_certificate_image_url,
    "recipient": get_certificate_recipient,
    "issuer": get_certificate_issuer,
    "issue_date": get_certificate_issue_date,
    "type": get_certificate_type,
    "metadata": get_certificate_metadata,
}


def verify_certificate(cert: Certificate, expected_issuer: str) -> bool:
    """True when ``cert`` was minted under ``expected_issuer``'s credential."""
    return cert.issuer == expected_issuer


async def destroy_certificate(
    ledger: Ledger,
    caller: Principal,
    cert: Certificate,
    *,
    clock: Clock = system_clock,
) -> None:
    if not caller.owns(cert.recipient):
        deny("destroy_certificate", caller.address, "caller is not the recipient")

    if not await ledger.certificates.delete(cert.id):
        raise NotFoundError(f"certificate {cert.id} not found")
    await ledger.emit(LedgerEvent.certificate_destroyed(cert, occurred_at=clock.now_ms()))

    CERTIFICATES_DESTROYED.inc()
    logger.info(
        "Destroyed certificate id=%s recipient=%s",
        cert.id,
        cert.recipient,
        extra={"certificate_id": str(cert.id)},
    )

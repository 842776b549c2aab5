"""Issuance engine: mint certificates against an issuer credential.

A certificate's ``issuer`` is copied from the credential's bound
address, and the recipient becomes its owner in the same write.  The
caller must be that bound address and the credential must be the one
the registry granted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cert_registry.core.clock import Clock, system_clock
from cert_registry.core.config import SETTINGS
from cert_registry.core.metrics import BATCH_SIZE, CERTIFICATES_ISSUED
from cert_registry.models.certificate import Certificate
from cert_registry.models.credential import IssuerCredential
from cert_registry.models.event import LedgerEvent
from cert_registry.models.principal import Principal
from cert_registry.repos.ledger import Ledger
from cert_registry.services.errors import InvalidInputError, deny
from cert_registry.services.text import Text, decode_address, decode_text

logger = logging.getLogger(__name__)

_BATCH_FIELDS = (
    "recipients",
    "names",
    "descriptions",
    "image_urls",
    "certificate_types",
    "metadatas",
)


async def _authorize(
    ledger: Ledger,
    operation: str,
    caller: Principal,
    issuer_credential: IssuerCredential,
) -> None:
    if not caller.owns(issuer_credential.issuer_address):
        deny(operation, caller.address, "caller is not the credential's issuer address")
    stored = await ledger.credentials.get_issuer(issuer_credential.id)
    if stored is None or stored != issuer_credential:
        deny(operation, caller.address, "issuer credential was not granted by the registry")


def _build(
    issuer: str,
    issue_date: int,
    *,
    recipient: Text,
    name: Text,
    description: Text,
    image_url: Text,
    certificate_type: Text,
    metadata: Text,
) -> Certificate:
    return Certificate.new(
        name=decode_text(name, field="name"),
        description=decode_text(description, field="description"),
        image_url=decode_text(image_url, field="image_url"),
        recipient=decode_address(recipient, field="recipient"),
        issuer=issuer,
        issue_date=issue_date,
        certificate_type=decode_text(certificate_type, field="certificate_type"),
        metadata=decode_text(metadata, field="metadata"),
    )


async def issue_certificate(
    ledger: Ledger,
    caller: Principal,
    issuer_credential: IssuerCredential,
    *,
    recipient: str,
    name: Text,
    description: Text,
    image_url: Text,
    certificate_type: Text,
    metadata: Text,
    clock: Clock = system_clock,
) -> Certificate:
    await _authorize(ledger, "issue_certificate", caller, issuer_credential)

    cert = _build(
        issuer_credential.issuer_address,
        clock.now_ms(),
        recipient=recipient,
        name=name,
        description=description,
        image_url=image_url,
        certificate_type=certificate_type,
        metadata=metadata,
    )
    await ledger.certificates.add(cert)
    await ledger.emit(LedgerEvent.certificate_issued(cert))

    CERTIFICATES_ISSUED.labels(mode="single").inc()
    logger.info(
        "Issued certificate id=%s type=%r issuer=%s recipient=%s",
        cert.id,
        cert.certificate_type,
        cert.issuer,
        cert.recipient,
        extra={"certificate_id": str(cert.id)},
    )
    return cert


async def batch_issue_certificates(
    ledger: Ledger,
    caller: Principal,
    issuer_credential: IssuerCredential,
    *,
    recipients: Sequence[str],
    names: Sequence[Text],
    descriptions: Sequence[Text],
    image_urls: Sequence[Text],
    certificate_types: Sequence[Text],
    metadatas: Sequence[Text],
    clock: Clock = system_clock,
    max_batch_size: int | None = None,
) -> list[Certificate]:
    """Mint one certificate per index across the six parallel sequences.

    Either every certificate is stored or none is.  Lengths, size and
    text are all checked before the first write, and every certificate
    shares one ``issue_date``.  An empty batch mints nothing.
    """
    await _authorize(ledger, "batch_issue_certificates", caller, issuer_credential)

    columns = (recipients, names, descriptions, image_urls, certificate_types, metadatas)
    lengths = {f: len(c) for f, c in zip(_BATCH_FIELDS, columns, strict=True)}
    if len(set(lengths.values())) != 1:
        raise InvalidInputError(f"batch sequences differ in length: {lengths}")

    count = len(recipients)
    limit = SETTINGS.batch_max_size if max_batch_size is None else max_batch_size
    if count > limit:
        raise InvalidInputError(f"batch of {count} exceeds the limit of {limit}")

    issue_date = clock.now_ms()
    certs = [
        _build(
            issuer_credential.issuer_address,
            issue_date,
            recipient=recipients[i],
            name=names[i],
            description=descriptions[i],
            image_url=image_urls[i],
            certificate_type=certificate_types[i],
            metadata=metadatas[i],
        )
        for i in range(count)
    ]
    if not certs:
        return []

    await ledger.certificates.add_many(certs)
    for cert in certs:
        await ledger.emit(LedgerEvent.certificate_issued(cert))

    CERTIFICATES_ISSUED.labels(mode="batch").inc(len(certs))
    BATCH_SIZE.observe(len(certs))
    logger.info(
        "Issued batch of %d certificates issuer=%s issue_date=%d",
        len(certs),
        issuer_credential.issuer_address,
        issue_date,
    )
    return certs

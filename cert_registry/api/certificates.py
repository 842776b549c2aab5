"""Certificate endpoints: issue, batch issue, read, verify, destroy.

Certificates can be created and deleted but never edited: this router
has no PUT or PATCH route and nothing that moves a certificate to a
different recipient.
"""

from __future__ import annotations

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response, status
from pydantic import BaseModel, Field

from cert_registry.api.dependencies import CallerDep, ClockDep, LedgerDep, http_error
from cert_registry.models.certificate import Certificate
from cert_registry.services import authority_registry, certificate_store, issuance_engine
from cert_registry.services.errors import RegistryError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/certificates", tags=["certificates"])


# --- Schemas ---

Address = Annotated[str, Field(min_length=1)]


class CertificateIn(BaseModel):
    issuer_cap_id: UUID
    recipient: Address
    name: str
    description: str = ""
    image_url: str = ""
    certificate_type: str
    metadata: str = ""


class BatchIn(BaseModel):
    issuer_cap_id: UUID
    recipients: list[Address]
    names: list[str]
    descriptions: list[str]
    image_urls: list[str]
    certificate_types: list[str]
    metadatas: list[str]


class CertificateOut(BaseModel):
    id: str
    name: str
    description: str
    image_url: str
    recipient: str
    issuer: str
    issue_date: int
    certificate_type: str
    metadata: str


class FieldOut(BaseModel):
    field: str
    value: str | int


class VerifyOut(BaseModel):
    certificate_id: str
    expected_issuer: str
    valid: bool


def _certificate_out(cert: Certificate) -> CertificateOut:
    return CertificateOut(
        id=str(cert.id),
        name=cert.name,
        description=cert.description,
        image_url=cert.image_url,
        recipient=cert.recipient,
        issuer=cert.issuer,
        issue_date=cert.issue_date,
        certificate_type=cert.certificate_type,
        metadata=cert.metadata,
    )


# --- Issuance ---


@router.post("", response_model=CertificateOut, status_code=status.HTTP_201_CREATED)
async def issue_certificate(
    body: CertificateIn,
    caller: CallerDep,
    ledger: LedgerDep,
    clock: ClockDep,
) -> CertificateOut:
    try:
        cap = await authority_registry.get_issuer_credential(ledger, body.issuer_cap_id)
        cert = await issuance_engine.issue_certificate(
            ledger,
            caller,
            cap,
            recipient=body.recipient,
            name=body.name,
            description=body.description,
            image_url=body.image_url,
            certificate_type=body.certificate_type,
            metadata=body.metadata,
            clock=clock,
        )
    except RegistryError as e:
        raise http_error(e) from None
    return _certificate_out(cert)


@router.post(
    "/batch",
    response_model=list[CertificateOut],
    status_code=status.HTTP_201_CREATED,
)
async def batch_issue_certificates(
    body: BatchIn,
    caller: CallerDep,
    ledger: LedgerDep,
    clock: ClockDep,
) -> list[CertificateOut]:
    try:
        cap = await authority_registry.get_issuer_credential(ledger, body.issuer_cap_id)
        certs = await issuance_engine.batch_issue_certificates(
            ledger,
            caller,
            cap,
            recipients=body.recipients,
            names=body.names,
            descriptions=body.descriptions,
            image_urls=body.image_urls,
            certificate_types=body.certificate_types,
            metadatas=body.metadatas,
            clock=clock,
        )
    except RegistryError as e:
        raise http_error(e) from None
    return [_certificate_out(c) for c in certs]


# --- Reads ---


@router.get("", response_model=list[CertificateOut])
async def list_certificates(
    caller: CallerDep,
    ledger: LedgerDep,
    recipient: str | None = None,
    issuer: str | None = None,
) -> list[CertificateOut]:
    if recipient is None and issuer is None:
        raise HTTPException(status_code=422, detail="recipient or issuer is required")
    try:
        certs = await certificate_store.list_certificates(
            ledger, recipient=recipient, issuer=issuer
        )
    except RegistryError as e:
        raise http_error(e) from None
    return [_certificate_out(c) for c in certs]


@router.get("/{cert_id}", response_model=CertificateOut)
async def get_certificate(
    cert_id: UUID, caller: CallerDep, ledger: LedgerDep
) -> CertificateOut:
    try:
        cert = await certificate_store.get_certificate(ledger, cert_id)
    except RegistryError as e:
        raise http_error(e) from None
    return _certificate_out(cert)


# Declared before /{cert_id}/{field} so "verify" is not taken for a field name.
@router.get("/{cert_id}/verify", response_model=VerifyOut)
async def verify_certificate(
    cert_id: UUID,
    caller: CallerDep,
    ledger: LedgerDep,
    issuer: Annotated[str, Query(min_length=1)],
) -> VerifyOut:
    try:
        cert = await certificate_store.get_certificate(ledger, cert_id)
    except RegistryError as e:
        raise http_error(e) from None
    return VerifyOut(
        certificate_id=str(cert.id),
        expected_issuer=issuer,
        valid=certificate_store.verify_certificate(cert, issuer),
    )


@router.get("/{cert_id}/{field}", response_model=FieldOut)
async def get_certificate_field(
    cert_id: UUID,
    field: str,
    caller: CallerDep,
    ledger: LedgerDep,
) -> FieldOut:
    accessor = certificate_store.ACCESSORS.get(field)
    if accessor is None:
        raise HTTPException(status_code=404, detail=f"unknown certificate field {field!r}")
    try:
        cert = await certificate_store.get_certificate(ledger, cert_id)
    except RegistryError as e:
        raise http_error(e) from None
    return FieldOut(field=field, value=accessor(cert))


# --- Destroy ---


@router.delete("/{cert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def destroy_certificate(
    cert_id: UUID,
    caller: CallerDep,
    ledger: LedgerDep,
    clock: ClockDep,
) -> Response:
    try:
        cert = await certificate_store.get_certificate(ledger, cert_id)
        await certificate_store.destroy_certificate(ledger, caller, cert, clock=clock)
    except RegistryError as e:
        raise http_error(e) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)

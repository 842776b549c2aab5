"""Issuer credential endpoints.

Granting requires the admin credential, and the API hands that
credential only to its owner: a caller who does not own it cannot
present it, so the grant is refused with 403.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from cert_registry.api.dependencies import CallerDep, ClockDep, LedgerDep, http_error
from cert_registry.models.credential import IssuerCredential
from cert_registry.services import authority_registry
from cert_registry.services.errors import RegistryError, deny

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/issuers", tags=["issuers"])


# --- Schemas ---


class IssuerCreateIn(BaseModel):
    issuer_name: str
    issuer_address: str = Field(min_length=1)


class IssuerOut(BaseModel):
    id: str
    issuer_name: str
    issuer_address: str
    owner: str


def _issuer_out(cap: IssuerCredential) -> IssuerOut:
    return IssuerOut(
        id=str(cap.id),
        issuer_name=authority_registry.get_issuer_name(cap),
        issuer_address=authority_registry.get_issuer_address(cap),
        owner=cap.owner,
    )


# --- Endpoints ---


@router.post("", response_model=IssuerOut, status_code=status.HTTP_201_CREATED)
async def create_issuer(
    body: IssuerCreateIn,
    caller: CallerDep,
    ledger: LedgerDep,
    clock: ClockDep,
) -> IssuerOut:
    try:
        admin = await authority_registry.get_admin_credential(ledger)
        if not caller.owns(admin.owner):
            deny("create_issuer", caller.address, "caller does not hold the admin credential")
        cap = await authority_registry.create_issuer(
            ledger,
            admin,
            body.issuer_name,
            body.issuer_address,
            clock=clock,
        )
    except RegistryError as e:
        raise http_error(e) from None
    return _issuer_out(cap)


@router.get("", response_model=list[IssuerOut])
async def list_my_issuers(caller: CallerDep, ledger: LedgerDep) -> list[IssuerOut]:
    """Issuer credentials held by the caller."""
    caps = await authority_registry.list_issuer_credentials(ledger, caller.address)
    return [_issuer_out(c) for c in caps]


@router.get("/{cap_id}", response_model=IssuerOut)
async def get_issuer(cap_id: UUID, caller: CallerDep, ledger: LedgerDep) -> IssuerOut:
    try:
        cap = await authority_registry.get_issuer_credential(ledger, cap_id)
    except RegistryError as e:
        raise http_error(e) from None
    return _issuer_out(cap)

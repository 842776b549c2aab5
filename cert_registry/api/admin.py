from __future__ import annotations

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from cert_registry.api.dependencies import CallerDep, LedgerDep, http_error
from cert_registry.services import authority_registry
from cert_registry.services.errors import RegistryError, deny

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/admin", tags=["admin"])


class AdminOut(BaseModel):
    id: str
    owner: str


@router.get("", response_model=AdminOut)
async def get_admin(caller: CallerDep, ledger: LedgerDep) -> AdminOut:
    """The admin credential, shown only to the address that owns it."""
    try:
        admin = await authority_registry.get_admin_credential(ledger)
        if not caller.owns(admin.owner):
            deny("get_admin", caller.address, "caller does not hold the admin credential")
    except RegistryError as e:
        raise http_error(e) from None
    logger.info("Admin credential requested by its owner=%s", caller.address)
    return AdminOut(id=str(admin.id), owner=admin.owner)

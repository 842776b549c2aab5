"""Authority registry: the admin credential and the issuer credentials it grants.

The admin credential is created once, by ``initialize()``, for the
deploying address.  Holding it is what authorizes ``create_issuer``;
the caller's address is not compared.  A credential only counts if it
is the very record the registry stored, so a value rebuilt by hand
with a guessed id is refused.
"""

from __future__ import annotations

import logging
from uuid import UUID

from cert_registry.core.clock import Clock, system_clock
from cert_registry.core.metrics import ISSUERS_GRANTED
from cert_registry.models.credential import AdminCredential, IssuerCredential
from cert_registry.models.event import LedgerEvent
from cert_registry.repos.ledger import Ledger
from cert_registry.services.errors import (
    AlreadyInitializedError,
    NotFoundError,
    deny,
)
from cert_registry.services.text import Text, decode_address, decode_text

logger = logging.getLogger(__name__)


async def initialize(ledger: Ledger, *, deployer: str) -> AdminCredential:
    if await ledger.credentials.get_admin() is not None:
        raise AlreadyInitializedError("authority registry is already initialized")

    admin = AdminCredential.new(owner=deployer)
    try:
        await ledger.credentials.set_admin(admin)
    except ValueError:
        # Another process won the race between the check and the write.
        raise AlreadyInitializedError(
            "authority registry is already initialized"
        ) from None
    logger.info("Created admin credential id=%s owner=%s", admin.id, deployer)
    return admin


async def bootstrap(ledger: Ledger, *, deployer: str) -> AdminCredential:
    """Startup hook: return the admin credential, creating it on first run.

    Restarts must not fail, so an existing credential is returned as is,
    even when ``deployer`` differs from its owner.
    """
    existing = await ledger.credentials.get_admin()
    if existing is not None:
        if existing.owner != deployer:
            logger.warning(
                "ADMIN_ADDRESS=%s ignored; admin credential is owned by %s",
                deployer,
                existing.owner,
            )
        return existing
    return await initialize(ledger, deployer=deployer)


async def get_admin_credential(ledger: Ledger) -> AdminCredential:
    admin = await ledger.credentials.get_admin()
    if admin is None:
        raise NotFoundError("authority registry is not initialized")
    return admin


async def create_issuer(
    ledger: Ledger,
    admin_credential: AdminCredential,
    issuer_name: Text,
    issuer_address: Text,
    *,
    clock: Clock = system_clock,
) -> IssuerCredential:
    """Grant a new issuer credential to ``issuer_address``.

    No uniqueness check: the same address may hold several credentials.
    """
    stored = await ledger.credentials.get_admin()
    if stored is None or stored != admin_credential:
        deny("create_issuer", admin_credential.owner, "not the admin credential")

    name = decode_text(issuer_name, field="issuer_name")
    address = decode_address(issuer_address, field="issuer_address")
    cap = IssuerCredential.new(issuer_name=name, issuer_address=address)
    await ledger.credentials.add_issuer(cap)
    await ledger.emit(LedgerEvent.issuer_created(cap, occurred_at=clock.now_ms()))

    ISSUERS_GRANTED.inc()
    logger.info(
        "Granted issuer credential id=%s name=%r address=%s",
        cap.id,
        cap.issuer_name,
        cap.issuer_address,
        extra={"issuer_cap_id": str(cap.id)},
    )
    return cap


async def get_issuer_credential(ledger: Ledger, cap_id: UUID) -> IssuerCredential:
    cap = await ledger.credentials.get_issuer(cap_id)
    if cap is None:
        raise NotFoundError(f"issuer credential {cap_id} not found")
    return cap


async def list_issuer_credentials(ledger: Ledger, owner: str) -> list[IssuerCredential]:
    return await ledger.credentials.list_issuers_by_owner(owner)


def get_issuer_name(cap: IssuerCredential) -> str:
    return cap.issuer_name


def get_issuer_address(cap: IssuerCredential) -> str:
    return cap.issuer_address

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class AdminCredential:
    """The one administrative capability.

    Created once by the authority registry's bootstrap and owned by the
    deploying address.  Holding it is the only way to grant issuers.
    """

    id: UUID
    owner: str

    @staticmethod
    def new(*, owner: str) -> AdminCredential:
        return AdminCredential(id=uuid4(), owner=owner)


@dataclass(frozen=True, slots=True)
class IssuerCredential:
    """Delegated issuing capability bound to one address.

    ``owner`` is set to ``issuer_address`` at grant time, whoever asked
    for the grant, and no operation changes either field afterwards.
    """

    id: UUID
    issuer_name: str
    issuer_address: str
    owner: str

    @staticmethod
    def new(*, issuer_name: str, issuer_address: str) -> IssuerCredential:
        return IssuerCredential(
            id=uuid4(),
            issuer_name=issuer_name,
            issuer_address=issuer_address,
            owner=issuer_address,
        )

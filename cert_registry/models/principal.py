from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller extracted from a validated bearer token.

    ``address`` is the token subject.  Every ownership and binding check
    in the ledger compares against it; nothing else about the caller
    grants authority.
    """

    address: str

    def owns(self, owner: str) -> bool:
        return self.address == owner

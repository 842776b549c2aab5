from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import cert_registry` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cert_registry.core.clock import FixedClock  # noqa: E402
from cert_registry.main import app  # noqa: E402
from cert_registry.models.credential import AdminCredential, IssuerCredential  # noqa: E402
from cert_registry.repos.ledger import Ledger, memory_stores  # noqa: E402
from cert_registry.services import authority_registry, token_service  # noqa: E402
from cert_registry.services.event_feed import event_feed  # noqa: E402

ADMIN = "0xadmin"
ISSUER = "0xissuer"
RECIPIENT = "0xrecipient"
STRANGER = "0xstranger"

T0 = 1_700_000_000_000


@pytest.fixture(autouse=True)
def reset_ledger() -> None:
    """Fresh in-memory ledger for every test, admin credential owned by ADMIN."""
    memory_stores.reset()
    asyncio.run(authority_registry.initialize(memory_stores.ledger(), deployer=ADMIN))


@pytest.fixture(autouse=True)
def reset_event_feed() -> None:
    if hasattr(event_feed, "reset"):
        event_feed.reset()  # type: ignore[union-attr]


@pytest.fixture(autouse=True)
def reset_dependency_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def ledger() -> Ledger:
    return memory_stores.ledger()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture
def admin_cap(ledger: Ledger) -> AdminCredential:
    return asyncio.run(authority_registry.get_admin_credential(ledger))


@pytest.fixture
def issuer_cap(ledger: Ledger, admin_cap: AdminCredential) -> IssuerCredential:
    return asyncio.run(
        authority_registry.create_issuer(ledger, admin_cap, "Acme U", ISSUER)
    )


def mint_token(address: str = RECIPIENT) -> str:
    """Create a valid ES256 JWT whose subject is ``address``."""
    return token_service.create_access_token(sub=address)


def auth(address: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(address)}"}

from __future__ import annotations

import asyncio
import dataclasses

import pytest

from cert_registry.core.clock import FixedClock
from cert_registry.models.certificate import Certificate
from cert_registry.models.credential import IssuerCredential
from cert_registry.models.event import CERTIFICATE_DESTROYED
from cert_registry.models.principal import Principal
from cert_registry.repos.certificate_repo import CertificateRepo
from cert_registry.repos.ledger import Ledger
from cert_registry.services import certificate_store, issuance_engine
from cert_registry.services.errors import NotAuthorizedError, NotFoundError
from tests.conftest import ISSUER, RECIPIENT, STRANGER, T0


@pytest.fixture
def cert(ledger: Ledger, issuer_cap: IssuerCredential) -> Certificate:
    return asyncio.run(
        issuance_engine.issue_certificate(
            ledger,
            Principal(ISSUER),
            issuer_cap,
            recipient=RECIPIENT,
            name="Diploma",
            description="BSc",
            image_url="https://acme.example/diploma.png",
            certificate_type="degree",
            metadata='{"gpa": 3.9}',
            clock=FixedClock(T0),
        )
    )


# ---- accessors ----


def test_accessors_return_fields(cert: Certificate) -> None:
    assert certificate_store.get_certificate_name(cert) == "Diploma"
    assert certificate_store.get_certificate_description(cert) == "BSc"
    assert certificate_store.get_certificate_image_url(cert) == "https://acme.example/diploma.png"
    assert certificate_store.get_certificate_recipient(cert) == RECIPIENT
    assert certificate_store.get_certificate_issuer(cert) == ISSUER
    assert certificate_store.get_certificate_issue_date(cert) == T0
    assert certificate_store.get_certificate_type(cert) == "degree"
    assert certificate_store.get_certificate_metadata(cert) == '{"gpa": 3.9}'


def test_accessor_table_covers_every_field(cert: Certificate) -> None:
    assert set(certificate_store.ACCESSORS) == {
        "name",
        "description",
        "image_url",
        "recipient",
        "issuer",
        "issue_date",
        "type",
        "metadata",
    }
    assert certificate_store.ACCESSORS["type"](cert) == "degree"


# ---- verify ----


def test_verify_matches_only_the_issuer(cert: Certificate) -> None:
    assert certificate_store.verify_certificate(cert, ISSUER) is True
    assert certificate_store.verify_certificate(cert, RECIPIENT) is False
    assert certificate_store.verify_certificate(cert, "") is False


# ---- destroy ----


def test_recipient_destroys_certificate(ledger: Ledger, cert: Certificate) -> None:
    asyncio.run(
        certificate_store.destroy_certificate(
            ledger, Principal(RECIPIENT), cert, clock=FixedClock(T0 + 5)
        )
    )
    with pytest.raises(NotFoundError):
        asyncio.run(certificate_store.get_certificate(ledger, cert.id))

    events = asyncio.run(ledger.events.read(type=CERTIFICATE_DESTROYED))
    assert len(events) == 1
    assert events[0].occurred_at == T0 + 5
    assert events[0].payload == {
        "certificate_id": str(cert.id),
        "recipient": RECIPIENT,
        "issuer": ISSUER,
    }


def test_second_destroy_is_not_found(ledger: Ledger, cert: Certificate) -> None:
    asyncio.run(certificate_store.destroy_certificate(ledger, Principal(RECIPIENT), cert))
    with pytest.raises(NotFoundError):
        asyncio.run(
            certificate_store.destroy_certificate(ledger, Principal(RECIPIENT), cert)
        )
    events = asyncio.run(ledger.events.read(type=CERTIFICATE_DESTROYED))
    assert len(events) == 1


@pytest.mark.parametrize("caller", [ISSUER, STRANGER])
def test_non_recipient_cannot_destroy(ledger: Ledger, cert: Certificate, caller: str) -> None:
    with pytest.raises(NotAuthorizedError):
        asyncio.run(certificate_store.destroy_certificate(ledger, Principal(caller), cert))

    stored = asyncio.run(certificate_store.get_certificate(ledger, cert.id))
    assert stored == cert
    assert asyncio.run(ledger.events.read(type=CERTIFICATE_DESTROYED)) == []


# ---- listing ----


def test_list_by_recipient_and_issuer(ledger: Ledger, cert: Certificate) -> None:
    by_recipient = asyncio.run(certificate_store.list_certificates(ledger, recipient=RECIPIENT))
    by_issuer = asyncio.run(certificate_store.list_certificates(ledger, issuer=ISSUER))
    both = asyncio.run(
        certificate_store.list_certificates(ledger, recipient=RECIPIENT, issuer=STRANGER)
    )
    assert by_recipient == [cert]
    assert by_issuer == [cert]
    assert both == []


# ---- non-transferability ----


def test_certificate_is_immutable(cert: Certificate) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        cert.recipient = STRANGER  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        cert.issuer = STRANGER  # type: ignore[misc]


def test_no_transfer_operation_exists() -> None:
    modules = (certificate_store, issuance_engine)
    names = {n.lower() for m in modules for n in dir(m)}
    names |= {n.lower() for n in dir(CertificateRepo)}
    for forbidden in ("transfer", "update", "set_recipient", "reassign", "revoke"):
        assert not any(forbidden in n for n in names), forbidden

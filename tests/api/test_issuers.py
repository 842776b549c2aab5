from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

from tests.conftest import ADMIN, ISSUER, STRANGER, auth


def _grant(client: TestClient, caller: str = ADMIN, **body):
    payload = {"issuer_name": "Acme U", "issuer_address": ISSUER}
    payload.update(body)
    return client.post("/v1/issuers", json=payload, headers=auth(caller))


def test_admin_grants_issuer(client: TestClient) -> None:
    resp = _grant(client)
    assert resp.status_code == 201
    data = resp.json()
    assert data["issuer_name"] == "Acme U"
    assert data["issuer_address"] == ISSUER
    assert data["owner"] == ISSUER
    uuid.UUID(data["id"])


def test_grant_requires_auth(client: TestClient) -> None:
    resp = client.post(
        "/v1/issuers", json={"issuer_name": "Acme U", "issuer_address": ISSUER}
    )
    assert resp.status_code == 401


def test_grant_rejects_garbage_token(client: TestClient) -> None:
    resp = client.post(
        "/v1/issuers",
        json={"issuer_name": "Acme U", "issuer_address": ISSUER},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert resp.status_code == 401


def test_non_admin_cannot_grant(client: TestClient) -> None:
    resp = _grant(client, caller=STRANGER, issuer_address=STRANGER)
    assert resp.status_code == 403

    events = client.get("/v1/events", headers=auth(STRANGER)).json()
    assert events == []


def test_issuer_cannot_grant_further_issuers(client: TestClient) -> None:
    _grant(client)
    resp = _grant(client, caller=ISSUER, issuer_address="0xsub")
    assert resp.status_code == 403


def test_get_issuer_returns_name_and_address(client: TestClient) -> None:
    cap_id = _grant(client).json()["id"]
    resp = client.get(f"/v1/issuers/{cap_id}", headers=auth(STRANGER))
    assert resp.status_code == 200
    assert resp.json()["issuer_name"] == "Acme U"
    assert resp.json()["issuer_address"] == ISSUER


def test_get_issuer_unknown_id_is_404(client: TestClient) -> None:
    resp = client.get(f"/v1/issuers/{uuid.uuid4()}", headers=auth(ADMIN))
    assert resp.status_code == 404


def test_list_my_issuers(client: TestClient) -> None:
    a = _grant(client).json()["id"]
    b = _grant(client, issuer_name="Acme Online").json()["id"]
    _grant(client, issuer_address="0xother")

    resp = client.get("/v1/issuers", headers=auth(ISSUER))
    assert resp.status_code == 200
    assert {c["id"] for c in resp.json()} == {a, b}


def test_admin_endpoint_only_for_owner(client: TestClient) -> None:
    resp = client.get("/v1/admin", headers=auth(ADMIN))
    assert resp.status_code == 200
    assert resp.json()["owner"] == ADMIN

    resp = client.get("/v1/admin", headers=auth(STRANGER))
    assert resp.status_code == 403


def test_grant_rejects_empty_issuer_address(client: TestClient) -> None:
    assert _grant(client, issuer_address="").status_code == 422

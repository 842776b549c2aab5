"""Demo: admin → issuer → certificate → verify → destroy, via TestClient.

Run with:
    python scripts/demo_issuance_flow.py
"""

from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from cert_registry.core.config import SETTINGS
from cert_registry.main import app, bootstrap_admin
from cert_registry.services import token_service

ISSUER = "0xacme"
RECIPIENT = "0xrecipient"


def _auth(address: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.create_access_token(sub=address)}"}


def main() -> None:
    client = TestClient(app)
    asyncio.run(bootstrap_admin())

    # ── Step 1: admin grants an issuer credential ───────────────────
    r = client.post(
        "/v1/issuers",
        json={"issuer_name": "Acme U", "issuer_address": ISSUER},
        headers=_auth(SETTINGS.admin_address),
    )
    cap_id = r.json()["id"]
    print(f"1. POST /v1/issuers          → {r.status_code}  cap={cap_id[:8]}…")

    # ── Step 2: someone else tries to issue with it ─────────────────
    body = {
        "issuer_cap_id": cap_id,
        "recipient": RECIPIENT,
        "name": "Diploma",
        "description": "BSc",
        "image_url": "https://acme.example/diploma.png",
        "certificate_type": "degree",
        "metadata": '{"gpa": 3.9}',
    }
    r = client.post("/v1/certificates", json=body, headers=_auth("0xmallory"))
    print(f"2. POST /v1/certificates (wrong caller) → {r.status_code}  (rejected)")

    # ── Step 3: the issuer issues ───────────────────────────────────
    r = client.post("/v1/certificates", json=body, headers=_auth(ISSUER))
    cert_id = r.json()["id"]
    print(f"3. POST /v1/certificates     → {r.status_code}  id={cert_id[:8]}…")

    # ── Step 4: verify against the right and wrong issuer ───────────
    for expected in (ISSUER, RECIPIENT):
        r = client.get(
            f"/v1/certificates/{cert_id}/verify",
            params={"issuer": expected},
            headers=_auth(RECIPIENT),
        )
        print(f"4. GET  verify issuer={expected:<12} → {r.json()['valid']}")

    # ── Steps 5-6: recipient destroys, then again ───────────────
    r = client.delete(f"/v1/certificates/{cert_id}", headers=_auth(RECIPIENT))
    print(f"5. DELETE /v1/certificates   → {r.status_code}")
    r = client.delete(f"/v1/certificates/{cert_id}", headers=_auth(RECIPIENT))
    print(f"6. DELETE again              → {r.status_code}  {r.json()['detail']}")

    # ── Step 7: the event log ───────────────────────────────────────
    r = client.get("/v1/events", headers=_auth(RECIPIENT))
    print(f"7. GET  /v1/events           → {[e['type'] for e in r.json()]}")

    print("\nAll steps completed.")


if __name__ == "__main__":
    main()

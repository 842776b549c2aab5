"""JWT bearer tokens (ES256) carrying the caller address.

The ledger trusts exactly one thing about a caller: the ``sub`` claim of
a token this module signed.  Every ownership and binding check compares
addresses against it.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime, timedelta
from pathlib import Path

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from cert_registry.core.config import SETTINGS

logger = logging.getLogger(__name__)

ALGORITHM = "ES256"
ISSUER = "cert-registry"
AUDIENCE = "cert-registry"
ACCESS_TOKEN_TTL_MIN = 15


def _load_private_key(path: str | None) -> ec.EllipticCurvePrivateKey:
    """Load a P-256 key from PEM, or generate an ephemeral one (dev/test)."""
    if path is None:
        return ec.generate_private_key(ec.SECP256R1())

    key = serialization.load_pem_private_key(Path(path).read_bytes(), password=None)
    if not isinstance(key, ec.EllipticCurvePrivateKey) or not isinstance(
        key.curve, ec.SECP256R1
    ):
        raise ValueError(f"SIGNING_KEY_PATH must hold an EC P-256 key (got {path})")
    logger.info("Loaded signing key from %s", path)
    return key


_private_key = _load_private_key(SETTINGS.signing_key_path)
_public_key = _private_key.public_key()


def create_access_token(*, sub: str, ttl_minutes: int = ACCESS_TOKEN_TTL_MIN) -> str:
    """Sign a token whose ``sub`` is the caller address."""
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "exp": now + timedelta(minutes=ttl_minutes),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims, return the payload.

    Pins the algorithm to ES256.  Raises jwt.ExpiredSignatureError or
    jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )

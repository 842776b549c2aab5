from __future__ import annotations

import jwt
import pytest

from cert_registry.services import token_service


def test_round_trip_carries_caller_address() -> None:
    token = token_service.create_access_token(sub="0xissuer")
    claims = token_service.decode_access_token(token)
    assert claims["sub"] == "0xissuer"
    assert claims["iss"] == token_service.ISSUER
    assert claims["aud"] == token_service.AUDIENCE


def test_expired_token_rejected() -> None:
    token = token_service.create_access_token(sub="0xissuer", ttl_minutes=-1)
    with pytest.raises(jwt.ExpiredSignatureError):
        token_service.decode_access_token(token)


def test_token_signed_with_other_key_rejected() -> None:
    from cryptography.hazmat.primitives.asymmetric import ec

    other = ec.generate_private_key(ec.SECP256R1())
    forged = jwt.encode(
        {"sub": "0xadmin", "iss": token_service.ISSUER, "aud": token_service.AUDIENCE},
        other,
        algorithm="ES256",
    )
    with pytest.raises(jwt.InvalidTokenError):
        token_service.decode_access_token(forged)


def test_hs256_token_rejected() -> None:
    forged = jwt.encode({"sub": "0xadmin"}, "secret-secret-secret-secret-1234", algorithm="HS256")
    with pytest.raises(jwt.InvalidTokenError):
        token_service.decode_access_token(forged)


def test_load_private_key_from_pem(tmp_path) -> None:
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric import ec

    key = ec.generate_private_key(ec.SECP256R1())
    path = tmp_path / "signing.pem"
    path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    loaded = token_service._load_private_key(str(path))
    assert loaded.private_numbers() == key.private_numbers()


def test_load_private_key_rejects_other_curves(tmp_path) -> None:
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric import ec

    key = ec.generate_private_key(ec.SECP384R1())
    path = tmp_path / "p384.pem"
    path.write_bytes(
        key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    with pytest.raises(ValueError, match="P-256"):
        token_service._load_private_key(str(path))

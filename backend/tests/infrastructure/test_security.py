"""Security — argon2 hashing and JWT round trip."""

from datetime import timedelta

import pytest

from votecerto.core.errors import AuthenticationError
from votecerto.infrastructure.security import (
    create_access_token, decode_access_token, hash_password, verify_password,
)


def test_hash_verifies_and_is_salted():
    first = hash_password("segredo")
    assert first != "segredo"
    assert first != hash_password("segredo")
    assert verify_password("segredo", first)
    assert not verify_password("outra", first)


def test_verify_tolerates_garbage_hash():
    assert verify_password("segredo", "not-a-hash") is False


def test_token_carries_claims():
    payload = decode_access_token(create_access_token(7, "ana@example.com", "PARTICIPANTE"))
    assert payload["sub"] == "7"
    assert payload["email"] == "ana@example.com"
    assert payload["tipo"] == "PARTICIPANTE"
    assert payload["exp"] > payload["iat"]


def test_expired_token_rejected():
    token = create_access_token(
        7, "ana@example.com", "PARTICIPANTE", expires_delta=timedelta(seconds=-10),
    )
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_tampered_token_rejected():
    token = create_access_token(7, "ana@example.com", "PARTICIPANTE")
    with pytest.raises(AuthenticationError):
        decode_access_token(token.rsplit(".", 1)[0] + ".assinatura-invalida")

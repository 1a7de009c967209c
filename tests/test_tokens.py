"""Unit tests for auth/tokens.py -- session token issuance and verification.

Covers:
  - token issued at T verifies at T+59min, fails at T+60min and T+61min
  - signature, malformed input and wrong key all raise InvalidToken
  - empty signing key fails fast at construction
"""

from __future__ import annotations

from datetime import timedelta

import pytest
from jose import jwt

from auth.exceptions import InvalidToken, MissingSigningKey
from auth.tokens import TokenService


def test_issue_embeds_subject_and_one_hour_expiry(tokens: TokenService, clock) -> None:
    token = tokens.issue("user-123")
    claims = tokens.verify(token)
    assert claims.subject_id == "user-123"
    assert claims.issued_at == int(clock.now.timestamp())
    assert claims.expires_at - claims.issued_at == 3600


def test_token_valid_at_59_minutes(tokens: TokenService, clock) -> None:
    token = tokens.issue("user-123")
    clock.advance(timedelta(minutes=59))
    assert tokens.verify(token).subject_id == "user-123"


def test_token_invalid_at_61_minutes(tokens: TokenService, clock) -> None:
    token = tokens.issue("user-123")
    clock.advance(timedelta(minutes=61))
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_token_invalid_exactly_at_expiry(tokens: TokenService, clock) -> None:
    token = tokens.issue("user-123")
    clock.advance(timedelta(hours=1))
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_token_signed_with_other_key_is_rejected(tokens: TokenService, clock) -> None:
    other = TokenService("a-completely-different-signing-key-000000", clock=clock)
    with pytest.raises(InvalidToken):
        tokens.verify(other.issue("user-123"))


def test_tampered_payload_is_rejected(tokens: TokenService) -> None:
    header, payload, signature = tokens.issue("user-123").split(".")
    forged_payload = jwt.encode({"sub": "admin", "iat": 0, "exp": 2**40}, "x", algorithm="HS256").split(".")[1]
    with pytest.raises(InvalidToken):
        tokens.verify(f"{header}.{forged_payload}.{signature}")


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "Bearer xyz"])
def test_malformed_token_is_rejected(tokens: TokenService, garbage: str) -> None:
    with pytest.raises(InvalidToken):
        tokens.verify(garbage)


def test_token_without_subject_is_rejected(tokens: TokenService, clock, secret_key: str) -> None:
    now = int(clock.now.timestamp())
    token = jwt.encode({"iat": now, "exp": now + 3600}, secret_key, algorithm="HS256")
    with pytest.raises(InvalidToken):
        tokens.verify(token)


def test_token_without_expiry_is_rejected(tokens: TokenService, secret_key: str) -> None:
    token = jwt.encode({"sub": "user-123", "iat": 0}, secret_key, algorithm="HS256")
    with pytest.raises(InvalidToken):
        tokens.verify(token)


@pytest.mark.parametrize("key", ["", None])
def test_missing_signing_key_fails_fast(key) -> None:
    with pytest.raises(MissingSigningKey):
        TokenService(key)


def test_distinct_keys_per_instance(clock) -> None:
    a = TokenService("key-a-0123456789abcdef0123456789abcdef", clock=clock)
    b = TokenService("key-b-0123456789abcdef0123456789abcdef", clock=clock)
    assert a.verify(a.issue("u")).subject_id == "u"
    with pytest.raises(InvalidToken):
        b.verify(a.issue("u"))

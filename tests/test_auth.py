"""
tests.test_auth

Unit tests for the `Auth` component: password hashing and token issue/parse.
"""

from __future__ import annotations

import base64
import json
import time
import uuid
from datetime import timedelta

import jwt as pyjwt
import pytest

from realworld_api.auth.errors import CryptoFailure, InvalidToken
from realworld_api.auth.jwt import JwtConfig, issue_token
from realworld_api.auth.service import Auth
from realworld_api.settings import Settings


def _b64url_json(segment: str) -> dict:
    return json.loads(base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4)))


def _b64url(data: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()


# -- passwords ---------------------------------------------------------------


@pytest.mark.parametrize(
    "plaintext",
    ["secret123", "", "pässwörd-ünïcode", "x" * 200, "nul\x00byte"],
)
def test_password_round_trip(auth: Auth, plaintext: str) -> None:
    hashed = auth.encrypt_password(plaintext)
    assert hashed != plaintext
    assert auth.verify_password(plaintext, hashed) is True


def test_wrong_password_does_not_verify(auth: Auth) -> None:
    hashed = auth.encrypt_password("secret123")
    assert auth.verify_password("wrong", hashed) is False
    assert auth.verify_password("secret1234", hashed) is False


def test_long_passwords_differing_after_72_bytes_are_distinct(auth: Auth) -> None:
    prefix = "a" * 80
    hashed = auth.encrypt_password(prefix + "one")
    assert auth.verify_password(prefix + "two", hashed) is False


def test_same_password_hashes_differently_each_time(auth: Auth) -> None:
    first = auth.encrypt_password("same-password")
    second = auth.encrypt_password("same-password")
    assert first != second
    assert auth.verify_password("same-password", first)
    assert auth.verify_password("same-password", second)


def test_unusable_stored_hash_is_a_crypto_failure(auth: Auth) -> None:
    with pytest.raises(CryptoFailure):
        auth.verify_password("secret123", "not-a-bcrypt-hash")


def test_burn_verification_returns_nothing(auth: Auth) -> None:
    assert auth.burn_verification("anything") is None


# -- tokens ------------------------------------------------------------------


def test_token_round_trip(auth: Auth) -> None:
    subject = uuid.uuid4()
    token = auth.parse(auth.create_token(subject))
    assert token.subject == subject
    assert token.expires_at - token.issued_at == timedelta(hours=24)
    assert token.claims["iss"] == "realworld-api"


def test_custom_ttl(auth: Auth) -> None:
    token = auth.parse(auth.create_token(uuid.uuid4(), ttl=timedelta(minutes=5)))
    assert token.expires_at - token.issued_at == timedelta(minutes=5)


def test_token_signed_with_other_secret_is_rejected(auth: Auth, settings: Settings) -> None:
    other = Auth.from_settings(settings.model_copy(update={"jwt_secret": "x" * 40}))
    with pytest.raises(InvalidToken):
        auth.parse(other.create_token(uuid.uuid4()))


def test_tampered_payload_is_rejected(auth: Auth) -> None:
    header, payload, signature = auth.create_token(uuid.uuid4()).split(".")
    claims = _b64url_json(payload)
    claims["sub"] = str(uuid.uuid4())
    with pytest.raises(InvalidToken):
        auth.parse(".".join([header, _b64url(claims), signature]))


@pytest.mark.parametrize("mangle", [lambda t: t[: len(t) // 2], lambda t: t[:-4], lambda t: t + "x"])
def test_truncated_or_corrupted_token_is_rejected(auth: Auth, mangle) -> None:
    with pytest.raises(InvalidToken):
        auth.parse(mangle(auth.create_token(uuid.uuid4())))


@pytest.mark.parametrize("garbage", ["", "not-a-token", "a.b.c", "Token abc"])
def test_garbage_is_rejected(auth: Auth, garbage: str) -> None:
    with pytest.raises(InvalidToken):
        auth.parse(garbage)


def test_expired_token_is_rejected(auth: Auth) -> None:
    token = auth.create_token(uuid.uuid4(), ttl=timedelta(seconds=1))
    time.sleep(2)
    with pytest.raises(InvalidToken):
        auth.parse(token)


def test_already_expired_ttl_is_rejected(auth: Auth) -> None:
    with pytest.raises(InvalidToken):
        auth.parse(auth.create_token(uuid.uuid4(), ttl=timedelta(seconds=-10)))


def test_unsigned_token_is_rejected(auth: Auth) -> None:
    payload = {"sub": str(uuid.uuid4()), "iat": int(time.time()), "exp": int(time.time()) + 60}
    unsigned = pyjwt.encode(payload, "", algorithm="none")
    with pytest.raises(InvalidToken):
        auth.parse(unsigned)


def test_wrong_audience_is_rejected(auth: Auth, settings: Settings) -> None:
    other = Auth.from_settings(settings.model_copy(update={"jwt_audience": "someone-else"}))
    with pytest.raises(InvalidToken):
        auth.parse(other.create_token(uuid.uuid4()))


def test_non_uuid_subject_is_rejected(auth: Auth, settings: Settings) -> None:
    cfg = JwtConfig(
        alg=settings.jwt_alg,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        secret=settings.jwt_secret,
    )
    token = issue_token(cfg=cfg, subject="alice", ttl=timedelta(minutes=1))
    with pytest.raises(InvalidToken):
        auth.parse(token)


def test_rotating_the_secret_invalidates_tokens(settings: Settings) -> None:
    before = Auth.from_settings(settings)
    token = before.create_token(uuid.uuid4())
    after = Auth.from_settings(settings.model_copy(update={"jwt_secret": "rotated-" + "y" * 40}))
    with pytest.raises(InvalidToken):
        after.parse(token)

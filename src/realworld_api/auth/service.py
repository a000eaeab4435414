"""
realworld_api.auth.service

The `Auth` component: every cryptographic/identity operation needed to
authenticate a user across requests.

Responsibilities:
- `encrypt_password` / `verify_password` (bcrypt, per-call salt).
- `create_token` / `parse` (signed JWT carrying the user id).

`Auth` holds only immutable configuration, so a single instance is shared by
all concurrent requests without locking.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta
from functools import cached_property

from realworld_api.auth.errors import InvalidToken
from realworld_api.auth.jwt import JwtConfig, decode_and_validate, issue_token
from realworld_api.auth.models import HashedPassword, Token
from realworld_api.auth.passwords import DEFAULT_ROUNDS, hash_password, verify_password
from realworld_api.settings import Settings


class Auth:
    def __init__(
        self,
        *,
        jwt: JwtConfig,
        ttl: timedelta,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ) -> None:
        self._jwt = jwt
        self._ttl = ttl
        self._rounds = bcrypt_rounds

    @classmethod
    def from_settings(cls, settings: Settings) -> Auth:
        return cls(
            jwt=JwtConfig(
                alg=settings.jwt_alg,
                issuer=settings.jwt_issuer,
                audience=settings.jwt_audience,
                secret=settings.jwt_secret,
            ),
            ttl=timedelta(seconds=settings.jwt_ttl_seconds),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    # -- passwords ---------------------------------------------------------

    def encrypt_password(self, plaintext: str) -> HashedPassword:
        return HashedPassword(hash_password(plaintext, rounds=self._rounds))

    def verify_password(self, plaintext: str, hashed: HashedPassword | str) -> bool:
        return verify_password(plaintext, hashed)

    @cached_property
    def _dummy_hash(self) -> str:
        return hash_password("realworld-timing-dummy", rounds=self._rounds)

    def burn_verification(self, plaintext: str) -> None:
        """
        Run a verification against a throwaway hash.

        Login calls this when no account matches, so an unknown email costs the
        same bcrypt work as a wrong password.
        """

        verify_password(plaintext, self._dummy_hash)

    # -- tokens ------------------------------------------------------------

    def create_token(self, subject: uuid.UUID, *, ttl: timedelta | None = None) -> str:
        return issue_token(cfg=self._jwt, subject=str(subject), ttl=self._ttl if ttl is None else ttl)

    def parse(self, token: str) -> Token:
        payload = decode_and_validate(cfg=self._jwt, token=token)
        try:
            subject = uuid.UUID(str(payload["sub"]))
            issued_at = datetime.fromtimestamp(payload["iat"], tz=UTC)
            expires_at = datetime.fromtimestamp(payload["exp"], tz=UTC)
        except (ValueError, TypeError, OverflowError) as e:
            raise InvalidToken(f"malformed token claims: {e}") from e
        return Token(subject=subject, issued_at=issued_at, expires_at=expires_at, claims=payload)


# --- Module Notes -----------------------------------------------------------
# One instance is built per app in `api.app.create_app` and stored on `app.state.auth`.

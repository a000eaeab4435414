"""
realworld_api.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue tokens carrying the user id as `sub` plus iss/aud/iat/exp.
- Decode and validate tokens with strict claim requirements.

Note:
- HS256 with a shared secret; the signature covers header and payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from realworld_api.auth.errors import InvalidToken


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str


def issue_token(*, cfg: JwtConfig, subject: str, ttl: timedelta) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # Pinning `algorithms` rejects "alg": "none" and algorithm-confusion tokens.
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise InvalidToken(str(e)) from e


# --- Module Notes -----------------------------------------------------------
# `realworld_api.auth.service.Auth` is the only caller; routers never touch PyJWT.

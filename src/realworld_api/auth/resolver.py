"""
realworld_api.auth.resolver

Request authentication resolution.

Responsibilities:
- Parse `Authorization: Token <jwt>`.
- Verify the token with `Auth.parse` and look the subject up in user storage.
- Return an explicit `AuthResult`; every failure is `Unauthenticated(reason)`.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Protocol

from realworld_api.auth.errors import InvalidToken
from realworld_api.auth.models import (
    Authenticated,
    AuthFailureReason,
    AuthResult,
    Unauthenticated,
)
from realworld_api.auth.service import Auth
from realworld_api.observability.logging import get_logger

if TYPE_CHECKING:
    from realworld_api.db.models import User

TOKEN_PREFIX = "Token "

log = get_logger(__name__)


class UserLookup(Protocol):
    async def get(self, user_id: uuid.UUID) -> User | None: ...


async def resolve(authorization: str | None, *, auth: Auth, users: UserLookup) -> AuthResult:
    if not authorization:
        return Unauthenticated(AuthFailureReason.missing_header)
    if not authorization.startswith(TOKEN_PREFIX):
        return Unauthenticated(AuthFailureReason.wrong_scheme)

    raw = authorization[len(TOKEN_PREFIX) :].strip()
    try:
        token = auth.parse(raw)
    except InvalidToken as e:
        log.info("auth.token_rejected", error=str(e))
        return Unauthenticated(AuthFailureReason.invalid_token)

    user = await users.get(token.subject)
    if user is None:
        # Valid signature but the account is gone (deleted, or a different database).
        log.info("auth.unknown_subject", subject=str(token.subject))
        return Unauthenticated(AuthFailureReason.unknown_subject)
    return Authenticated(user=user, token=raw)


# --- Module Notes -----------------------------------------------------------
# `auth.deps` adapts this to FastAPI; tests call `resolve` directly with fake lookups.

"""
realworld_api.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- `current_user`: require a resolved user, else HTTP 401.
- `optional_user`: resolve when possible, else anonymous (`None`).
- Publish the `Authorization: Token <jwt>` scheme in OpenAPI.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED

from realworld_api.api.deps import db_session
from realworld_api.auth.models import Authenticated, AuthResult
from realworld_api.auth.resolver import resolve
from realworld_api.auth.service import Auth
from realworld_api.db.repositories.users import UserRepo

# The whole header value ("Token <jwt>") is handed to the resolver, which owns prefix checks.
_token_header = APIKeyHeader(
    name="Authorization",
    scheme_name="Token",
    description='Signed token, sent as "Token <jwt>".',
    auto_error=False,
)


def auth_from_app(request: Request) -> Auth:
    # Built once in `api.app.create_app`.
    return request.app.state.auth  # type: ignore[attr-defined]


async def _resolve(
    authorization: str | None = Depends(_token_header),
    auth: Auth = Depends(auth_from_app),
    session: AsyncSession = Depends(db_session),
) -> AuthResult:
    return await resolve(authorization, auth=auth, users=UserRepo(session))


def _mark_user(request: Request, result: Authenticated) -> None:
    user_id = str(result.user.id)
    structlog.contextvars.bind_contextvars(user_id=user_id)
    # The access log runs in the middleware's task, outside these contextvars.
    request.state.user_id = user_id


async def current_user(
    request: Request, result: AuthResult = Depends(_resolve)
) -> Authenticated:
    if not isinstance(result, Authenticated):
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Token"},
        )
    _mark_user(request, result)
    return result


async def optional_user(
    request: Request, result: AuthResult = Depends(_resolve)
) -> Authenticated | None:
    # Anonymous reads: a bad or missing token degrades to "no viewer".
    if isinstance(result, Authenticated):
        _mark_user(request, result)
        return result
    return None

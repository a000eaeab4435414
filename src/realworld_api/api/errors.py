"""
realworld_api.api.errors

Exception handlers registered on the app.

Responsibilities:
- Map service `DomainError`s to RealWorld's `{"errors": {field: [message]}}` body.
- Map a stray `InvalidToken` to 401 (resolution normally converts it earlier).
- Log `CryptoFailure` and answer 500 without leaking details.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from realworld_api.auth.errors import CryptoFailure, InvalidToken
from realworld_api.observability.logging import get_logger
from realworld_api.services.errors import DomainError, FieldError

log = get_logger(__name__)


def _errors(field: str, message: str) -> dict[str, dict[str, list[str]]]:
    return {"errors": {field: [message]}}


async def _domain_error(_: Request, exc: DomainError) -> JSONResponse:
    field = exc.field if isinstance(exc, FieldError) else "body"
    return JSONResponse(status_code=exc.status_code, content=_errors(field, exc.message))


async def _invalid_token(_: Request, exc: InvalidToken) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_401_UNAUTHORIZED,
        content=_errors("token", "is invalid"),
        headers={"WWW-Authenticate": "Token"},
    )


async def _crypto_failure(_: Request, exc: CryptoFailure) -> JSONResponse:
    log.error("auth.crypto_failure", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR, content=_errors("body", "internal error")
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, _domain_error)
    app.add_exception_handler(InvalidToken, _invalid_token)
    app.add_exception_handler(CryptoFailure, _crypto_failure)

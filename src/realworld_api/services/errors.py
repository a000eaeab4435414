"""
realworld_api.services.errors

Domain errors raised by services and mapped to HTTP responses in `api.errors`.
"""

from __future__ import annotations


class DomainError(Exception):
    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(DomainError):
    status_code = 404


class Forbidden(DomainError):
    status_code = 403


class InvalidCredentials(DomainError):
    status_code = 401

    def __init__(self) -> None:
        # Deliberately identical for unknown email and wrong password.
        super().__init__("email or password is invalid")


class FieldError(DomainError):
    status_code = 422

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field

"""
realworld_api.auth.errors

Error kinds raised by the auth core.
"""

from __future__ import annotations


class AuthError(Exception):
    pass


class CryptoFailure(AuthError):
    """The hashing primitive itself failed (bad stored hash, bad input encoding)."""


class InvalidToken(AuthError):
    """Signature mismatch, malformed payload, wrong issuer/audience, or expired."""

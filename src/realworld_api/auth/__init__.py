"""
realworld_api.auth

Authentication package.

Responsibilities:
- Password hashing/verification and signed-token issuance/parsing (`Auth`).
- Resolve the `Authorization: Token <jwt>` header into a user.
- FastAPI dependencies that turn a failed resolution into HTTP 401.
"""

from realworld_api.auth.errors import AuthError, CryptoFailure, InvalidToken
from realworld_api.auth.service import Auth

__all__ = ["Auth", "AuthError", "CryptoFailure", "InvalidToken"]


# --- Module Notes -----------------------------------------------------------
# `Auth` itself does no I/O; only the resolver touches user storage.

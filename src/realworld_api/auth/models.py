"""
realworld_api.auth.models

Auth value types.

Responsibilities:
- `Token`: decoded, verified token contents.
- `AuthResult`: outcome of resolving an Authorization header
  (`Authenticated` or `Unauthenticated`).
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, NewType

if TYPE_CHECKING:
    from realworld_api.db.models import User

HashedPassword = NewType("HashedPassword", str)


@dataclass(frozen=True, slots=True)
class Token:
    subject: uuid.UUID
    issued_at: datetime
    expires_at: datetime
    claims: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)


class AuthFailureReason(enum.StrEnum):
    missing_header = "MISSING_HEADER"
    wrong_scheme = "WRONG_SCHEME"
    invalid_token = "INVALID_TOKEN"
    unknown_subject = "UNKNOWN_SUBJECT"


@dataclass(frozen=True, slots=True)
class Authenticated:
    user: User
    # The raw token the caller presented, echoed back in user responses.
    token: str


@dataclass(frozen=True, slots=True)
class Unauthenticated:
    reason: AuthFailureReason


AuthResult = Authenticated | Unauthenticated


# --- Module Notes -----------------------------------------------------------
# Callers branch on `isinstance(result, Authenticated)`; nothing here raises.

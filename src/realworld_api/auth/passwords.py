"""
realworld_api.auth.passwords

bcrypt password hashing.

Responsibilities:
- Hash plaintext passwords with a fresh salt per call.
- Verify plaintext against a stored hash (constant-time inside bcrypt).

Note:
- Input is SHA-256 + base64 pre-hashed (44 bytes) so plaintexts beyond bcrypt's
  72-byte limit, or containing NUL bytes, still hash and verify.
"""

from __future__ import annotations

import base64
import hashlib

import bcrypt

from realworld_api.auth.errors import CryptoFailure

DEFAULT_ROUNDS = 12


def _prehash(plaintext: str) -> bytes:
    digest = hashlib.sha256(plaintext.encode("utf-8", "surrogatepass")).digest()
    return base64.b64encode(digest)


def hash_password(plaintext: str, *, rounds: int = DEFAULT_ROUNDS) -> str:
    try:
        hashed = bcrypt.hashpw(_prehash(plaintext), bcrypt.gensalt(rounds=rounds))
    except (ValueError, TypeError) as e:
        raise CryptoFailure(f"password hashing failed: {e}") from e
    return hashed.decode("ascii")


def verify_password(plaintext: str, hashed: str) -> bool:
    # A mismatch is a plain False; only an unusable stored hash raises.
    try:
        return bcrypt.checkpw(_prehash(plaintext), hashed.encode("ascii"))
    except (ValueError, TypeError) as e:
        raise CryptoFailure(f"password verification failed: {e}") from e

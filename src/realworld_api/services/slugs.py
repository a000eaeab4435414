"""
realworld_api.services.slugs

Slug generation for article URLs.
"""

from __future__ import annotations

import re
import secrets
import unicodedata
from collections.abc import Awaitable, Callable

_NON_SLUG = re.compile(r"[^a-z0-9]+")
MAX_SLUG_LENGTH = 200
MAX_ATTEMPTS = 20


def slugify(title: str) -> str:
    # Fold accents to ASCII, then collapse every other run of characters to "-".
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG.sub("-", folded.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-") or "article"


async def unique_slug(title: str, exists: Callable[[str], Awaitable[bool]]) -> str:
    """
    Slugify `title`, appending a random hex suffix while the slug is taken.
    """

    base = slugify(title)
    candidate = base
    for _ in range(MAX_ATTEMPTS):
        if not await exists(candidate):
            return candidate
        candidate = f"{base}-{secrets.token_hex(3)}"
    raise RuntimeError(f"could not find a free slug for {base!r}")

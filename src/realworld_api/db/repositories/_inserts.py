"""
realworld_api.db.repositories._inserts

Dialect-aware `INSERT ... ON CONFLICT DO NOTHING` for idempotent link rows
(follows, favorites) that concurrent requests may write at the same time.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.db.base import Base

_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


async def insert_or_ignore(session: AsyncSession, model: type[Base], **values: Any) -> None:
    dialect = session.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"no conflict-ignoring insert for dialect {dialect!r}")
    await session.execute(insert(model).values(**values).on_conflict_do_nothing())

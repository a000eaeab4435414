"""
realworld_api.db.init_db

Dev/test schema bootstrap.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from realworld_api.db import models  # noqa: F401  # register tables on Base.metadata
from realworld_api.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Production runs Alembic migrations instead.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

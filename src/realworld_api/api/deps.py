"""
realworld_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Expose the app-scoped sessionmaker stored on `app.state`.
- Provide a request-scoped DB session.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the app lifespan (`api.app.create_app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Services commit explicitly; anything uncommitted is rolled back on close.
    async with session_factory() as session:
        yield session

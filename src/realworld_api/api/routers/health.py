"""
realworld_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Liveness probe (`/healthz`): the process serves HTTP.
- Readiness probe (`/readyz`): the database answers a trivial query.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api import __version__
from realworld_api.api.deps import db_session

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}

"""
realworld_api.api.routers.profiles

Profile read and follow/unfollow endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.api.deps import db_session
from realworld_api.api.schemas import ProfileResponse
from realworld_api.auth.deps import current_user, optional_user
from realworld_api.auth.models import Authenticated
from realworld_api.services.profiles import ProfileService

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("/{username}", response_model=ProfileResponse)
async def get_profile(
    username: str,
    caller: Authenticated | None = Depends(optional_user),
    session: AsyncSession = Depends(db_session),
) -> ProfileResponse:
    viewer = caller.user if caller is not None else None
    view = await ProfileService(session=session).get(username, viewer=viewer)
    return ProfileResponse.build(view)


@router.post("/{username}/follow", response_model=ProfileResponse)
async def follow(
    username: str,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> ProfileResponse:
    view = await ProfileService(session=session).follow(username, follower=caller.user)
    return ProfileResponse.build(view)


@router.delete("/{username}/follow", response_model=ProfileResponse)
async def unfollow(
    username: str,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> ProfileResponse:
    view = await ProfileService(session=session).unfollow(username, follower=caller.user)
    return ProfileResponse.build(view)

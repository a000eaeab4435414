"""
realworld_api.services.profiles

Profile read and follow/unfollow use cases.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.db.models import User
from realworld_api.db.repositories.users import UserRepo
from realworld_api.observability.logging import get_logger
from realworld_api.services.errors import NotFound
from realworld_api.services.views import ProfileView

log = get_logger(__name__)


class ProfileService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepo(session)

    async def get(self, username: str, *, viewer: User | None) -> ProfileView:
        target = await self._require(username)
        return await self.view(target, viewer=viewer)

    async def follow(self, username: str, *, follower: User) -> ProfileView:
        target = await self._require(username)
        await self._users.add_follower(followee_id=target.id, follower_id=follower.id)
        await self._session.commit()
        log.info("profile.followed", followee=target.username, follower_id=str(follower.id))
        return ProfileView(
            username=target.username, bio=target.bio, image=target.image, following=True
        )

    async def unfollow(self, username: str, *, follower: User) -> ProfileView:
        target = await self._require(username)
        await self._users.remove_follower(followee_id=target.id, follower_id=follower.id)
        await self._session.commit()
        log.info("profile.unfollowed", followee=target.username, follower_id=str(follower.id))
        return ProfileView(
            username=target.username, bio=target.bio, image=target.image, following=False
        )

    async def view(self, target: User, *, viewer: User | None) -> ProfileView:
        following: bool | None = None
        if viewer is not None:
            following = await self._users.has_follower(
                followee_id=target.id, follower_id=viewer.id
            )
        return ProfileView(
            username=target.username,
            bio=target.bio,
            image=target.image,
            following=following,
        )

    async def _require(self, username: str) -> User:
        user = await self._users.get_by_username(username)
        if user is None:
            raise NotFound(f"profile {username!r} not found")
        return user

"""
realworld_api.db.repositories.users

Repository for `User` entities and the follower graph.

Responsibilities:
- Create/fetch/update users; uniqueness checks on email and username.
- Idempotent follow/unfollow and follower lookups.
"""

from __future__ import annotations

import uuid

from sqlalchemy import delete, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.db.models import Follow, User, utcnow
from realworld_api.db.repositories._inserts import insert_or_ignore


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        username: str,
        email: str,
        password_hash: str,
    ) -> User:
        user = User(username=username, email=email, password_hash=password_hash)
        self._session.add(user)
        await self._session.flush()
        return user

    async def get(self, user_id: uuid.UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_email(self, email: str, *, exclude_id: uuid.UUID | None = None) -> bool:
        cond = User.email == email
        if exclude_id is not None:
            cond = cond & (User.id != exclude_id)
        return bool((await self._session.execute(select(exists().where(cond)))).scalar())

    async def exists_by_username(
        self, username: str, *, exclude_id: uuid.UUID | None = None
    ) -> bool:
        cond = User.username == username
        if exclude_id is not None:
            cond = cond & (User.id != exclude_id)
        return bool((await self._session.execute(select(exists().where(cond)))).scalar())

    async def update(
        self,
        user: User,
        *,
        username: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
        bio: str | None = None,
        image: str | None = None,
    ) -> User:
        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        if password_hash is not None:
            user.password_hash = password_hash
        if bio is not None:
            user.bio = bio
        if image is not None:
            user.image = image
        user.updated_at = utcnow()
        await self._session.flush()
        return user

    async def has_follower(self, *, followee_id: uuid.UUID, follower_id: uuid.UUID) -> bool:
        stmt = select(
            exists().where(Follow.followee_id == followee_id, Follow.follower_id == follower_id)
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def add_follower(self, *, followee_id: uuid.UUID, follower_id: uuid.UUID) -> None:
        # Following twice, even concurrently, is a no-op.
        await insert_or_ignore(
            self._session, Follow, followee_id=followee_id, follower_id=follower_id
        )

    async def remove_follower(self, *, followee_id: uuid.UUID, follower_id: uuid.UUID) -> None:
        stmt = delete(Follow).where(
            Follow.followee_id == followee_id, Follow.follower_id == follower_id
        )
        await self._session.execute(stmt)


# --- Module Notes -----------------------------------------------------------
# `get` doubles as the user lookup for `auth.resolver.resolve`.

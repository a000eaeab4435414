"""
realworld_api.services.users

Registration, login and profile-update use cases.

Responsibilities:
- Enforce email/username uniqueness before writing.
- Hash passwords and issue tokens through `Auth`.
- Keep login failures indistinguishable (unknown email vs wrong password).
"""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.auth.service import Auth
from realworld_api.db.models import User
from realworld_api.db.repositories.users import UserRepo
from realworld_api.observability.logging import get_logger
from realworld_api.services.errors import FieldError, InvalidCredentials

log = get_logger(__name__)

TAKEN = "has already been taken"


@dataclass(frozen=True, slots=True)
class UserWithToken:
    user: User
    token: str


class UserService:
    def __init__(self, *, session: AsyncSession, auth: Auth) -> None:
        self._session = session
        self._auth = auth
        self._users = UserRepo(session)

    async def register(self, *, username: str, email: str, password: str) -> UserWithToken:
        await self._ensure_available(username=username, email=email)
        password_hash = await asyncio.to_thread(self._auth.encrypt_password, password)
        try:
            user = await self._users.create(
                username=username,
                email=email,
                password_hash=password_hash,
            )
            await self._session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration; report which field collided.
            await self._session.rollback()
            await self._ensure_available(username=username, email=email)
            raise

        log.info("user.registered", user_id=str(user.id))
        return UserWithToken(user=user, token=self._auth.create_token(user.id))

    async def login(self, *, email: str, password: str) -> UserWithToken:
        user = await self._users.get_by_email(email)
        if user is None:
            await asyncio.to_thread(self._auth.burn_verification, password)
            log.info("user.login_failed")
            raise InvalidCredentials()
        if not await asyncio.to_thread(self._auth.verify_password, password, user.password_hash):
            log.info("user.login_failed")
            raise InvalidCredentials()

        log.info("user.logged_in", user_id=str(user.id))
        return UserWithToken(user=user, token=self._auth.create_token(user.id))

    async def update(
        self,
        user: User,
        *,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
        bio: str | None = None,
        image: str | None = None,
    ) -> User:
        # Read before any rollback expires the instance.
        user_id = user.id
        username = username if username != user.username else None
        email = email if email != user.email else None

        await self._ensure_available(username=username, email=email, exclude_id=user_id)
        password_hash = (
            await asyncio.to_thread(self._auth.encrypt_password, password) if password else None
        )
        try:
            await self._users.update(
                user,
                username=username,
                email=email,
                password_hash=password_hash,
                bio=bio,
                image=image,
            )
            await self._session.commit()
        except IntegrityError:
            # Another request took the email/username after our check.
            await self._session.rollback()
            await self._ensure_available(username=username, email=email, exclude_id=user_id)
            raise

        log.info("user.updated", user_id=str(user_id), password_changed=bool(password))
        return user

    async def _ensure_available(
        self,
        *,
        username: str | None,
        email: str | None,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        if email is not None and await self._users.exists_by_email(email, exclude_id=exclude_id):
            raise FieldError("email", TAKEN)
        if username is not None and await self._users.exists_by_username(
            username, exclude_id=exclude_id
        ):
            raise FieldError("username", TAKEN)


# --- Module Notes -----------------------------------------------------------
# Current-user reads need no service: `auth.deps.current_user` already resolved the row.
# bcrypt runs in a worker thread (`asyncio.to_thread`) so hashing never stalls the event loop.

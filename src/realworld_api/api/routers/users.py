"""
realworld_api.api.routers.users

Registration, login and current-user endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from realworld_api.api.deps import db_session
from realworld_api.api.schemas import (
    LoginRequest,
    RegistrationRequest,
    UserResponse,
    UserUpdateRequest,
)
from realworld_api.auth.deps import auth_from_app, current_user
from realworld_api.auth.models import Authenticated
from realworld_api.auth.service import Auth
from realworld_api.services.users import UserService

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", response_model=UserResponse, status_code=HTTP_201_CREATED)
async def register(
    body: RegistrationRequest,
    session: AsyncSession = Depends(db_session),
    auth: Auth = Depends(auth_from_app),
) -> UserResponse:
    result = await UserService(session=session, auth=auth).register(
        username=body.user.username,
        email=body.user.email,
        password=body.user.password,
    )
    return UserResponse.build(result.user, result.token)


@router.post("/users/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    auth: Auth = Depends(auth_from_app),
) -> UserResponse:
    result = await UserService(session=session, auth=auth).login(
        email=body.user.email, password=body.user.password
    )
    return UserResponse.build(result.user, result.token)


@router.get("/user", response_model=UserResponse)
async def get_current_user(caller: Authenticated = Depends(current_user)) -> UserResponse:
    return UserResponse.build(caller.user, caller.token)


@router.put("/user", response_model=UserResponse)
async def update_current_user(
    body: UserUpdateRequest,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
    auth: Auth = Depends(auth_from_app),
) -> UserResponse:
    patch = body.user
    user = await UserService(session=session, auth=auth).update(
        caller.user,
        username=patch.username,
        email=patch.email,
        password=patch.password,
        bio=patch.bio,
        image=patch.image,
    )
    return UserResponse.build(user, caller.token)

"""
tests.conftest

Shared fixtures.

Responsibilities:
- Per-test settings pointing at a temporary SQLite database.
- App with its lifespan entered (engine + tables), and an in-process httpx client.
- A `register` helper that signs a user up and returns the user payload.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from realworld_api.api.app import create_app
from realworld_api.auth.service import Auth
from realworld_api.settings import Settings

TEST_SECRET = "test-secret-0123456789abcdef-0123456789"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        log_json=False,
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
    )


@pytest.fixture
def auth(settings: Settings) -> Auth:
    return Auth.from_settings(settings)


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx's ASGITransport does not run lifespan events; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def register(
    client: httpx.AsyncClient,
) -> Callable[..., Awaitable[dict[str, Any]]]:
    async def _register(
        username: str, email: str | None = None, password: str = "plain"
    ) -> dict[str, Any]:
        r = await client.post(
            "/api/users",
            json={
                "user": {
                    "username": username,
                    "email": email or f"{username}@realworld.io",
                    "password": password,
                }
            },
        )
        assert r.status_code == 201, r.text
        return r.json()["user"]

    return _register

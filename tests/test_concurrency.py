"""
tests.test_concurrency

Behavior under overlapping requests on one event loop.

Responsibilities:
- bcrypt work does not hold up unrelated requests.
- Repeated follow/favorite calls racing each other all succeed once.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from realworld_api.api.app import create_app
from realworld_api.settings import Settings


def token_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Token {token}"}


@pytest_asyncio.fixture
async def slow_hash_client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    # Enough bcrypt work per call to make a blocked loop obvious.
    app = create_app(settings=settings.model_copy(update={"bcrypt_rounds": 13}))
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


async def _timed(request) -> tuple[httpx.Response, float]:
    started = time.perf_counter()
    response = await request
    return response, time.perf_counter() - started


@pytest.mark.asyncio
async def test_health_stays_responsive_while_a_password_is_hashed(
    slow_hash_client: httpx.AsyncClient,
) -> None:
    async def health_shortly_after() -> tuple[httpx.Response, float]:
        await asyncio.sleep(0.05)
        return await _timed(slow_hash_client.get("/healthz"))

    (registered, register_s), (health, health_s) = await asyncio.gather(
        _timed(
            slow_hash_client.post(
                "/api/users",
                json={"user": {"username": "alice", "email": "alice@realworld.io", "password": "pw"}},
            )
        ),
        health_shortly_after(),
    )

    assert registered.status_code == 201
    assert health.status_code == 200
    assert health_s < register_s / 2, f"healthz took {health_s:.3f}s during a {register_s:.3f}s register"


@pytest.mark.asyncio
async def test_health_stays_responsive_while_a_login_verifies(
    slow_hash_client: httpx.AsyncClient,
) -> None:
    r = await slow_hash_client.post(
        "/api/users",
        json={"user": {"username": "alice", "email": "alice@realworld.io", "password": "pw"}},
    )
    assert r.status_code == 201

    async def health_shortly_after() -> tuple[httpx.Response, float]:
        await asyncio.sleep(0.05)
        return await _timed(slow_hash_client.get("/healthz"))

    (login, login_s), (health, health_s) = await asyncio.gather(
        _timed(
            slow_hash_client.post(
                "/api/users/login",
                json={"user": {"email": "alice@realworld.io", "password": "pw"}},
            )
        ),
        health_shortly_after(),
    )

    assert login.status_code == 200
    assert health.status_code == 200
    assert health_s < login_s / 2, f"healthz took {health_s:.3f}s during a {login_s:.3f}s login"


@pytest.mark.asyncio
async def test_concurrent_follows_all_succeed(client: httpx.AsyncClient, register) -> None:
    fan = await register("fan")
    await register("celeb")
    headers = token_header(fan["token"])

    for _ in range(5):
        responses = await asyncio.gather(
            *(client.post("/api/profiles/celeb/follow", headers=headers) for _ in range(4))
        )
        assert [r.status_code for r in responses] == [200] * 4
        assert all(r.json()["profile"]["following"] is True for r in responses)

        await client.delete("/api/profiles/celeb/follow", headers=headers)


@pytest.mark.asyncio
async def test_concurrent_favorites_all_succeed_and_count_once(
    client: httpx.AsyncClient, register
) -> None:
    author = await register("jake")
    fan = await register("fan")
    r = await client.post(
        "/api/articles",
        headers=token_header(author["token"]),
        json={"article": {"title": "Dragons", "description": "d", "body": "b"}},
    )
    slug = r.json()["article"]["slug"]
    headers = token_header(fan["token"])

    for _ in range(5):
        responses = await asyncio.gather(
            *(client.post(f"/api/articles/{slug}/favorite", headers=headers) for _ in range(4))
        )
        assert [r.status_code for r in responses] == [200] * 4
        assert all(r.json()["article"]["favoritesCount"] == 1 for r in responses)

        await client.delete(f"/api/articles/{slug}/favorite", headers=headers)

    r = await client.get(f"/api/articles/{slug}")
    assert r.json()["article"]["favoritesCount"] == 0

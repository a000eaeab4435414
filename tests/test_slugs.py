from __future__ import annotations

import pytest

from realworld_api.services.slugs import MAX_SLUG_LENGTH, slugify, unique_slug


@pytest.mark.parametrize(
    ("title", "slug"),
    [
        ("How to train your dragon", "how-to-train-your-dragon"),
        ("  Hello,   World!  ", "hello-world"),
        ("Crème brûlée 101", "creme-brulee-101"),
        ("???", "article"),
        ("", "article"),
    ],
)
def test_slugify(title: str, slug: str) -> None:
    assert slugify(title) == slug


def test_slugify_caps_length() -> None:
    slug = slugify("word " * 100)
    assert len(slug) <= MAX_SLUG_LENGTH
    assert not slug.endswith("-")


@pytest.mark.asyncio
async def test_unique_slug_returns_base_when_free() -> None:
    async def exists(_: str) -> bool:
        return False

    assert await unique_slug("Hello World", exists) == "hello-world"


@pytest.mark.asyncio
async def test_unique_slug_appends_suffix_when_taken() -> None:
    taken = {"hello-world"}

    async def exists(slug: str) -> bool:
        return slug in taken

    slug = await unique_slug("Hello World", exists)
    assert slug != "hello-world"
    assert slug.startswith("hello-world-")
    assert len(slug) == len("hello-world-") + 6


@pytest.mark.asyncio
async def test_unique_slug_gives_up_eventually() -> None:
    async def exists(_: str) -> bool:
        return True

    with pytest.raises(RuntimeError):
        await unique_slug("Hello World", exists)

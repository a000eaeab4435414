"""
realworld_api.db.repositories.articles

Repository for `Article` entities, their tags and favorites.
"""

from __future__ import annotations

import uuid

from sqlalchemy import delete, exists, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.db.models import Article, ArticleTag, Favorite, Tag, utcnow
from realworld_api.db.repositories._inserts import insert_or_ignore


class ArticleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        slug: str,
        title: str,
        description: str,
        body: str,
        author_id: uuid.UUID,
        tags: list[str],
    ) -> Article:
        article = Article(
            slug=slug,
            title=title,
            description=description,
            body=body,
            author_id=author_id,
        )
        self._session.add(article)
        await self._session.flush()
        if tags:
            await self._attach_tags(article.id, tags)
        return article

    async def get_by_slug(self, slug: str) -> Article | None:
        stmt = select(Article).where(Article.slug == slug)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def exists_by_slug(self, slug: str) -> bool:
        stmt = select(exists().where(Article.slug == slug))
        return bool((await self._session.execute(stmt)).scalar())

    async def update(
        self,
        article: Article,
        *,
        slug: str,
        title: str,
        description: str,
        body: str,
    ) -> Article:
        article.slug = slug
        article.title = title
        article.description = description
        article.body = body
        article.updated_at = utcnow()
        await self._session.flush()
        return article

    async def delete(self, article_id: uuid.UUID) -> int:
        # Tags and favorites go with the row via ON DELETE CASCADE; delete them
        # explicitly too for backends that don't enforce foreign keys.
        await self._session.execute(delete(ArticleTag).where(ArticleTag.article_id == article_id))
        await self._session.execute(delete(Favorite).where(Favorite.article_id == article_id))
        result = await self._session.execute(delete(Article).where(Article.id == article_id))
        return result.rowcount or 0

    async def tags_for(self, article_id: uuid.UUID) -> list[str]:
        stmt = (
            select(ArticleTag.tag)
            .where(ArticleTag.article_id == article_id)
            .order_by(ArticleTag.position)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def list_tags(self) -> list[str]:
        stmt = select(Tag.name).order_by(Tag.name)
        return list((await self._session.execute(stmt)).scalars().all())

    async def _attach_tags(self, article_id: uuid.UUID, tags: list[str]) -> None:
        known_stmt = select(Tag.name).where(Tag.name.in_(tags))
        known = set((await self._session.execute(known_stmt)).scalars().all())
        for name in tags:
            if name not in known:
                self._session.add(Tag(name=name))
                known.add(name)
        await self._session.flush()
        for position, name in enumerate(tags):
            self._session.add(ArticleTag(article_id=article_id, tag=name, position=position))
        await self._session.flush()

    async def is_favorited(self, *, article_id: uuid.UUID, user_id: uuid.UUID) -> bool:
        stmt = select(
            exists().where(Favorite.article_id == article_id, Favorite.user_id == user_id)
        )
        return bool((await self._session.execute(stmt)).scalar())

    async def favorites_count(self, article_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Favorite).where(Favorite.article_id == article_id)
        return int((await self._session.execute(stmt)).scalar_one())

    async def add_favorite(self, *, article_id: uuid.UUID, user_id: uuid.UUID) -> None:
        await insert_or_ignore(self._session, Favorite, article_id=article_id, user_id=user_id)

    async def remove_favorite(self, *, article_id: uuid.UUID, user_id: uuid.UUID) -> None:
        stmt = delete(Favorite).where(Favorite.article_id == article_id, Favorite.user_id == user_id)
        await self._session.execute(stmt)


# --- Module Notes -----------------------------------------------------------
# Callers pass tag lists already de-duplicated (see `services.articles`).

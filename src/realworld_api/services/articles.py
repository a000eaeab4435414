"""
realworld_api.services.articles

Article use cases.

Responsibilities:
- Create articles with a unique slug and their tag list.
- Read/update/delete by slug with author ownership checks.
- Favorite/unfavorite, and the global tag list.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from realworld_api.db.models import Article, User
from realworld_api.db.repositories.articles import ArticleRepo
from realworld_api.db.repositories.users import UserRepo
from realworld_api.observability.logging import get_logger
from realworld_api.services.errors import Forbidden, NotFound
from realworld_api.services.profiles import ProfileService
from realworld_api.services.slugs import slugify, unique_slug
from realworld_api.services.views import ArticleView

log = get_logger(__name__)


def _dedupe(tags: list[str]) -> list[str]:
    seen: dict[str, None] = {}
    for tag in tags:
        tag = tag.strip()
        if tag:
            seen.setdefault(tag, None)
    return list(seen)


class ArticleService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._articles = ArticleRepo(session)
        self._users = UserRepo(session)
        self._profiles = ProfileService(session=session)

    async def create(
        self,
        *,
        author: User,
        title: str,
        description: str,
        body: str,
        tags: list[str],
    ) -> ArticleView:
        slug = await unique_slug(title, self._articles.exists_by_slug)
        article = await self._articles.create(
            slug=slug,
            title=title,
            description=description,
            body=body,
            author_id=author.id,
            tags=_dedupe(tags),
        )
        await self._session.commit()
        log.info("article.created", slug=article.slug, author_id=str(author.id))
        return await self._view(article, viewer=author)

    async def get(self, slug: str, *, viewer: User | None) -> ArticleView:
        return await self._view(await self._require(slug), viewer=viewer)

    async def update(
        self,
        slug: str,
        *,
        user: User,
        title: str | None = None,
        description: str | None = None,
        body: str | None = None,
    ) -> ArticleView:
        article = await self._require_owned(slug, user)

        new_slug = article.slug
        if title is not None and title != article.title and slugify(title) != article.slug:
            new_slug = await unique_slug(title, self._articles.exists_by_slug)

        await self._articles.update(
            article,
            slug=new_slug,
            title=title if title is not None else article.title,
            description=description if description is not None else article.description,
            body=body if body is not None else article.body,
        )
        await self._session.commit()
        log.info("article.updated", slug=article.slug, previous_slug=slug)
        return await self._view(article, viewer=user)

    async def delete(self, slug: str, *, user: User) -> None:
        article = await self._require_owned(slug, user)
        await self._articles.delete(article.id)
        await self._session.commit()
        log.info("article.deleted", slug=slug, author_id=str(user.id))

    async def favorite(self, slug: str, *, user: User) -> ArticleView:
        article = await self._require(slug)
        await self._articles.add_favorite(article_id=article.id, user_id=user.id)
        await self._session.commit()
        return await self._view(article, viewer=user)

    async def unfavorite(self, slug: str, *, user: User) -> ArticleView:
        article = await self._require(slug)
        await self._articles.remove_favorite(article_id=article.id, user_id=user.id)
        await self._session.commit()
        return await self._view(article, viewer=user)

    async def list_tags(self) -> list[str]:
        return await self._articles.list_tags()

    async def _require(self, slug: str) -> Article:
        article = await self._articles.get_by_slug(slug)
        if article is None:
            raise NotFound(f"article {slug!r} not found")
        return article

    async def _require_owned(self, slug: str, user: User) -> Article:
        article = await self._require(slug)
        if article.author_id != user.id:
            raise Forbidden("only the author can modify this article")
        return article

    async def _view(self, article: Article, *, viewer: User | None) -> ArticleView:
        author = await self._users.get(article.author_id)
        if author is None:
            raise RuntimeError(f"article {article.slug!r} references missing author")
        favorited = False
        if viewer is not None:
            favorited = await self._articles.is_favorited(article_id=article.id, user_id=viewer.id)
        return ArticleView(
            slug=article.slug,
            title=article.title,
            description=article.description,
            body=article.body,
            tag_list=await self._articles.tags_for(article.id),
            created_at=article.created_at,
            updated_at=article.updated_at,
            favorited=favorited,
            favorites_count=await self._articles.favorites_count(article.id),
            author=await self._profiles.view(author, viewer=viewer),
        )

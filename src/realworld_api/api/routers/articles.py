"""
realworld_api.api.routers.articles

Article CRUD, favorites and the tag list.

Responsibilities:
- Delegate every operation to `ArticleService`.
- Reads accept anonymous callers; writes require `current_user`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from realworld_api.api.deps import db_session
from realworld_api.api.schemas import (
    ArticleCreateRequest,
    ArticleResponse,
    ArticleUpdateRequest,
    TagsResponse,
)
from realworld_api.auth.deps import current_user, optional_user
from realworld_api.auth.models import Authenticated
from realworld_api.services.articles import ArticleService

router = APIRouter(prefix="/api", tags=["articles"])


@router.post("/articles", response_model=ArticleResponse, status_code=HTTP_201_CREATED)
async def create_article(
    body: ArticleCreateRequest,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    data = body.article
    view = await ArticleService(session=session).create(
        author=caller.user,
        title=data.title,
        description=data.description,
        body=data.body,
        tags=data.tag_list,
    )
    return ArticleResponse.build(view)


@router.get("/articles/{slug}", response_model=ArticleResponse)
async def get_article(
    slug: str,
    caller: Authenticated | None = Depends(optional_user),
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    viewer = caller.user if caller is not None else None
    view = await ArticleService(session=session).get(slug, viewer=viewer)
    return ArticleResponse.build(view)


@router.put("/articles/{slug}", response_model=ArticleResponse)
async def update_article(
    slug: str,
    body: ArticleUpdateRequest,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    patch = body.article
    view = await ArticleService(session=session).update(
        slug,
        user=caller.user,
        title=patch.title,
        description=patch.description,
        body=patch.body,
    )
    return ArticleResponse.build(view)


@router.delete("/articles/{slug}", status_code=HTTP_204_NO_CONTENT)
async def delete_article(
    slug: str,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> Response:
    await ArticleService(session=session).delete(slug, user=caller.user)
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.post("/articles/{slug}/favorite", response_model=ArticleResponse)
async def favorite_article(
    slug: str,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    view = await ArticleService(session=session).favorite(slug, user=caller.user)
    return ArticleResponse.build(view)


@router.delete("/articles/{slug}/favorite", response_model=ArticleResponse)
async def unfavorite_article(
    slug: str,
    caller: Authenticated = Depends(current_user),
    session: AsyncSession = Depends(db_session),
) -> ArticleResponse:
    view = await ArticleService(session=session).unfavorite(slug, user=caller.user)
    return ArticleResponse.build(view)


@router.get("/tags", response_model=TagsResponse)
async def list_tags(session: AsyncSession = Depends(db_session)) -> TagsResponse:
    return TagsResponse(tags=await ArticleService(session=session).list_tags())

"""
realworld_api.api.schemas

Wire models for the RealWorld JSON API.

Responsibilities:
- Request envelopes (`{"user": {...}}`, `{"article": {...}}`) with validation.
- Response envelopes rendered with camelCase keys (`tagList`, `favoritesCount`, ...).
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from realworld_api.db.models import User
from realworld_api.services.views import ArticleView, ProfileView

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -- users -------------------------------------------------------------------


class Registration(_Wire):
    username: str = Field(min_length=1, max_length=64)
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=1024)


class RegistrationRequest(_Wire):
    user: Registration


class Login(_Wire):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=1024)


class LoginRequest(_Wire):
    user: Login


class UserUpdate(_Wire):
    email: str | None = Field(default=None, min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    username: str | None = Field(default=None, min_length=1, max_length=64)
    password: str | None = Field(default=None, min_length=1, max_length=1024)
    bio: str | None = None
    image: str | None = Field(default=None, max_length=1024)


class UserUpdateRequest(_Wire):
    user: UserUpdate


class UserOut(_Wire):
    email: str
    token: str
    username: str
    bio: str | None = None
    image: str | None = None


class UserResponse(_Wire):
    user: UserOut

    @classmethod
    def build(cls, user: User, token: str) -> UserResponse:
        return cls(
            user=UserOut(
                email=user.email,
                token=token,
                username=user.username,
                bio=user.bio,
                image=user.image,
            )
        )


# -- profiles ----------------------------------------------------------------


class ProfileOut(_Wire):
    username: str
    bio: str | None = None
    image: str | None = None
    following: bool | None = None

    @classmethod
    def from_view(cls, view: ProfileView) -> ProfileOut:
        return cls(username=view.username, bio=view.bio, image=view.image, following=view.following)


class ProfileResponse(_Wire):
    profile: ProfileOut

    @classmethod
    def build(cls, view: ProfileView) -> ProfileResponse:
        return cls(profile=ProfileOut.from_view(view))


# -- articles ----------------------------------------------------------------


class ArticleCreate(_Wire):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    body: str = Field(min_length=1)
    tag_list: list[str] = Field(default_factory=list)


class ArticleCreateRequest(_Wire):
    article: ArticleCreate


class ArticleUpdate(_Wire):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    body: str | None = Field(default=None, min_length=1)


class ArticleUpdateRequest(_Wire):
    article: ArticleUpdate


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


class ArticleOut(_Wire):
    slug: str
    title: str
    description: str
    body: str
    tag_list: list[str]
    created_at: datetime
    updated_at: datetime
    favorited: bool
    favorites_count: int
    author: ProfileOut


class ArticleResponse(_Wire):
    article: ArticleOut

    @classmethod
    def build(cls, view: ArticleView) -> ArticleResponse:
        return cls(
            article=ArticleOut(
                slug=view.slug,
                title=view.title,
                description=view.description,
                body=view.body,
                tag_list=view.tag_list,
                created_at=_as_utc(view.created_at),
                updated_at=_as_utc(view.updated_at),
                favorited=view.favorited,
                favorites_count=view.favorites_count,
                author=ProfileOut.from_view(view.author),
            )
        )


class TagsResponse(_Wire):
    tags: list[str]


# --- Module Notes -----------------------------------------------------------
# FastAPI renders response models by alias, so attribute names stay snake_case here.

"""
realworld_api.api.app

FastAPI app factory.

Responsibilities:
- Build the FastAPI application and register routers, middleware and error handlers.
- Build the app-scoped `Auth` from settings (the signing secret is fixed for the app's life).
- Create and dispose the DB engine/session factory in the lifespan.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from realworld_api import __version__
from realworld_api.api.errors import register_error_handlers
from realworld_api.api.routers.articles import router as articles_router
from realworld_api.api.routers.health import router as health_router
from realworld_api.api.routers.profiles import router as profiles_router
from realworld_api.api.routers.users import router as users_router
from realworld_api.auth.service import Auth
from realworld_api.db.init_db import init_db
from realworld_api.db.session import create_engine, create_sessionmaker
from realworld_api.observability.logging import configure_logging, get_logger
from realworld_api.observability.middleware import RequestContextMiddleware
from realworld_api.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, json=settings.log_json
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod schema comes from Alembic migrations.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="RealWorld API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth = Auth.from_settings(settings)

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(profiles_router)
    app.include_router(articles_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Composition root only: request handling lives in routers, rules in services.

"""
realworld_api.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for all layers (prefix `REALWORLD_`).
- Hide the token signing secret from repr/logging.
- Refuse to boot in prod with the development secret or a short secret.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "dev-secret-change-me"
MIN_PROD_SECRET_LENGTH = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="REALWORLD_", case_sensitive=False)

    # `dev`/`test` create tables on startup; `prod` expects Alembic migrations.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "realworld-api"
    log_level: str = "INFO"
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "realworld-api"
    jwt_audience: str = "realworld-clients"
    jwt_secret: str = Field(default=DEV_JWT_SECRET, repr=False)
    jwt_ttl_seconds: int = Field(default=24 * 60 * 60, ge=1)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./realworld.db"

    @model_validator(mode="after")
    def _check_secret(self) -> Settings:
        if self.env != "prod":
            return self
        if self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("REALWORLD_JWT_SECRET must be set in prod")
        if len(self.jwt_secret) < MIN_PROD_SECRET_LENGTH:
            raise ValueError(
                f"REALWORLD_JWT_SECRET must be at least {MIN_PROD_SECRET_LENGTH} characters"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for every caller.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Rotating `jwt_secret` invalidates every token issued under the previous value.

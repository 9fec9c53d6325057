"""
Configuration helpers for the storefront backend.

Exposes a frozen Settings object read from environment variables so that
routers/services do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

DEV_JWT_SECRET = "storefront-dev-secret-change-me-before-deploying"


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    jwt_secret: str
    jwt_algorithm: str
    token_ttl_seconds: int
    log_level: str
    cors_origins: tuple[str, ...]
    auth_rate_limit: int
    auth_rate_window_seconds: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    app_env = (os.getenv("APP_ENV") or "dev").lower()
    secret = os.getenv("JWT_SECRET", "")
    if not secret and app_env != "prod":
        secret = DEV_JWT_SECRET

    return Settings(
        app_env=app_env,
        database_url=os.getenv("DATABASE_URL", "sqlite:///./storefront.db"),
        jwt_secret=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        token_ttl_seconds=_int(os.getenv("TOKEN_TTL_SECONDS"), 86400),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
        auth_rate_limit=_int(os.getenv("AUTH_RATE_LIMIT"), 10),
        auth_rate_window_seconds=_int(os.getenv("AUTH_RATE_WINDOW_SECONDS"), 60),
    )

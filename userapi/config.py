"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - DATABASE_URL is required; missing or empty aborts startup
    - get_settings() is cached (lru_cache) — single instance per process
    - .env file values are read when present; real environment wins

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box locally
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # App
    app_env: str = "development"
    app_host: str = "0.0.0.0"
    app_port: int = 8080

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Plain postgres URLs are routed to the asyncpg driver."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("DATABASE_URL is required")
        v = v.strip()
        for prefix in ("postgresql://", "postgres://"):
            if v.startswith(prefix):
                return v.replace(prefix, "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

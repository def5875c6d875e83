"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - DB_URI, DB_NAME and JWT_SECRET have no defaults: absence fails startup
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskshare.core.domain_types import ProgressStrategyName


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    db_uri: str
    db_name: str

    @field_validator("db_uri", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres provides postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth
    jwt_secret: str
    token_ttl_days: int = 30
    strict_tokens: bool = False

    # Task lists
    progress_strategy: ProgressStrategyName = ProgressStrategyName.CONSTANT

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def database_url(self) -> str:
        """DB_URI joined with DB_NAME, e.g. postgresql+asyncpg://host:5432/tasks."""
        separator = "" if self.db_uri.endswith("/") else "/"
        return f"{self.db_uri}{separator}{self.db_name}"

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(days=self.token_ttl_days)


@lru_cache
def get_settings() -> Settings:
    return Settings()

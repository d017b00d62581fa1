"""
Application configuration.

Values come from environment variables prefixed with ``BUDGETBOOK_`` or from a
``.env`` file in the working directory.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BUDGETBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./budgetbook.db",
        description="SQLAlchemy async database URL",
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    secret_key: str = Field(
        default="dev-secret",
        min_length=8,
        description="Key used to sign bearer tokens",
    )
    token_max_age_seconds: int = Field(
        default=3600,
        ge=60,
        description="Lifetime of an issued bearer token",
    )

    log_level: str = Field(default="INFO", description="Root log level")
    log_json: bool = Field(default=False, description="Render log lines as JSON")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Configuration management for the Todos service
"""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TODOS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./todos.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    sql_echo: bool = False
    auto_create_schema: bool = True
    seed_on_startup: bool = True

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8081
    api_reload: bool = False
    cors_origins: list[str] = ["*"]
    graphiql: bool = True

    # Environment
    debug: bool = False
    log_level: str = "INFO"


# Global settings instance
settings = Settings()


def get_database_url() -> str:
    """Get database URL, checking the environment first for test compatibility."""
    return os.getenv("TODOS_DATABASE_URL") or settings.database_url


def to_async_url(database_url: str) -> str:
    """Map a sync SQLAlchemy URL onto its async driver."""
    if database_url.startswith("sqlite://"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return database_url

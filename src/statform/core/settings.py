"""Application settings and configuration.

This module defines all configuration options for the Statform application.
Settings are loaded from environment variables with sensible defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files. An
    instance is built once by the application factory and handed to the
    submission handler and page renderer; nothing mutates it afterwards.
    """

    # Application metadata
    app_name: str = Field(default="Statform", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./statform.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Statistics
    sales_tax_rate: float = Field(default=0.05, ge=0.0, le=1.0, alias="SALES_TAX_RATE")

    # Form layout; when unset the page picks randint(2, 4) * 3 inputs per request
    field_count: int | None = Field(default=None, ge=1, le=99, alias="FIELD_COUNT")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Alembic runs synchronously, so async driver suffixes are swapped for
        their blocking counterparts.

        Returns:
            Database URL compatible with synchronous database drivers
        """
        url = self.database_url
        if url.startswith("mysql+aiomysql"):
            return url.replace("mysql+aiomysql", "mysql+mysqlconnector", 1)
        if url.startswith("sqlite+aiosqlite"):
            return url.replace("sqlite+aiosqlite", "sqlite", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        """Return True when the configured database is SQLite."""
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Return the process settings, read from the environment once."""
    return Settings()

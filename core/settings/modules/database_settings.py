from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from core.settings.base_settings import StorefrontBaseSettings


class DatabaseSettings(StorefrontBaseSettings):
    """
    Database configuration settings.
    
    Loaded from environment variables (``DB_`` prefix) or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DB_",
        extra="ignore",
    )

    # Database URL
    database_url: str = "sqlite+aiosqlite:///./storefront.db"

    # Connection pool settings
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Bounded waits on row locks and statements
    lock_timeout_ms: int = 5000
    statement_timeout_ms: int = 30000

    # Echo SQL (for debugging)
    echo_sql: bool = False

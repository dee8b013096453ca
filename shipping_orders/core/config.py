"""
Centralized application configuration.

Environment variables and `.env` values are loaded through Pydantic Settings
so every setting is validated once at startup.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings backed by Pydantic Settings.

    Every value can be overridden through environment variables; the defaults
    are suitable for local development against a SQLite file.
    """

    # === BASIC APP CONFIGURATION ===
    APP_NAME: str = "Shipping Orders"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === DATABASE ===
    DATABASE_URL: str = Field(default="sqlite:///shipping_orders.db")
    DB_ECHO: bool = Field(default=False)

    # === LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # === BULK LOAD ===
    BULK_LOAD_ENCODING: str = Field(default="utf-8")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Uppercase LOG_LEVEL and reject names the logging module does not know."""
        if isinstance(v, str):
            v = v.strip().upper()
            if not isinstance(logging.getLevelName(v), int):
                raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return v

    @field_validator("LOG_MAX_SIZE_MB", "LOG_BACKUP_COUNT")
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Log rotation values must be zero or positive")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_memory_database(self) -> bool:
        """True when DATABASE_URL points to an in-memory SQLite database."""
        url = self.DATABASE_URL
        return url.startswith("sqlite") and (url.endswith(":memory:") or url in ("sqlite://", "sqlite:///"))


@lru_cache()
def get_settings() -> Settings:
    """
    Return the cached application settings.

    Returns:
        Settings: Singleton settings instance
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings from the environment (useful in tests).

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """Summarize the active configuration for startup logs."""
    settings = get_settings()
    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "database": settings.DATABASE_URL.split("://", 1)[0],
        "log_level": settings.LOG_LEVEL,
    }

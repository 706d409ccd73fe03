"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifyhub.db",
        description="Database connection URL used by SQLAlchemy",
        min_length=1,
    )
    notifications_storage_key: str = Field(
        default="notifications.v2",
        description="Key of the durable slot holding the notification list",
        min_length=1,
    )
    notifications_capacity: int = Field(
        default=100,
        description="Maximum number of notifications retained by the store",
        gt=0,
    )
    toast_duration: float = Field(
        default=3,
        description="Seconds before a regular toast is dismissed",
        ge=0,
    )
    database_change_toast_duration: float = Field(
        default=4,
        description="Seconds before a database change toast is dismissed",
        ge=0,
    )
    toast_placement: str = Field(
        default="topRight",
        description="Corner of the screen where toasts are displayed",
    )
    monitored_tables: list[str] = Field(
        default_factory=list,
        description="Tables watched by the change monitor; empty means every catalog table",
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone name or UTC offset used for timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported LOG_LEVEL '{value}'")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./chatpush.db",
        description="SQLAlchemy URL of the local key-value store",
        min_length=1,
    )
    storage_backend: Literal["memory", "database"] = Field(
        default="database",
        description="Where the notification log and cached token are persisted",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    app_timezone: str = Field(
        default="UTC", description="Timezone used for human readable timestamps"
    )
    backend_url: str | None = Field(
        default=None,
        description="Base URL of the demo backend used to register device tokens",
    )
    backend_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout applied to demo backend requests",
        gt=0,
    )
    firebase_credentials_path: str | None = Field(
        default=None,
        description="Service account JSON enabling real delivery through Firebase",
    )
    history_default_limit: int = Field(
        default=50,
        description="Default number of entries returned by the history endpoint",
        gt=0,
    )
    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the demo backend",
    )

    @model_validator(mode="after")
    def _validate_backend_url(self) -> "Settings":
        if self.backend_url and not self.backend_url.startswith(("http://", "https://")):
            raise ValueError("BACKEND_URL must start with http:// or https://")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

"""Configuration helpers for the golfmaster service."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    data_dir: str = Field(default="data/session", alias="GOLFMASTER_DATA_DIR")
    storage_key: str = Field(
        default="golf_master_pro_v1", alias="GOLFMASTER_STORAGE_KEY"
    )
    cors_allow_origins: str = Field(
        default="http://localhost,http://127.0.0.1", alias="CORS_ALLOW_ORIGINS"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached application settings."""

    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


__all__ = ["get_settings", "reset_settings_cache", "env_bool"]

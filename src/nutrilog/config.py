"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "file"
    data_dir: Path = Path(".nutrilog")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "app_state"
    timezone: str = "UTC"
    log_level: str = "INFO"
    display_cap_percent: float = 150.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="NUTRILOG_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

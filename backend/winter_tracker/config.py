from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")
    """Application runtime configuration."""

    app_name: str = "Winter Tracker"
    environment: str = os.getenv("WT_ENVIRONMENT", "development")
    host: str = os.getenv("WT_HOST", "127.0.0.1")
    port: int = int(os.getenv("WT_PORT", "8080"))
    log_level: str = os.getenv("WT_LOG_LEVEL", "INFO")
    cors_origins: List[str] = Field(
        default_factory=lambda: [
            origin.strip()
            for origin in os.getenv("WT_CORS_ORIGINS", "http://127.0.0.1:3000,http://localhost:3000").split(",")
            if origin.strip()
        ]
    )

    sqlite_path: Path = Path(os.getenv("WT_SQLITE_PATH", "./data/tracker.db"))
    tracker_config_path: Optional[Path] = (
        Path(os.getenv("WT_TRACKER_CONFIG")) if os.getenv("WT_TRACKER_CONFIG") else None
    )

    # Shared editing secret; unset means the tracker is read-only for everyone.
    edit_password: Optional[str] = os.getenv("EDIT_PASSWORD")
    session_days: int = int(os.getenv("WT_SESSION_DAYS", "7"))
    session_cookie_name: str = "edit_token"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: str | List[str]) -> List[str]:
        if isinstance(value, list):
            return value
        if not value:
            return []
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @computed_field
    def secure_cookies(self) -> bool:
        return self.environment.lower() == "production"


settings = Settings()

settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)

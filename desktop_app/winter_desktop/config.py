"""Configuration helpers for the desktop companion."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://127.0.0.1:8080"
DEFAULT_POLL_INTERVAL = 60


@dataclass(slots=True)
class AppConfig:
    """Values the desktop app reads at start-up."""

    api_base_url: str = DEFAULT_API_BASE_URL
    edit_password: Optional[str] = None
    polling_interval_seconds: int = DEFAULT_POLL_INTERVAL


def load_config() -> AppConfig:
    """Read configuration from an optional `.env` file and the environment."""

    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return AppConfig(
        api_base_url=os.getenv("WINTER_API_BASE_URL", DEFAULT_API_BASE_URL),
        edit_password=os.getenv("WINTER_EDIT_PASSWORD") or None,
        polling_interval_seconds=int(os.getenv("WINTER_POLL_INTERVAL", DEFAULT_POLL_INTERVAL)),
    )


__all__ = ["AppConfig", "load_config"]

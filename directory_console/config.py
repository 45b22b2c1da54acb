"""
Application Configuration.

Pydantic Settings model for the User Directory Console.
All configuration is loaded from environment variables and .env files.
Inject an AppConfig instance via dependency injection where needed.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """Central configuration loaded from environment variables and defaults."""

    # --- Remote user store ---
    API_BASE_URL: str = "http://localhost:8080/api"

    # --- Form behaviour ---
    FORM_SETTLE_DELAY_S: float = Field(default=1.0, ge=0)

    # When True, non-empty filters run against the last fetched snapshot
    # instead of the currently displayed (possibly already filtered) list.
    FILTER_FROM_SNAPSHOT: bool = False

    # --- Audit ---
    CONSOLE_OPERATOR: str = "console"

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "directory_console.log"
    LOG_MAX_BYTES: int = 5_242_880  # 5 MB
    LOG_BACKUP_COUNT: int = 3

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _warn_missing_env(self) -> "AppConfig":
        """Emit a startup warning when running entirely on defaults."""
        _log = logging.getLogger("directory_console.config")

        if not Path(".env").exists():
            _log.warning(
                "No .env file found; all configuration loaded from "
                "environment variables or defaults."
            )

        if not self.API_BASE_URL:
            _log.warning("API_BASE_URL is empty; remote calls will fail.")

        return self

    @property
    def log_level(self) -> int:
        """Numeric logging level for ``LOG_LEVEL`` (falls back to INFO)."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


# ---------------------------------------------------------------------------
# Module-level singleton factory
# ---------------------------------------------------------------------------

_config_instance: Optional[AppConfig] = None
_config_lock: threading.Lock = threading.Lock()


def get_config() -> AppConfig:
    """Return a cached ``AppConfig`` singleton.

    Prefer direct constructor injection of ``AppConfig`` in new code;
    this factory exists for the entry point and the logger defaults.
    """
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = AppConfig()
    return _config_instance

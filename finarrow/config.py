"""Application configuration loaded from environment variables."""

import os
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# Check if .env file exists and is readable
_env_file = None
try:
    env_path = Path(".env")
    if env_path.exists() and os.access(env_path, os.R_OK):
        _env_file = ".env"
except (OSError, PermissionError):
    pass


class Settings(BaseSettings):
    """All configuration for the FinArrow dashboard.

    Values are loaded from environment variables (prefixed ``FINARROW_``)
    or a .env file.
    """

    # Application
    app_name: str = "finarrow"
    debug: bool = False
    json_logs: bool = False
    log_level: str = "INFO"

    # Upload limits
    max_rows: int = 1000
    max_upload_bytes: int = 10 * 1024 * 1024  # 10MB
    allowed_extensions: list[str] = [".xlsx", ".xls", ".csv"]

    # Cell validation
    numeric_bound: float = 1e12
    date_max_length: int = 50

    # KPI model
    runway_sentinel_months: float = 999.0
    days_per_month: int = 30
    ltv_lifetime_years: int = 3

    # Session hand-off
    session_cookie_name: str = "finarrow_session"
    session_data_key: str = "financialData"
    max_sessions: int = 1000

    # Anthropic Claude API (insight generation)
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    insights_max_tokens: int = 1024
    insights_temperature: float = 0.7

    # CORS
    allowed_origins: list[str] = ["http://localhost:8501"]

    model_config = {
        "env_prefix": "FINARROW_",
        "env_file": _env_file,
        "env_file_encoding": "utf-8",
        "env_file_ignore_empty": True,
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()

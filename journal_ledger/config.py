"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Journal Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = _env_flag("DEBUG", "false")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./journal.db")
    AUTO_CREATE_TABLES: bool = _env_flag("AUTO_CREATE_TABLES", "true")

    # Journal
    # The whole journal lives as one JSON array under this key.
    JOURNAL_STORAGE_KEY: str = os.getenv(
        "JOURNAL_STORAGE_KEY", "fintutto_journal"
    )
    JOURNAL_SEED_DEMO: bool = _env_flag("JOURNAL_SEED_DEMO", "true")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()

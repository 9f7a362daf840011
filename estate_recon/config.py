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


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Estate Back Office Reconciliation"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./estate_recon.db"
    )

    # Console client
    API_BASE_URL: str = os.getenv("API_BASE_URL", "http://localhost:8080/api")
    API_TIMEOUT_SECONDS: float = float(os.getenv("API_TIMEOUT_SECONDS", "30"))
    SESSION_FILE: str = os.getenv(
        "SESSION_FILE",
        os.path.join(os.path.expanduser("~"), ".estate_recon", "session.json"),
    )

    # Auto reconcile: how far apart (in days) a bank line and an
    # internal transaction may be and still be paired automatically.
    AUTO_MATCH_DATE_TOLERANCE_DAYS: int = int(
        os.getenv("AUTO_MATCH_DATE_TOLERANCE_DAYS", "3")
    )

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str | None = os.getenv("LOG_FILE") or None

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused, so
    environment variables are only read at first use.
    """
    return Settings()

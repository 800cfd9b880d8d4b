# backend/raven/core/config.py
import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_CART_STORAGE_KEY, DEFAULT_DEV_ORIGINS


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


_BACKEND_ROOT = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = _BACKEND_ROOT / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path} (exists={env_path.exists()})")
    load_dotenv(env_path)


PROD_ENVIRONMENTS = {"prod", "production", "live"}


class Settings(BaseSettings):
    """Runtime settings, read from the environment and backend/.env."""

    environment: str = Field(default="development", description="Deployment environment")
    database_url: str = Field(
        default="sqlite:///./raven.db", description="SQLAlchemy database URL"
    )
    log_level: str = Field(default="INFO")

    cors_allowed_origins: str = Field(
        default=",".join(DEFAULT_DEV_ORIGINS),
        description="Comma-separated list of allowed CORS origins",
    )

    cart_storage_key: str = Field(
        default=DEFAULT_CART_STORAGE_KEY,
        description="Key used for the shared cart when clients do not supply their own",
    )

    default_search_limit: int = Field(default=20, ge=1)
    max_search_limit: int = Field(default=100, ge=1)
    max_calendar_window_days: int = Field(
        default=366, ge=1, description="Longest date window a calendar grid may span"
    )

    slow_operation_threshold_seconds: float = Field(default=1.0, gt=0)
    prometheus_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=_BACKEND_ROOT / ".env",
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return (value or "development").strip().lower()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return (value or "INFO").strip().upper()

    @property
    def is_production(self) -> bool:
        return self.environment in PROD_ENVIRONMENTS

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def resolved_database_url(self) -> str:
        """Resolve relative sqlite paths against the backend directory."""
        url = self.database_url
        if url.startswith("sqlite:///./"):
            relative_path = url.replace("sqlite:///./", "")
            return f"sqlite:///{_BACKEND_ROOT / relative_path}"
        return url


settings = Settings()

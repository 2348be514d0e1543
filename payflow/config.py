"""
Application configuration.

Values come from environment variables (or a local .env file) through
pydantic-settings; get_settings() caches a single instance per process.
"""
import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings. Payment business rules live in PaymentSettings instead."""

    APP_NAME: str = "Payflow Payment Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./payflow.db"

    # Simulated gateways
    GATEWAY_LATENCY_MAX_SECONDS: float = 0.2
    GATEWAY_ERROR_RATE: float = 0.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = None):
    """Configure root logging once, at application startup."""
    level = level or get_settings().LOG_LEVEL
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

"""Application configuration.

Loads settings from environment variables with sensible defaults.
Variables are prefixed with ``FULFILLMENT_`` (e.g. ``FULFILLMENT_DATABASE_URL``).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = Field(
        default="postgresql+psycopg://fulfillment:fulfillment_dev_password@db:5432/fulfillment",
        description="SQLAlchemy URL of the order store",
    )
    database_echo: bool = Field(
        default=False,
        description="Echo emitted SQL statements",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")

    model_config = {
        "env_prefix": "FULFILLMENT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

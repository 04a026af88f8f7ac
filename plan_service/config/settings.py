import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using an absolute path for SQLite.

    ⚠️ SQLite is for local development only. Set DATABASE_URL to a
    PostgreSQL connection string for any shared deployment.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        return db_url

    db_path = Path(__file__).parent.parent.parent / "plans.db"
    db_url = f"sqlite:///{db_path.resolve()}"
    logger.warning(
        f"⚠️ Using SQLite database (LOCAL DEV ONLY): {db_url}\n"
        "⚠️ Set DATABASE_URL environment variable to use PostgreSQL."
    )
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    catalog_query_workers: int = Field(
        default=4,
        validation_alias="CATALOG_QUERY_WORKERS",
        description="Max parallel catalog lookups while generating a plan",
    )
    seed_catalog_on_startup: bool = Field(
        default=False,
        validation_alias="SEED_CATALOG_ON_STARTUP",
        description="Load the bundled exercise catalog when the API starts",
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("catalog_query_workers")
    @classmethod
    def validate_catalog_query_workers(cls, value: int) -> int:
        if value < 1:
            logger.warning(f"CATALOG_QUERY_WORKERS must be >= 1, got {value}. Using 1.")
            return 1
        return value


settings = Settings()

"""Configuration management for polysql."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .types import Dialect, Environment


class Settings(BaseModel):
    """Runtime settings."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development/production/testing)",
    )

    # Database
    dialect: str = Field(
        default="sqlite",
        description="SQL dialect name (sqlite, mysql, postgres)",
    )
    database_url: str = Field(
        default="sqlite:///db/polysql.db",
        description="SQLAlchemy database URL used by open_connection",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Path | None = Field(
        default=None, description="Optional rotating log file path"
    )
    log_colors: bool = Field(default=True, description="Colorize console logs")

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        # Tests never touch a file database
        if self.environment == Environment.TESTING:
            self.database_url = "sqlite://"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @property
    def dialect_enum(self) -> Dialect:
        """Resolve the configured dialect name (unknown names fall back to SQLite)."""
        from .database.dialect import dialect_from_name

        return dialect_from_name(self.dialect)

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def load_settings() -> Settings:
    """Load settings from environment variables."""

    # Load .env file if it exists
    load_dotenv()

    log_file = os.getenv("POLYSQL_LOG_FILE")
    log_colors = os.getenv("POLYSQL_LOG_COLORS", "true").lower() in [
        "true",
        "1",
        "yes",
        "on",
    ]

    return Settings(
        environment=Environment(os.getenv("POLYSQL_ENV", "development")),
        dialect=os.getenv("POLYSQL_DIALECT", "sqlite"),
        database_url=os.getenv("POLYSQL_DATABASE_URL", "sqlite:///db/polysql.db"),
        log_level=os.getenv("POLYSQL_LOG_LEVEL", "INFO"),
        log_file=Path(log_file) if log_file else None,
        log_colors=log_colors,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()

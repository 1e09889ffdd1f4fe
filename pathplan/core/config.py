"""
PathPlan configuration

Pydantic BaseSettings based; values come from the environment or a `.env` file.

Usage:
    from pathplan.core.config import db_config, logging_config

    url = db_config.database_url
    level = logging_config.pathplan_log_level
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class DatabaseConfig(BaseSettings):
    """Local goal store database settings"""

    pathplan_database_url: str = Field(
        default="sqlite:///pathplan.db",
        description="SQLAlchemy database URL"
    )
    pathplan_database_echo: bool = Field(default=False, description="Log emitted SQL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def database_url(self) -> str:
        return self.pathplan_database_url

    @property
    def is_sqlite(self) -> bool:
        return self.pathplan_database_url.startswith("sqlite")


class LoggingConfig(BaseSettings):
    """Logging settings"""

    pathplan_log_level: str = Field(default="INFO", description="Package log level")
    pathplan_log_format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="logging.Formatter format string"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("pathplan_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Upper-case the level name and reject unknown ones"""
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v!r}")
        return level


class Settings:
    """
    Aggregate settings

    Groups every settings category behind one object.
    """

    def __init__(self):
        self.database = DatabaseConfig()
        self.logging = LoggingConfig()

    def describe(self) -> dict:
        """Settings summary for diagnostics"""
        return {
            "database_url": self.database.database_url,
            "database_echo": self.database.pathplan_database_echo,
            "log_level": self.logging.pathplan_log_level,
        }


settings = Settings()
db_config = settings.database
logging_config = settings.logging

__all__ = [
    "DatabaseConfig",
    "LoggingConfig",
    "Settings",
    "settings",
    "db_config",
    "logging_config",
]

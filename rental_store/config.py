"""
Settings for the rental store.

Values come from the environment (and a .env file) by default. Point the
CONFIG environment variable at a YAML file to load them from there instead:

    CONFIG=resources/config/local.yaml
"""

import os
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

LOG_FORMATS = ("json", "text")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Store, session and logging settings."""

    # Application
    app_env: str = Field(default="development", alias="APP_ENV")
    app_debug: bool = Field(default=False, alias="APP_DEBUG")

    # Record store
    database_url: str = Field(
        default="sqlite+aiosqlite:///data/rental_store.db", alias="DATABASE_URL"
    )
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    # Session cache entry holding the logged-in account
    session_cache_key: str = Field(default="currentUser", alias="SESSION_CACHE_KEY")

    # passlib scheme for new password hashes
    password_hash_scheme: str = Field(default="pbkdf2_sha256", alias="PASSWORD_HASH_SCHEME")

    # Logging
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    log_file_path: str = Field(default="logs/rental_store.log", alias="LOG_FILE_PATH")
    log_max_bytes: int = Field(default=50 * 1024 * 1024, alias="LOG_MAX_BYTES", gt=0)
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT", ge=0)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "allow"
        populate_by_name = True

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"log format must be one of {', '.join(LOG_FORMATS)}")
        return value

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "Settings":
        """Load settings from a YAML mapping; an empty file means defaults."""
        data = yaml.safe_load(Path(config_path).read_text(encoding="utf-8"))
        return cls(**(data or {}))


def get_settings() -> Settings:
    """Build settings from CONFIG when it is set, else from the environment.

    Raises:
        FileNotFoundError: If CONFIG names a file that does not exist
    """
    config_path = os.getenv("CONFIG")
    if not config_path:
        return Settings()

    path = Path(config_path)
    if not path.is_file():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path} "
            f"(set by the CONFIG environment variable)"
        )
    return Settings.from_yaml(path)


settings = get_settings()

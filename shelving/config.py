"""Configuration loading for the shelving commands.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from pathlib import PurePath
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv. Variables are prefixed with
    ``SHELVING_`` (e.g. ``SHELVING_SVN_BINARY``).
    """

    model_config = SettingsConfigDict(
        env_prefix="SHELVING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # External tools
    svn_binary: str = Field(
        default="svn",
        description="Name or path of the svn executable",
    )
    diffstat_binary: str = Field(
        default="diffstat",
        description="Name or path of the diffstat executable",
    )

    # Shelf storage
    shelves_dir: str = Field(
        default="shelves",
        description="Directory under the working copy's .svn area holding shelves",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("svn_binary", "diffstat_binary")
    @classmethod
    def validate_binary(cls, v: str) -> str:
        """Ensure tool names are not blank."""
        if not v.strip():
            raise ValueError("binary name must be a non-empty string")
        return v

    @field_validator("shelves_dir")
    @classmethod
    def validate_shelves_dir(cls, v: str) -> str:
        """Keep the shelves directory inside the admin area."""
        path = PurePath(v)
        if not v.strip() or path.is_absolute() or ".." in path.parts:
            raise ValueError("shelves_dir must be a relative path inside .svn")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]

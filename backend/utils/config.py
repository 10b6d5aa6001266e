"""
AutoClassName Configuration Module.

Centralizes all configuration settings using Pydantic Settings.
Requires Python 3.11+.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file into os.environ at module import time
# This ensures nested BaseSettings classes can read the values
_env_file = Path(__file__).parent.parent / ".env"
if _env_file.exists():
    load_dotenv(_env_file)
else:
    # Try current working directory
    load_dotenv()


class ClassifierSettings(BaseSettings):
    """New-file classifier settings."""

    model_config = SettingsConfigDict(env_prefix="CLASSIFIER_")

    extension: str = Field(default=".gd", description="Watched script extension")
    class_name_keyword: str = Field(default="class_name")
    extends_keyword: str = Field(default="extends")
    comment_prefix: str = Field(default="#")
    recency_window_seconds: float = Field(default=3.0, gt=0.0)
    max_fresh_lines: int = Field(default=3, ge=0)
    plugin_dir: str = Field(
        default="addons/auto_class_name",
        description="Plugin installation directory, relative to the project root",
    )

    @field_validator("extension")
    @classmethod
    def normalize_extension(cls, v: str) -> str:
        """Ensure the extension carries its leading dot."""
        v = v.strip()
        return v if v.startswith(".") else f".{v}"


class WatcherSettings(BaseSettings):
    """File watcher configuration settings."""

    model_config = SettingsConfigDict(env_prefix="WATCHER_")

    recursive: bool = Field(default=True)
    enabled: bool = Field(default=True)


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="console")  # "json" or "console"


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="AutoClassName")
    app_version: str = Field(default="0.1.0")

    # Sub-settings
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)
    watcher: WatcherSettings = Field(default_factory=WatcherSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns singleton instance of Settings for performance.
    """
    return Settings()

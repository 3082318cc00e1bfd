"""
API configuration settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class APIConfig(BaseSettings):
    """API configuration settings."""

    # API Settings
    api_title: str = "Changelog Monitor"
    api_version: str = "1.0.0"
    api_description: str = "Polls a changelog and announces new versions to messaging platforms"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"  # Ignore extra fields from .env
    )


# Global config instance
config = APIConfig()

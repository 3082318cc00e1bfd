"""
Configuration management using environment variables.
Handles all monitor settings with proper validation and defaults.
"""

from typing import Optional
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from monitor.models import NotifierSettings


DEFAULT_CHANGELOG_URL = (
    "https://raw.githubusercontent.com/anthropics/claude-code/refs/heads/main/CHANGELOG.md"
)


class MonitorConfig(BaseSettings):
    """
    Configuration class for changelog monitor settings.
    Uses pydantic BaseSettings for environment variable management.
    """

    # Changelog Source
    changelog_url: str = Field(default=DEFAULT_CHANGELOG_URL)
    product_name: str = Field(default="Claude Code")
    request_timeout: int = Field(default=30)

    # Checkpoint Storage
    checkpoint_key: str = Field(default="last_seen_version")
    checkpoint_backend: str = Field(default="mongodb")
    checkpoint_file: str = Field(default="checkpoint_state.json")
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = Field(default="changelog_monitor")
    mongodb_collection: str = Field(default="checkpoints")

    # Notification Platforms (a platform is active only when its credentials are set)
    telegram_bot_token: Optional[str] = Field(default=None)
    telegram_chat_id: Optional[str] = Field(default=None)
    telegram_thread_id: Optional[str] = Field(default=None)
    discord_webhook_url: Optional[str] = Field(default=None)
    slack_webhook_url: Optional[str] = Field(default=None)

    # Scheduler Configuration
    check_cron: str = Field(default="*/15 * * * *")
    timezone: str = Field(default="UTC")

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")
    log_file: Optional[str] = Field(default=None)

    # Development/Testing
    debug: bool = Field(default=False)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields from .env
    )

    @field_validator('request_timeout')
    @classmethod
    def validate_timeout(cls, v):
        """Ensure timeout is reasonable."""
        if v < 1 or v > 300:
            raise ValueError('request_timeout must be between 1 and 300 seconds')
        return v

    @field_validator('checkpoint_backend')
    @classmethod
    def validate_checkpoint_backend(cls, v):
        """Ensure checkpoint backend is supported."""
        valid_backends = ['mongodb', 'file']
        if v.lower() not in valid_backends:
            raise ValueError(f'checkpoint_backend must be one of: {valid_backends}')
        return v.lower()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    @field_validator(
        'telegram_bot_token', 'telegram_chat_id', 'telegram_thread_id',
        'discord_webhook_url', 'slack_webhook_url', 'log_file',
        mode='before'
    )
    @classmethod
    def empty_string_to_none(cls, v):
        """Treat empty environment values as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None

    def get_checkpoint_file_path(self) -> Path:
        """Get checkpoint file path as Path object."""
        return Path(self.checkpoint_file)

    def get_user_agent(self) -> str:
        """Get user agent string for requests."""
        return "ChangelogMonitor/1.0"

    def get_headers(self) -> dict:
        """Get default headers for HTTP requests."""
        return {
            "User-Agent": self.get_user_agent(),
            "Accept": "text/markdown,text/plain;q=0.9,*/*;q=0.8",
        }

    def notifier_settings(self) -> NotifierSettings:
        """Snapshot the platform credentials as an immutable value."""
        return NotifierSettings(
            telegram_bot_token=self.telegram_bot_token,
            telegram_chat_id=self.telegram_chat_id,
            telegram_thread_id=self.telegram_thread_id,
            discord_webhook_url=self.discord_webhook_url,
            slack_webhook_url=self.slack_webhook_url,
        )


def load_config() -> MonitorConfig:
    """Read configuration fresh from the environment."""
    return MonitorConfig()


# Global configuration instance for process-level settings (logging, server)
config = load_config()

"""
Test cases for monitor configuration.
"""

import pytest
from pydantic import ValidationError

from utilities.config import MonitorConfig


class TestMonitorConfig:
    """Test cases for MonitorConfig."""

    def test_defaults(self, monkeypatch):
        """Test default values with a clean environment."""
        for name in ("CHECKPOINT_BACKEND", "CHECK_CRON", "REQUEST_TIMEOUT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = MonitorConfig(_env_file=None)

        assert config.check_cron == "*/15 * * * *"
        assert config.request_timeout == 30
        assert config.checkpoint_backend == "mongodb"

    def test_reads_environment(self, monkeypatch):
        """Test that values come from environment variables."""
        monkeypatch.setenv("SLACK_WEBHOOK_URL", "https://slack.example/hook")
        monkeypatch.setenv("CHECKPOINT_BACKEND", "FILE")

        config = MonitorConfig(_env_file=None)

        assert config.slack_webhook_url == "https://slack.example/hook"
        assert config.checkpoint_backend == "file"

    def test_empty_credentials_are_unset(self):
        """Test that blank credentials disable a platform."""
        config = MonitorConfig(_env_file=None, discord_webhook_url="  ", slack_webhook_url=None)

        assert config.discord_webhook_url is None
        assert "Discord" not in config.notifier_settings().enabled_platforms()

    @pytest.mark.parametrize("field,value", [
        ("request_timeout", 0),
        ("checkpoint_backend", "redis"),
        ("log_level", "LOUD"),
        ("log_format", "xml"),
    ])
    def test_invalid_values(self, field, value):
        """Test validation of constrained settings."""
        with pytest.raises(ValidationError):
            MonitorConfig(_env_file=None, **{field: value})

    def test_notifier_settings_snapshot(self):
        """Test that credentials are copied into the notifier settings."""
        config = MonitorConfig(
            _env_file=None,
            telegram_bot_token="TOKEN",
            telegram_chat_id="chat",
            telegram_thread_id="5"
        )

        settings = config.notifier_settings()

        assert settings.telegram_bot_token == "TOKEN"
        assert settings.telegram_thread_id == "5"
        assert settings.telegram_enabled is True

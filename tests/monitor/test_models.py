"""
Test cases for monitor models.
"""

import pytest
from pydantic import ValidationError

from monitor.models import (
    CheckOutcome, CheckResult, NotificationResult, NotifierSettings,
    SchedulerConfig, VersionEntry
)


class TestVersionEntry:
    """Test cases for VersionEntry."""

    def test_entry_is_immutable(self):
        """Test that parsed entries cannot be modified."""
        entry = VersionEntry(version="1.0.0", content="body")

        with pytest.raises(ValidationError):
            entry.version = "2.0.0"

    def test_content_defaults_to_empty(self):
        """Test default content."""
        assert VersionEntry(version="1.0.0").content == ""


class TestNotifierSettings:
    """Test cases for NotifierSettings."""

    def test_no_credentials(self):
        """Test that no platform is enabled without credentials."""
        assert NotifierSettings().enabled_platforms() == []

    def test_telegram_requires_token_and_chat(self):
        """Test that Telegram needs both token and chat id."""
        assert NotifierSettings(telegram_bot_token="t").enabled_platforms() == []
        assert NotifierSettings(telegram_chat_id="c").enabled_platforms() == []
        assert NotifierSettings(
            telegram_bot_token="t", telegram_chat_id="c"
        ).enabled_platforms() == ["Telegram"]

    def test_all_platforms(self):
        """Test all platforms enabled in a stable order."""
        settings = NotifierSettings(
            telegram_bot_token="t",
            telegram_chat_id="c",
            discord_webhook_url="https://discord.example/hook",
            slack_webhook_url="https://slack.example/hook"
        )

        assert settings.enabled_platforms() == ["Telegram", "Discord", "Slack"]

    def test_settings_are_immutable(self):
        """Test that the snapshot cannot be modified."""
        settings = NotifierSettings()

        with pytest.raises(ValidationError):
            settings.slack_webhook_url = "https://slack.example/hook"


class TestCheckResult:
    """Test cases for CheckResult."""

    @pytest.mark.parametrize("outcome,success", [
        (CheckOutcome.FETCH_FAILED, False),
        (CheckOutcome.EMPTY_CHANGELOG, False),
        (CheckOutcome.BASELINE_STORED, True),
        (CheckOutcome.UP_TO_DATE, True),
        (CheckOutcome.RESYNCED, True),
        (CheckOutcome.NOTIFIED, True),
        (CheckOutcome.NOTIFY_FAILED, False),
    ])
    def test_success_by_outcome(self, outcome, success):
        """Test success flag for every outcome."""
        assert CheckResult(outcome=outcome).success is success

    def test_defaults(self):
        """Test default field values."""
        result = CheckResult(outcome=CheckOutcome.UP_TO_DATE)

        assert result.notified_versions == []
        assert result.checkpoint_updated is False
        assert result.started_at is not None


class TestMiscModels:
    """Test cases for small models."""

    def test_notification_result(self):
        """Test NotificationResult fields."""
        result = NotificationResult(platform="Slack", success=False, error="HTTP 500")

        assert result.platform == "Slack"
        assert result.success is False
        assert result.error == "HTTP 500"

    def test_scheduler_config_defaults(self):
        """Test scheduler defaults to a 15 minute cron."""
        config = SchedulerConfig()

        assert config.check_cron == "*/15 * * * *"
        assert config.timezone == "UTC"

    def test_invalid_test_interval(self):
        """Test test-mode interval validation."""
        with pytest.raises(ValidationError):
            SchedulerConfig(test_interval_minutes=0)

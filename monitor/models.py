"""
Models for changelog monitoring.

This module defines Pydantic models for:
- Parsed changelog version entries
- Per-platform notification results
- Platform credentials snapshot
- Check round outcomes
- Scheduler configuration
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class VersionEntry(BaseModel):
    """A single version section of the changelog."""
    model_config = ConfigDict(frozen=True)

    version: str = Field(..., description="Version string, e.g. 1.2.3 or 1.2.3-beta.1")
    content: str = Field(default="", description="Trimmed body of the version section")


class NotificationResult(BaseModel):
    """Outcome of one delivery attempt to one platform."""
    platform: str = Field(..., description="Platform name")
    success: bool = Field(..., description="Whether the platform accepted the message")
    error: Optional[str] = Field(default=None, description="Diagnostic detail on failure")


class NotifierSettings(BaseModel):
    """Immutable snapshot of platform credentials for one check."""
    model_config = ConfigDict(frozen=True)

    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_thread_id: Optional[str] = None
    discord_webhook_url: Optional[str] = None
    slack_webhook_url: Optional[str] = None

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.telegram_bot_token and self.telegram_chat_id)

    @property
    def discord_enabled(self) -> bool:
        return bool(self.discord_webhook_url)

    @property
    def slack_enabled(self) -> bool:
        return bool(self.slack_webhook_url)

    def enabled_platforms(self) -> List[str]:
        """Names of the platforms that have credentials configured."""
        platforms = []
        if self.telegram_enabled:
            platforms.append("Telegram")
        if self.discord_enabled:
            platforms.append("Discord")
        if self.slack_enabled:
            platforms.append("Slack")
        return platforms


class CheckOutcome(str, Enum):
    """How a check round ended."""
    FETCH_FAILED = "fetch_failed"
    EMPTY_CHANGELOG = "empty_changelog"
    BASELINE_STORED = "baseline_stored"
    UP_TO_DATE = "up_to_date"
    RESYNCED = "resynced"
    NOTIFIED = "notified"
    NOTIFY_FAILED = "notify_failed"


class CheckResult(BaseModel):
    """Summary of a single check round."""
    outcome: CheckOutcome = Field(..., description="Terminal state of the round")
    latest_version: Optional[str] = Field(default=None, description="Newest version in the changelog")
    previous_version: Optional[str] = Field(default=None, description="Checkpoint read at the start")
    notified_versions: List[str] = Field(default_factory=list, description="Versions dispatched, oldest first")
    checkpoint_updated: bool = Field(default=False)
    started_at: datetime = Field(default_factory=datetime.utcnow)
    duration_seconds: float = Field(default=0.0)

    @property
    def success(self) -> bool:
        return self.outcome not in (
            CheckOutcome.FETCH_FAILED,
            CheckOutcome.EMPTY_CHANGELOG,
            CheckOutcome.NOTIFY_FAILED,
        )


class SchedulerConfig(BaseModel):
    """Configuration for the scheduler system."""
    check_cron: str = Field(default="*/15 * * * *", description="Crontab expression for the check job")
    timezone: str = Field(default="UTC", description="Timezone for scheduling")
    test_interval_minutes: int = Field(default=2, ge=1, description="Interval used in test mode")

"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, List, Optional

import httpx
import pytest

from monitor.models import NotificationResult, VersionEntry
from notifications.platforms import BaseNotifier
from storage.checkpoint_store import CheckpointStore
from utilities.config import MonitorConfig


CHANGELOG_URL = "https://example.com/CHANGELOG.md"


class MemoryCheckpointStore(CheckpointStore):
    """In-memory checkpoint store that records every write."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes: List[tuple] = []

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def put(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.data[key] = value


class RecordingNotifier(BaseNotifier):
    """Notifier that records messages instead of sending them."""

    def __init__(self, platform: str = "Recording", succeed: bool = True, raises: Optional[Exception] = None):
        self.platform = platform
        super().__init__()
        self.succeed = succeed
        self.raises = raises
        self.messages: List[str] = []

    def build_request(self, text: str):
        return "https://example.com/hook", {"text": text}

    async def send(self, message: str) -> NotificationResult:
        self.messages.append(message)
        if self.raises is not None:
            raise self.raises
        return NotificationResult(platform=self.platform, success=self.succeed)


def make_changelog(*versions: str) -> str:
    """Build a changelog document with one bullet per version."""
    sections = ["# Changelog", ""]
    for version in versions:
        sections.append(f"## {version}")
        sections.append("")
        sections.append(f"- Changes in {version}")
        sections.append("")
    return "\n".join(sections)


def changelog_client(markdown: str, status_code: int = 200) -> httpx.AsyncClient:
    """HTTP client answering every request with the given changelog."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=markdown)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def monitor_config():
    """Create monitor configuration without any platform credentials."""
    return MonitorConfig(
        _env_file=None,
        changelog_url=CHANGELOG_URL,
        checkpoint_key="last_seen_version",
        checkpoint_backend="file",
        telegram_bot_token=None,
        telegram_chat_id=None,
        telegram_thread_id=None,
        discord_webhook_url=None,
        slack_webhook_url=None,
    )


@pytest.fixture
def memory_store():
    """Create an empty in-memory checkpoint store."""
    return MemoryCheckpointStore()


@pytest.fixture
def sample_changelog():
    """Sample changelog with three versions, newest first."""
    return """# Changelog

Intro text that belongs to no version.

## 2.1.0

- Added plan mode shortcuts
- Fixed crash on startup

## 2.0.0

- Breaking: new settings format

## 1.9.0
- Initial release notes
"""


@pytest.fixture
def sample_entries():
    """Parsed entries matching ``sample_changelog``."""
    return [
        VersionEntry(version="2.1.0", content="- Added plan mode shortcuts\n- Fixed crash on startup"),
        VersionEntry(version="2.0.0", content="- Breaking: new settings format"),
        VersionEntry(version="1.9.0", content="- Initial release notes"),
    ]


@pytest.fixture
def notifier_factory():
    """Factory for recording notifiers."""
    return RecordingNotifier


@pytest.fixture
def store_factory():
    """Factory for in-memory checkpoint stores."""
    return MemoryCheckpointStore


@pytest.fixture
def changelog_builder():
    """Factory for changelog documents."""
    return make_changelog


@pytest.fixture
def changelog_client_factory():
    """Factory for HTTP clients serving a changelog."""
    return changelog_client

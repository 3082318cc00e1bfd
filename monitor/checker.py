"""
Changelog check orchestration.

One check round fetches the changelog, parses it, compares it against the
stored checkpoint, notifies about new versions oldest first and advances the
checkpoint only when every notification round succeeded.
"""

from datetime import datetime
from typing import List, Optional

import httpx
import structlog

from monitor.changelog import get_new_versions, parse_changelog
from monitor.formatting import format_version_message
from monitor.models import CheckOutcome, CheckResult, VersionEntry
from notifications.dispatcher import NotificationDispatcher
from storage.checkpoint_store import CheckpointStore
from utilities.config import MonitorConfig, load_config

logger = structlog.get_logger(__name__)


class ChangelogChecker:
    """Runs check rounds against one changelog source and checkpoint store."""

    def __init__(
        self,
        config: MonitorConfig,
        store: CheckpointStore,
        dispatcher: Optional[NotificationDispatcher] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize checker.

        Args:
            config: Monitor configuration for this invocation
            store: Checkpoint store
            dispatcher: Notification dispatcher; built from ``config`` when omitted
            http_client: HTTP client for fetching and delivery; short-lived clients when omitted
        """
        self.config = config
        self.store = store
        self.http_client = http_client
        self.dispatcher = dispatcher or NotificationDispatcher.from_settings(
            config.notifier_settings(),
            client=http_client,
            timeout=config.request_timeout
        )
        self.logger = logger.bind(component="changelog_checker")

    async def fetch_changelog(self) -> Optional[str]:
        """
        Fetch the raw changelog text.

        Returns:
            Markdown text, or None when the request failed
        """
        try:
            if self.http_client is not None:
                response = await self.http_client.get(self.config.changelog_url)
            else:
                async with httpx.AsyncClient(
                    timeout=self.config.request_timeout,
                    headers=self.config.get_headers(),
                    follow_redirects=True
                ) as client:
                    response = await client.get(self.config.changelog_url)
        except httpx.HTTPError as e:
            self.logger.error(
                "Failed to fetch changelog",
                url=self.config.changelog_url,
                error=str(e)
            )
            return None

        if not response.is_success:
            self.logger.error(
                "Failed to fetch changelog",
                url=self.config.changelog_url,
                status=response.status_code
            )
            return None

        return response.text

    async def notify_versions(self, new_versions: List[VersionEntry]) -> bool:
        """
        Send one notification round per version, oldest first.

        Every round is attempted even after a failure.

        Returns:
            True if every round succeeded
        """
        all_succeeded = True
        for entry in reversed(new_versions):
            message = format_version_message(entry, self.config.product_name)
            success = await self.dispatcher.dispatch(message)
            if not success:
                self.logger.error("Notification round failed", version=entry.version)
                all_succeeded = False

        return all_succeeded

    async def check(self) -> CheckResult:
        """Run one full check round."""
        started_at = datetime.utcnow()
        key = self.config.checkpoint_key

        def finish(outcome: CheckOutcome, **fields) -> CheckResult:
            return CheckResult(
                outcome=outcome,
                started_at=started_at,
                duration_seconds=(datetime.utcnow() - started_at).total_seconds(),
                **fields
            )

        markdown = await self.fetch_changelog()
        if markdown is None:
            return finish(CheckOutcome.FETCH_FAILED)

        entries = parse_changelog(markdown)
        if not entries:
            self.logger.info("No version entries found in changelog")
            return finish(CheckOutcome.EMPTY_CHANGELOG)

        latest_version = entries[0].version
        last_seen_version = await self.store.get(key)

        if not last_seen_version:
            self.logger.info("First run - storing latest version", latest_version=latest_version)
            await self.store.put(key, latest_version)
            return finish(
                CheckOutcome.BASELINE_STORED,
                latest_version=latest_version,
                checkpoint_updated=True
            )

        if latest_version == last_seen_version:
            self.logger.info("No new updates", current_version=latest_version)
            return finish(
                CheckOutcome.UP_TO_DATE,
                latest_version=latest_version,
                previous_version=last_seen_version
            )

        new_versions = get_new_versions(entries, last_seen_version)

        if not new_versions:
            self.logger.info(
                "No new versions to notify, resynchronizing checkpoint",
                last_seen_version=last_seen_version,
                latest_version=latest_version
            )
            await self.store.put(key, latest_version)
            return finish(
                CheckOutcome.RESYNCED,
                latest_version=latest_version,
                previous_version=last_seen_version,
                checkpoint_updated=True
            )

        notified_versions = [entry.version for entry in reversed(new_versions)]
        self.logger.info(
            "Found new versions",
            count=len(new_versions),
            versions=notified_versions
        )

        all_succeeded = await self.notify_versions(new_versions)

        if not all_succeeded:
            self.logger.error(
                "Some notifications failed, not updating last seen version",
                last_seen_version=last_seen_version
            )
            return finish(
                CheckOutcome.NOTIFY_FAILED,
                latest_version=latest_version,
                previous_version=last_seen_version,
                notified_versions=notified_versions
            )

        await self.store.put(key, latest_version)
        self.logger.info("Updated last seen version", latest_version=latest_version)
        return finish(
            CheckOutcome.NOTIFIED,
            latest_version=latest_version,
            previous_version=last_seen_version,
            notified_versions=notified_versions,
            checkpoint_updated=True
        )


async def run_check(store: CheckpointStore, config: Optional[MonitorConfig] = None) -> CheckResult:
    """
    Run one check round with configuration read fresh from the environment.

    Args:
        store: Connected checkpoint store
        config: Explicit configuration; loaded from the environment when omitted

    Returns:
        CheckResult for the round
    """
    checker = ChangelogChecker(config or load_config(), store)
    return await checker.check()

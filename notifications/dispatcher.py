"""
Notification dispatcher.

Fans one message out to every configured platform concurrently and reduces
the per-platform results to a single round outcome.
"""

import asyncio
from typing import List, Optional, Sequence

import httpx
import structlog

from monitor.models import NotificationResult, NotifierSettings
from notifications.platforms import BaseNotifier, build_notifiers

logger = structlog.get_logger(__name__)


class NotificationDispatcher:
    """Dispatcher for sending one message to all configured platforms."""

    def __init__(self, notifiers: Sequence[BaseNotifier]):
        """
        Initialize dispatcher.

        Args:
            notifiers: Platform notifiers taking part in every round
        """
        self.notifiers = list(notifiers)
        self.logger = logger.bind(component="notification_dispatcher")

    @classmethod
    def from_settings(
        cls,
        settings: NotifierSettings,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0
    ) -> "NotificationDispatcher":
        """Build a dispatcher for the platforms enabled in ``settings``."""
        return cls(build_notifiers(settings, client=client, timeout=timeout))

    @property
    def platforms(self) -> List[str]:
        return [notifier.platform for notifier in self.notifiers]

    async def dispatch_results(self, message: str) -> List[NotificationResult]:
        """
        Send a message to every platform and wait for all of them.

        A notifier that raises is reported as a failed result for its platform.
        """
        outcomes = await asyncio.gather(
            *(notifier.send(message) for notifier in self.notifiers),
            return_exceptions=True
        )

        results: List[NotificationResult] = []
        for notifier, outcome in zip(self.notifiers, outcomes):
            if isinstance(outcome, BaseException):
                self.logger.error(
                    "Notifier raised an exception",
                    platform=notifier.platform,
                    error=str(outcome)
                )
                results.append(NotificationResult(
                    platform=notifier.platform,
                    success=False,
                    error=str(outcome)
                ))
            else:
                results.append(outcome)

        return results

    async def dispatch(self, message: str) -> bool:
        """
        Run one notification round.

        Args:
            message: Formatted message

        Returns:
            True if at least one platform accepted the message
        """
        if not self.notifiers:
            self.logger.warning("No notification platforms configured")
            return False

        results = await self.dispatch_results(message)
        success_count = sum(1 for result in results if result.success)
        failed_platforms = [result.platform for result in results if not result.success]

        if failed_platforms:
            self.logger.error(
                "Failed to send to some platforms",
                failed_platforms=failed_platforms,
                success_count=success_count
            )
        else:
            self.logger.info("Notification sent", platforms=self.platforms)

        return success_count > 0

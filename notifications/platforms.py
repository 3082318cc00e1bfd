"""
Messaging platform notifiers.

Each notifier delivers one formatted message to one platform with a single
HTTP POST and reports the outcome as a NotificationResult. Transport errors
are reported as failures and never raised to the caller.
"""

from typing import Any, Dict, List, Optional, Tuple

import httpx
import structlog

from monitor.formatting import truncate_message
from monitor.models import NotificationResult, NotifierSettings

logger = structlog.get_logger(__name__)

MAX_TELEGRAM_LENGTH = 4096
MAX_DISCORD_LENGTH = 2000
MAX_SLACK_LENGTH = 40000

TELEGRAM_API_URL = "https://api.telegram.org"


class BaseNotifier:
    """Common delivery logic shared by all platform notifiers."""

    platform: str = "Unknown"
    max_length: int = MAX_SLACK_LENGTH

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        """
        Initialize notifier.

        Args:
            client: Shared HTTP client; a short-lived one is opened per send when omitted
            timeout: Request timeout in seconds for short-lived clients
        """
        self.client = client
        self.timeout = timeout
        self.logger = logger.bind(component="notifier", platform=self.platform)

    def build_request(self, text: str) -> Tuple[str, Dict[str, Any]]:
        """Return the target URL and JSON payload for an already truncated text."""
        raise NotImplementedError

    async def send(self, message: str) -> NotificationResult:
        """
        Deliver a message to the platform.

        Args:
            message: Formatted message, truncated here to the platform limit

        Returns:
            NotificationResult for this platform
        """
        text = truncate_message(message, self.max_length)
        url, payload = self.build_request(text)

        try:
            response = await self._post(url, payload)
        except httpx.HTTPError as e:
            self.logger.error(
                "Notification request failed",
                error_type=type(e).__name__,
                error=str(e)
            )
            return NotificationResult(platform=self.platform, success=False, error=str(e))

        if not response.is_success:
            self.logger.error(
                "Notification rejected",
                status=response.status_code,
                body=response.text
            )
            return NotificationResult(
                platform=self.platform,
                success=False,
                error=f"HTTP {response.status_code}"
            )

        self.logger.debug("Notification delivered", length=len(text))
        return NotificationResult(platform=self.platform, success=True)

    async def _post(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(url, json=payload)

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(url, json=payload)


class TelegramNotifier(BaseNotifier):
    """Telegram Bot API notifier."""

    platform = "Telegram"
    max_length = MAX_TELEGRAM_LENGTH

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        thread_id: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0
    ):
        super().__init__(client=client, timeout=timeout)
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.thread_id = self._parse_thread_id(thread_id)

    def _parse_thread_id(self, thread_id: Optional[str]) -> Optional[int]:
        if not thread_id:
            return None
        try:
            return int(thread_id)
        except ValueError:
            self.logger.warning("Ignoring non-numeric Telegram thread id", thread_id=thread_id)
            return None

    def build_request(self, text: str) -> Tuple[str, Dict[str, Any]]:
        payload: Dict[str, Any] = {
            "chat_id": self.chat_id,
            "text": text,
            "parse_mode": "Markdown",
        }
        if self.thread_id is not None:
            payload["message_thread_id"] = self.thread_id

        return f"{TELEGRAM_API_URL}/bot{self.bot_token}/sendMessage", payload


class DiscordNotifier(BaseNotifier):
    """Discord webhook notifier."""

    platform = "Discord"
    max_length = MAX_DISCORD_LENGTH

    def __init__(self, webhook_url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        super().__init__(client=client, timeout=timeout)
        self.webhook_url = webhook_url

    def build_request(self, text: str) -> Tuple[str, Dict[str, Any]]:
        return self.webhook_url, {"content": text}


class SlackNotifier(BaseNotifier):
    """Slack incoming webhook notifier."""

    platform = "Slack"
    max_length = MAX_SLACK_LENGTH

    def __init__(self, webhook_url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        super().__init__(client=client, timeout=timeout)
        self.webhook_url = webhook_url

    def build_request(self, text: str) -> Tuple[str, Dict[str, Any]]:
        return self.webhook_url, {"text": text}


def build_notifiers(
    settings: NotifierSettings,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 30.0
) -> List[BaseNotifier]:
    """
    Instantiate a notifier for every platform with credentials present.

    Args:
        settings: Platform credentials snapshot
        client: Optional shared HTTP client
        timeout: Request timeout for short-lived clients

    Returns:
        Configured notifiers (possibly empty)
    """
    notifiers: List[BaseNotifier] = []

    if settings.telegram_enabled:
        notifiers.append(TelegramNotifier(
            bot_token=settings.telegram_bot_token,
            chat_id=settings.telegram_chat_id,
            thread_id=settings.telegram_thread_id,
            client=client,
            timeout=timeout
        ))

    if settings.discord_enabled:
        notifiers.append(DiscordNotifier(settings.discord_webhook_url, client=client, timeout=timeout))

    if settings.slack_enabled:
        notifiers.append(SlackNotifier(settings.slack_webhook_url, client=client, timeout=timeout))

    return notifiers

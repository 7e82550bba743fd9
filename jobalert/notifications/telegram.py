"""Telegram bot channel (Bot API ``sendMessage``)."""

from typing import Optional, Sequence

import requests

from jobalert.config.environment import EnvironmentConfig
from jobalert.config.models import TelegramChannelConfig
from jobalert.domain.models import Posting
from jobalert.logging import get_logger

from .base import NotificationChannel
from .models import ChannelDeliveryError
from .payloads import TELEGRAM_MESSAGE_LIMIT, build_chat_message, truncate_message

logger = get_logger(__name__, component="notification")


class TelegramChannel(NotificationChannel):
    """Posts a plain-text summary of the first ``max_postings`` postings."""

    name = "telegram"

    def __init__(
        self,
        env_config: EnvironmentConfig,
        telegram_config: Optional[TelegramChannelConfig] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 20,
    ):
        self.env_config = env_config
        self.config = telegram_config or TelegramChannelConfig()
        self.timeout = timeout
        self._session = session or requests.Session()

    def is_configured(self) -> bool:
        return self.config.enabled and self.env_config.telegram_configured

    def skip_reason(self) -> Optional[str]:
        if not self.config.enabled:
            return "disabled in configuration"
        if not self.env_config.telegram_configured:
            return "TELEGRAM_TOKEN / TELEGRAM_CHAT_ID not configured"
        return None

    @property
    def endpoint(self) -> str:
        base = self.config.api_base_url.rstrip("/")
        return f"{base}/bot{self.env_config.telegram_token}/sendMessage"

    def send(self, postings: Sequence[Posting]) -> int:
        text = truncate_message(
            build_chat_message(postings, self.config.max_postings), TELEGRAM_MESSAGE_LIMIT
        )
        payload = {
            "chat_id": self.env_config.telegram_chat_id,
            "text": text,
            "disable_web_page_preview": self.config.disable_web_page_preview,
        }

        try:
            response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            # The URL embeds the bot token; keep it out of the message
            raise ChannelDeliveryError(
                f"Telegram request failed: {type(e).__name__}", channel=self.name
            ) from e

        if response.status_code >= 400:
            raise ChannelDeliveryError(
                f"Telegram API returned HTTP {response.status_code}: {self._description(response)}",
                channel=self.name,
            )

        delivered = min(len(postings), self.config.max_postings)
        logger.info(
            f"Telegram message sent with {delivered} postings",
            extra={"event": "channel.telegram.delivered", "characters": len(text)},
        )
        return delivered

    @staticmethod
    def _description(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason or ""
        if isinstance(body, dict):
            return str(body.get("description", ""))
        return ""

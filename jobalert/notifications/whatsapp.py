"""WhatsApp channel through the Twilio messaging API."""

from typing import Callable, Optional, Sequence

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from jobalert.config.environment import EnvironmentConfig
from jobalert.config.models import WhatsAppChannelConfig
from jobalert.domain.models import Posting
from jobalert.logging import get_logger

from .base import NotificationChannel
from .models import ChannelDeliveryError
from .payloads import WHATSAPP_MESSAGE_LIMIT, build_chat_message, truncate_message

logger = get_logger(__name__, component="notification")

WHATSAPP_PREFIX = "whatsapp:"


def as_whatsapp_address(number: str) -> str:
    """``+15551234567`` -> ``whatsapp:+15551234567``; prefixed input is kept."""
    number = number.strip()
    if number.lower().startswith(WHATSAPP_PREFIX):
        return number
    return f"{WHATSAPP_PREFIX}{number}"


class WhatsAppChannel(NotificationChannel):
    """Sends one message listing the first ``max_postings`` postings."""

    name = "whatsapp"

    def __init__(
        self,
        env_config: EnvironmentConfig,
        whatsapp_config: Optional[WhatsAppChannelConfig] = None,
        client_factory: Optional[Callable[[str, str], Client]] = None,
    ):
        """
        Args:
            env_config: Environment with the TWILIO_* variables
            whatsapp_config: Channel settings
            client_factory: Replacement for twilio.rest.Client (for mocking)
        """
        self.env_config = env_config
        self.config = whatsapp_config or WhatsAppChannelConfig()
        self.client_factory = client_factory or Client

    def is_configured(self) -> bool:
        return self.config.enabled and self.env_config.whatsapp_configured

    def skip_reason(self) -> Optional[str]:
        if not self.config.enabled:
            return "disabled in configuration"
        if not self.env_config.whatsapp_configured:
            return "Twilio not configured"
        return None

    def send(self, postings: Sequence[Posting]) -> int:
        body = truncate_message(
            build_chat_message(postings, self.config.max_postings, include_header=False),
            WHATSAPP_MESSAGE_LIMIT,
        )

        try:
            client = self.client_factory(self.env_config.twilio_sid, self.env_config.twilio_auth)
            message = client.messages.create(
                from_=as_whatsapp_address(self.env_config.twilio_whatsapp_from),
                to=as_whatsapp_address(self.env_config.twilio_whatsapp_to),
                body=body,
            )
        except TwilioException as e:
            raise ChannelDeliveryError(f"Twilio request failed: {e}", channel=self.name) from e

        delivered = min(len(postings), self.config.max_postings)
        logger.info(
            f"WhatsApp message sent with {delivered} postings",
            extra={
                "event": "channel.whatsapp.delivered",
                "message_sid": getattr(message, "sid", None),
            },
        )
        return delivered

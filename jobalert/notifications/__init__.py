"""Notification channels and the dispatcher that fans postings out to them.

- Dispatcher / build_channels: per-run fan-out with per-channel outcomes
- EmailChannel: HTML digest over SMTP with resume attachment and retries
- TelegramChannel: Bot API message listing the first postings
- WhatsAppChannel: Twilio messaging API message listing the first postings
"""

from .base import NotificationChannel
from .dispatcher import Dispatcher, build_channels
from .email_channel import EmailChannel
from .models import (
    FAILED,
    SENT,
    SKIPPED,
    ChannelDeliveryError,
    ChannelOutcome,
    DispatchReport,
    NotificationError,
    NotificationTemplateError,
)
from .payloads import build_chat_message, build_digest_context, truncate_message
from .smtp_client import SMTPClient, build_sender_address, parse_recipients
from .telegram import TelegramChannel
from .templates import TemplateRenderer
from .whatsapp import WhatsAppChannel, as_whatsapp_address

__all__ = [
    "Dispatcher",
    "build_channels",
    "NotificationChannel",
    "EmailChannel",
    "TelegramChannel",
    "WhatsAppChannel",
    "ChannelOutcome",
    "DispatchReport",
    "SENT",
    "SKIPPED",
    "FAILED",
    "NotificationError",
    "NotificationTemplateError",
    "ChannelDeliveryError",
    "TemplateRenderer",
    "SMTPClient",
    "build_sender_address",
    "parse_recipients",
    "build_digest_context",
    "build_chat_message",
    "truncate_message",
    "as_whatsapp_address",
]

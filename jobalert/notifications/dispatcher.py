"""Fan-out of one run's new postings to every notification channel.

Channels run sequentially in declaration order and are independent: an
unconfigured channel is skipped, and an exception from one channel is
recorded as a failed outcome without affecting the others.
"""

import logging
from typing import List, Optional, Sequence

from jobalert.config.environment import EnvironmentConfig
from jobalert.config.models import AppConfig
from jobalert.domain.models import Posting
from jobalert.logging import get_logger
from jobalert.logging.context import log_context

from .base import NotificationChannel
from .email_channel import EmailChannel
from .models import FAILED, SENT, SKIPPED, ChannelOutcome, DispatchReport
from .telegram import TelegramChannel
from .whatsapp import WhatsAppChannel

logger = get_logger(__name__, component="dispatcher")


class Dispatcher:
    """Invokes every channel once per dispatch and reports each outcome."""

    def __init__(
        self,
        channels: Sequence[NotificationChannel],
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.channels = list(channels)
        self.logger = logger_instance or logger

    def dispatch(self, postings: Sequence[Posting]) -> DispatchReport:
        """Send postings to all channels. Never raises.

        Args:
            postings: New postings of this run, in pipeline order

        Returns:
            DispatchReport with one outcome per channel
        """
        report = DispatchReport()
        for channel in self.channels:
            with log_context(channel=channel.name):
                report.add(self._dispatch_one(channel, postings))

        self.logger.info(
            f"Dispatch complete: {len(report.sent)} sent, {len(report.skipped)} skipped, "
            f"{len(report.failed)} failed",
            extra={"event": "pipeline.dispatch.completed", "outcomes": report.summary()},
        )
        return report

    def _dispatch_one(
        self, channel: NotificationChannel, postings: Sequence[Posting]
    ) -> ChannelOutcome:
        if not channel.is_configured():
            reason = channel.skip_reason() or "not configured"
            self.logger.info(
                f"{channel.name} {reason}; skipping",
                extra={"event": "channel.send.skipped", "reason": reason},
            )
            return ChannelOutcome(channel=channel.name, status=SKIPPED, detail=reason)

        try:
            delivered = channel.send(postings)
        except Exception as e:
            self.logger.error(
                f"{channel.name} delivery failed: {e}",
                extra={"event": "channel.send.failed", "error_type": type(e).__name__},
                exc_info=True,
            )
            return ChannelOutcome(channel=channel.name, status=FAILED, error=str(e))

        self.logger.info(
            f"{channel.name} delivered {delivered} postings",
            extra={"event": "channel.send.succeeded", "delivered": delivered},
        )
        return ChannelOutcome(channel=channel.name, status=SENT, delivered=delivered)


def build_channels(
    app_config: AppConfig, env_config: EnvironmentConfig
) -> List[NotificationChannel]:
    """Channels in dispatch order: email, telegram, whatsapp.

    Every channel is built even when unconfigured so the report always
    carries one outcome per channel.
    """
    channels = app_config.channels
    return [
        EmailChannel(env_config, channels.email, resume_path=app_config.resume_path),
        TelegramChannel(
            env_config, channels.telegram, timeout=app_config.advanced.http_request_timeout
        ),
        WhatsAppChannel(env_config, channels.whatsapp),
    ]

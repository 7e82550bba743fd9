"""Email digest channel with optional resume attachment."""

import mimetypes
import time
from email.message import EmailMessage
from pathlib import Path
from typing import Callable, Optional, Sequence

from jobalert.config.environment import EnvironmentConfig
from jobalert.config.models import EmailChannelConfig
from jobalert.domain.models import Posting
from jobalert.logging import get_logger

from .base import NotificationChannel
from .models import ChannelDeliveryError
from .payloads import build_digest_context
from .smtp_client import SMTPClient, build_sender_address, parse_recipients
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")

MAX_RETRY_DELAY = 60.0


class EmailChannel(NotificationChannel):
    """Sends one HTML digest (with a plain-text alternative) per run.

    Every new posting is listed. The resume is attached when the configured
    file exists; otherwise a warning is logged and the email goes out
    without it. Delivery is retried with exponential backoff.
    """

    name = "email"

    def __init__(
        self,
        env_config: EnvironmentConfig,
        email_config: Optional[EmailChannelConfig] = None,
        resume_path: Optional[str] = None,
        template_renderer: Optional[TemplateRenderer] = None,
        smtp_client: Optional[SMTPClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.env_config = env_config
        self.email_config = email_config or EmailChannelConfig()
        self.resume_path = resume_path
        self.template_renderer = template_renderer or TemplateRenderer()
        self.smtp_client = smtp_client or SMTPClient()
        self._sleep = sleep

    def is_configured(self) -> bool:
        return self.email_config.enabled and self.env_config.email_configured

    def skip_reason(self) -> Optional[str]:
        if not self.email_config.enabled:
            return "disabled in configuration"
        if not self.env_config.email_configured:
            return "SMTP_USER / SMTP_PASS / TARGET_EMAIL not configured"
        return None

    def send(self, postings: Sequence[Posting]) -> int:
        message = self.build_message(postings)

        max_attempts = self.email_config.max_retries + 1
        last_error: Optional[ChannelDeliveryError] = None
        for attempt in range(1, max_attempts + 1):
            if attempt > 1:
                delay = min(
                    self.email_config.retry_initial_delay
                    * self.email_config.retry_backoff_multiplier ** (attempt - 2),
                    MAX_RETRY_DELAY,
                )
                logger.warning(
                    f"Retrying email delivery (attempt {attempt}/{max_attempts}) after {delay:.1f}s",
                    extra={"event": "channel.send.retry", "attempt": attempt},
                )
                self._sleep(delay)

            try:
                self.smtp_client.send(message, self.env_config, self.email_config.use_tls)
            except ChannelDeliveryError as e:
                last_error = e
                logger.warning(
                    f"Email delivery failed (attempt {attempt}/{max_attempts}): {e}",
                    extra={
                        "event": "channel.send.attempt_failed",
                        "attempt": attempt,
                        "retry_remaining": attempt < max_attempts,
                    },
                )
                continue

            logger.info(
                f"Email sent to {message['To']} with {len(postings)} postings",
                extra={"event": "channel.email.delivered", "attempt": attempt},
            )
            return len(postings)

        raise ChannelDeliveryError(
            f"Email delivery failed after {max_attempts} attempts: {last_error}",
            channel=self.name,
        )

    def build_message(self, postings: Sequence[Posting]) -> EmailMessage:
        """Render the digest and assemble the MIME message.

        Raises:
            NotificationTemplateError: If rendering fails
            ChannelDeliveryError: If TARGET_EMAIL holds no valid address
        """
        rendered = self.template_renderer.render(
            build_digest_context(postings, subject_prefix=self.email_config.subject_prefix)
        )
        try:
            recipients = parse_recipients(self.env_config.target_email or "")
        except ValueError as e:
            raise ChannelDeliveryError(str(e), channel=self.name) from e

        message = EmailMessage()
        message["Subject"] = rendered["subject"]
        message["From"] = build_sender_address(self.env_config)
        message["To"] = ", ".join(recipients)
        message.set_content(rendered["text_body"])
        message.add_alternative(rendered["html_body"], subtype="html")

        if self.email_config.attach_resume:
            self._attach_resume(message)
        return message

    def _attach_resume(self, message: EmailMessage) -> None:
        if not self.resume_path:
            logger.warning(
                "No resume_path configured; sending email without attachment",
                extra={"event": "channel.email.resume_missing"},
            )
            return

        path = Path(self.resume_path)
        if not path.is_file():
            logger.warning(
                f"Resume not found at {path}; sending email without attachment",
                extra={"event": "channel.email.resume_missing", "path": str(path)},
            )
            return

        mime_type, _ = mimetypes.guess_type(path.name)
        maintype, subtype = (mime_type or "application/octet-stream").split("/", 1)
        message.add_attachment(
            path.read_bytes(), maintype=maintype, subtype=subtype, filename=path.name
        )

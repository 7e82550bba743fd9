"""SMTP transport for the email digest.

Port 465 connects with implicit TLS; any other port connects in clear text
and upgrades with STARTTLS when ``use_tls`` is set. Connection factories are
injectable so tests never open sockets.
"""

import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, List, Optional

from email_validator import EmailNotValidError, validate_email

from jobalert.config.environment import EnvironmentConfig
from jobalert.logging import get_logger

from .models import ChannelDeliveryError

logger = get_logger(__name__, component="notification")

IMPLICIT_TLS_PORT = 465


class SMTPClient:
    """Sends a prepared EmailMessage over one short-lived SMTP connection."""

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
        timeout: int = 30,
    ):
        """
        Args:
            smtp_factory: Replacement for smtplib.SMTP (for mocking)
            smtp_ssl_factory: Replacement for smtplib.SMTP_SSL (for mocking)
            timeout: Socket timeout in seconds
        """
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL
        self.timeout = timeout

    def send(
        self,
        message: EmailMessage,
        env_config: EnvironmentConfig,
        use_tls: bool = True,
    ) -> None:
        """Connect, authenticate, send and always close.

        Raises:
            ChannelDeliveryError: On any SMTP or network failure
        """
        host, port = env_config.smtp_host, env_config.smtp_port
        smtp = None
        try:
            if port == IMPLICIT_TLS_PORT:
                logger.debug(f"Connecting to {host}:{port} with implicit TLS")
                smtp = self.smtp_ssl_factory(
                    host, port, context=ssl.create_default_context(), timeout=self.timeout
                )
            else:
                logger.debug(f"Connecting to {host}:{port}")
                smtp = self.smtp_factory(host, port, timeout=self.timeout)
                if use_tls:
                    smtp.starttls(context=ssl.create_default_context())

            if env_config.smtp_user and env_config.smtp_pass:
                smtp.login(env_config.smtp_user, env_config.smtp_pass)

            smtp.send_message(message)
            logger.debug(f"Message accepted for {message['To']}")

        except smtplib.SMTPException as e:
            raise ChannelDeliveryError(f"SMTP error during delivery: {e}", channel="email") from e
        except OSError as e:
            raise ChannelDeliveryError(
                f"Network error during SMTP connection: {e}", channel="email"
            ) from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except (smtplib.SMTPException, OSError) as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def parse_recipients(recipient_string: str) -> List[str]:
    """Parse and validate comma-separated email addresses.

    Raises:
        ValueError: If any address is invalid or none are given
    """
    recipients = []
    for address in (a.strip() for a in recipient_string.split(",")):
        if not address:
            continue
        try:
            recipients.append(validate_email(address, check_deliverability=False).normalized)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email address in TARGET_EMAIL: '{address}' - {e}") from e

    if not recipients:
        raise ValueError("No valid email addresses found in TARGET_EMAIL")
    return recipients


def build_sender_address(env_config: EnvironmentConfig) -> str:
    """``"<sender name> <smtp user>"``, or a noreply address at the SMTP host."""
    sender_email = env_config.smtp_user or f"noreply@{env_config.smtp_host}"
    return f"{env_config.smtp_sender_name} <{sender_email}>"

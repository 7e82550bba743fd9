"""Environment variable loading for channel credentials and overrides."""

import os
from typing import Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from .exceptions import ConfigurationError

EMAIL_VARS = ("SMTP_USER", "SMTP_PASS", "TARGET_EMAIL")
TELEGRAM_VARS = ("TELEGRAM_TOKEN", "TELEGRAM_CHAT_ID")
WHATSAPP_VARS = ("TWILIO_SID", "TWILIO_AUTH", "TWILIO_WHATSAPP_FROM", "TWILIO_WHATSAPP_TO")

CREDENTIAL_GROUPS: Dict[str, tuple] = {
    "email": EMAIL_VARS,
    "telegram": TELEGRAM_VARS,
    "whatsapp": WHATSAPP_VARS,
}


class EnvironmentConfig:
    """Environment variable configuration holder.

    Every credential group is optional. A channel counts as configured only
    when all variables of its group are non-empty.
    """

    def __init__(
        self,
        smtp_user: Optional[str] = None,
        smtp_pass: Optional[str] = None,
        target_email: Optional[str] = None,
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        smtp_sender_name: Optional[str] = None,
        telegram_token: Optional[str] = None,
        telegram_chat_id: Optional[str] = None,
        twilio_sid: Optional[str] = None,
        twilio_auth: Optional[str] = None,
        twilio_whatsapp_from: Optional[str] = None,
        twilio_whatsapp_to: Optional[str] = None,
        log_level: Optional[str] = None,
        ledger_path: Optional[str] = None,
        resume_path: Optional[str] = None,
    ):
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.target_email = target_email
        self.smtp_host = smtp_host or "smtp.gmail.com"
        self.smtp_port = smtp_port or 465
        self.smtp_sender_name = smtp_sender_name or "Job Alert"
        self.telegram_token = telegram_token
        self.telegram_chat_id = telegram_chat_id
        self.twilio_sid = twilio_sid
        self.twilio_auth = twilio_auth
        self.twilio_whatsapp_from = twilio_whatsapp_from
        self.twilio_whatsapp_to = twilio_whatsapp_to
        self.log_level = log_level
        self.ledger_path = ledger_path
        self.resume_path = resume_path

    @property
    def email_configured(self) -> bool:
        return bool(self.smtp_user and self.smtp_pass and self.target_email)

    @property
    def telegram_configured(self) -> bool:
        return bool(self.telegram_token and self.telegram_chat_id)

    @property
    def whatsapp_configured(self) -> bool:
        return bool(
            self.twilio_sid
            and self.twilio_auth
            and self.twilio_whatsapp_from
            and self.twilio_whatsapp_to
        )


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Credential groups (all optional, each enables one channel):
    - Email: SMTP_USER, SMTP_PASS, TARGET_EMAIL
      (SMTP_HOST, SMTP_PORT and SMTP_SENDER_NAME tune the connection)
    - Telegram: TELEGRAM_TOKEN, TELEGRAM_CHAT_ID
    - WhatsApp: TWILIO_SID, TWILIO_AUTH, TWILIO_WHATSAPP_FROM, TWILIO_WHATSAPP_TO

    Overrides: LOG_LEVEL, LEDGER_PATH, RESUME_PATH.

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a set variable has an invalid value
    """
    errors = []

    smtp_port = None
    smtp_port_str = _get("SMTP_PORT")
    if smtp_port_str:
        try:
            smtp_port = int(smtp_port_str)
            if smtp_port < 1 or smtp_port > 65535:
                errors.append(f"Invalid SMTP_PORT: {smtp_port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid SMTP_PORT: '{smtp_port_str}'. Must be a valid integer.")

    target_email = _get("TARGET_EMAIL")
    if target_email:
        for address in (a.strip() for a in target_email.split(",")):
            if not address:
                continue
            try:
                validate_email(address, check_deliverability=False)
            except EmailNotValidError as e:
                errors.append(f"Invalid email address in TARGET_EMAIL: '{address}' - {e}")

    log_level = _get("LOG_LEVEL")
    if log_level:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if log_level.upper() not in valid_levels:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )
        log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your credentials",
                "Check that TARGET_EMAIL holds valid addresses",
                "Verify SMTP_PORT is a number between 1 and 65535",
            ],
        )

    return EnvironmentConfig(
        smtp_user=_get("SMTP_USER"),
        smtp_pass=_get("SMTP_PASS"),
        target_email=target_email,
        smtp_host=_get("SMTP_HOST"),
        smtp_port=smtp_port,
        smtp_sender_name=_get("SMTP_SENDER_NAME"),
        telegram_token=_get("TELEGRAM_TOKEN"),
        telegram_chat_id=_get("TELEGRAM_CHAT_ID"),
        twilio_sid=_get("TWILIO_SID"),
        twilio_auth=_get("TWILIO_AUTH"),
        twilio_whatsapp_from=_get("TWILIO_WHATSAPP_FROM"),
        twilio_whatsapp_to=_get("TWILIO_WHATSAPP_TO"),
        log_level=log_level,
        ledger_path=_get("LEDGER_PATH"),
        resume_path=_get("RESUME_PATH"),
    )


def find_partial_credentials() -> Dict[str, List[str]]:
    """Map channel name to missing variables for half-configured groups.

    Groups with no variables set at all are not reported; that is the normal
    way to disable a channel.
    """
    partial = {}
    for channel, names in CREDENTIAL_GROUPS.items():
        missing = [name for name in names if not _get(name)]
        if missing and len(missing) < len(names):
            partial[channel] = missing
    return partial


def _get(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None

"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from jobalert.domain.models import FilterCriteria

from .duration import DurationParseError, parse_duration, validate_duration_range


class SourceType(str, Enum):
    """Supported job boards."""

    INDEED = "indeed"
    NAUKRI = "naukri"
    CUTSHORT = "cutshort"
    GLASSDOOR = "glassdoor"
    MONSTER = "monster"
    LINKEDIN = "linkedin"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SourceConfig(BaseModel):
    """A job board to harvest."""

    type: SourceType = Field(..., description="Job board adapter to use")
    enabled: bool = Field(True, description="Whether to harvest this board")

    model_config = {"use_enum_values": True}


class EmailChannelConfig(BaseModel):
    """Email channel settings. Credentials come from the environment."""

    enabled: bool = Field(True, description="Send the email digest when credentials exist")
    subject_prefix: str = Field("Job Alert", description="Prefix for the subject line")
    attach_resume: bool = Field(True, description="Attach the resume file when it exists")
    use_tls: bool = Field(True, description="Use STARTTLS on non-465 ports")
    max_retries: int = Field(2, ge=0, le=5, description="Retry attempts after a failed send")
    retry_initial_delay: int = Field(5, ge=1, le=60, description="First retry delay (seconds)")
    retry_backoff_multiplier: float = Field(
        2.0, ge=1.0, le=5.0, description="Exponential backoff multiplier for retries"
    )


class TelegramChannelConfig(BaseModel):
    """Telegram bot channel settings."""

    enabled: bool = Field(True, description="Send the chat summary when credentials exist")
    max_postings: int = Field(10, ge=1, le=50, description="Postings listed per message")
    disable_web_page_preview: bool = Field(False, description="Hide link previews")
    api_base_url: str = Field("https://api.telegram.org", description="Bot API base URL")


class WhatsAppChannelConfig(BaseModel):
    """WhatsApp (Twilio messaging API) channel settings."""

    enabled: bool = Field(True, description="Send the message when credentials exist")
    max_postings: int = Field(5, ge=1, le=20, description="Postings listed per message")


class ChannelsConfig(BaseModel):
    """Per-channel settings. Channels are dispatched in this field order."""

    email: EmailChannelConfig = Field(default_factory=EmailChannelConfig)
    telegram: TelegramChannelConfig = Field(default_factory=TelegramChannelConfig)
    whatsapp: WhatsAppChannelConfig = Field(default_factory=WhatsAppChannelConfig)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """HTTP and concurrency settings for harvesting."""

    http_request_timeout: int = Field(
        20, ge=5, le=120, description="Per-request timeout for job board pages (seconds)"
    )
    source_timeout: int = Field(
        60, ge=5, le=600, description="Time bound for the whole harvest stage (seconds)"
    )
    user_agent: str = Field(
        "Mozilla/5.0 (compatible; JobAlert/1.0)",
        min_length=1,
        description="User-Agent header sent to job boards",
    )
    max_workers: int = Field(4, ge=1, le=16, description="Adapters fetched in parallel")
    max_postings_per_source: int = Field(
        50, ge=0, description="Maximum postings kept per board (0 = unlimited)"
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the job alert pipeline."""

    criteria: FilterCriteria = Field(..., description="Keyword, experience and salary filter")
    sources: List[SourceConfig] = Field(
        ..., min_length=1, description="Job boards to harvest, in priority order"
    )
    resume_path: Optional[str] = Field(None, description="Resume file attached to the email")
    ledger_path: str = Field(
        "./data/sent-links.json", min_length=1, description="Notification ledger file"
    )
    channels: ChannelsConfig = Field(default_factory=ChannelsConfig)
    scan_interval: str = Field("24h", description="Interval between runs in --schedule mode")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)

    # Computed field
    scan_interval_seconds: Optional[int] = None

    @field_validator("scan_interval")
    @classmethod
    def validate_scan_interval(cls, v: str) -> str:
        try:
            validate_duration_range(parse_duration(v))
        except DurationParseError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("resume_path")
    @classmethod
    def blank_resume_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()

    @model_validator(mode="after")
    def validate_sources_and_compute_fields(self):
        """Reject duplicate or all-disabled sources and compute the interval."""
        if not any(source.enabled for source in self.sources):
            raise ValueError(
                "At least one source must be enabled. All sources have enabled=false."
            )

        seen = set()
        for source in self.sources:
            if source.type in seen:
                raise ValueError(f"Duplicate source: {source.type} appears multiple times")
            seen.add(source.type)

        self.scan_interval_seconds = parse_duration(self.scan_interval)
        return self

    def get_enabled_sources(self) -> List[SourceConfig]:
        """Enabled sources in declaration order."""
        return [source for source in self.sources if source.enabled]

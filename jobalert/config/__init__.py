"""Configuration management for the job alert pipeline."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_app_config
from .models import (
    AdvancedConfig,
    AppConfig,
    ChannelsConfig,
    EmailChannelConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SourceConfig,
    SourceType,
    TelegramChannelConfig,
    WhatsAppChannelConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_app_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "SourceConfig",
    "ChannelsConfig",
    "EmailChannelConfig",
    "TelegramChannelConfig",
    "WhatsAppChannelConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "SourceType",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]

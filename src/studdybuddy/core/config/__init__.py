"""
Configuration management for the StuddyBuddy client.

Usage:
    from studdybuddy.core.config import ConfigManager

    config = ConfigManager().load_config()
    base_url = config.api.base_url
"""

from studdybuddy.exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)

from .manager import ConfigManager
from .models import (
    ApiConfig,
    ClientConfig,
    LoggingSettings,
    LogLevel,
    SessionConfig,
    SessionStoreType,
    StuddyBuddySettings,
)

__all__ = [
    "ClientConfig",
    "ApiConfig",
    "SessionConfig",
    "SessionStoreType",
    "LoggingSettings",
    "LogLevel",
    "StuddyBuddySettings",
    "ConfigManager",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
]

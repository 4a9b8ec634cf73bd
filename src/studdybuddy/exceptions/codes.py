"""
Standardized error codes and recovery suggestions.
"""

from typing import List


class ErrorCodes:
    """Standardized error codes for consistent error categorization."""

    # Configuration errors (CONFIG_xxx)
    CONFIG_MISSING = "CONFIG_001"
    CONFIG_INVALID = "CONFIG_002"
    CONFIG_FILE_ERROR = "CONFIG_003"
    CONFIG_VALIDATION_ERROR = "CONFIG_004"

    # Client errors (CLIENT_xxx)
    CLIENT_NETWORK_FAILURE = "CLIENT_001"
    CLIENT_HTTP_ERROR = "CLIENT_002"
    CLIENT_UNAUTHORIZED = "CLIENT_003"
    CLIENT_AUTH_FAILED = "CLIENT_004"

    # Session errors (SESSION_xxx)
    SESSION_STORE_ERROR = "SESSION_001"

    # CLI errors (CLI_xxx)
    CLI_INVALID_ARGUMENT = "CLI_001"
    CLI_NOT_LOGGED_IN = "CLI_002"


class RecoverySuggestions:
    """Standard recovery suggestions for common error scenarios."""

    @staticmethod
    def for_auth_error() -> List[str]:
        return [
            "Verify your email and password are correct",
            "Run: studdybuddy login --email <email>",
            "Check that the StuddyBuddy API is reachable",
        ]

    @staticmethod
    def for_network_error(base_url: str) -> List[str]:
        return [
            "Check your internet connection",
            f"Verify the API at {base_url} is running",
            "Run: studdybuddy config --show to check the configured base URL",
        ]

    @staticmethod
    def for_config_error(field: str) -> List[str]:
        return [
            f"Check the '{field}' configuration setting",
            "Run: studdybuddy config --show to view current configuration",
            f"Use: studdybuddy config --set {field}=<value>",
        ]

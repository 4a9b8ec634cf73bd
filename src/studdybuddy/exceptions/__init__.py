"""
StuddyBuddy Exception Hierarchy

Exception Hierarchy:
    StuddyBuddyError (base)
    ├── ConfigurationError
    │   ├── InvalidConfigurationError
    │   ├── MissingConfigurationError
    │   └── ConfigurationValidationError
    ├── ClientError
    │   ├── NetworkFailure
    │   ├── HttpError
    │   │   └── UnauthorizedError
    │   └── AuthenticationError
    ├── SessionStoreError
    └── CLIError
        ├── InvalidCommandError
        └── NotLoggedInError
"""

from .base import ExceptionContext, StuddyBuddyError

# CLI exceptions
from .cli import CLIError, InvalidCommandError, NotLoggedInError

# Client exceptions
from .client import (
    AuthenticationError,
    ClientError,
    HttpError,
    NetworkFailure,
    UnauthorizedError,
)
from .codes import ErrorCodes, RecoverySuggestions

# Configuration exceptions
from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .session import SessionStoreError

__all__ = [
    # Base
    "StuddyBuddyError",
    "ExceptionContext",
    "ErrorCodes",
    "RecoverySuggestions",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "ConfigurationValidationError",
    # Client
    "ClientError",
    "NetworkFailure",
    "HttpError",
    "UnauthorizedError",
    "AuthenticationError",
    # Session
    "SessionStoreError",
    # CLI
    "CLIError",
    "InvalidCommandError",
    "NotLoggedInError",
]

"""
CLI-related exceptions.
"""

from .base import ExceptionContext, StuddyBuddyError
from .codes import ErrorCodes


class CLIError(StuddyBuddyError):
    """Base class for CLI-related errors."""


class InvalidCommandError(CLIError):
    """Raised when CLI command usage is invalid."""

    def __init__(self, command: str, reason: str):
        message = f"Invalid command usage: {reason}"
        help_text = f"Use 'studdybuddy {command} --help' for correct usage"
        super().__init__(message, ExceptionContext(
            help_text=help_text, error_code=ErrorCodes.CLI_INVALID_ARGUMENT
        ))


class NotLoggedInError(CLIError):
    """Raised when a command needs a stored session and there is none."""

    def __init__(self):
        super().__init__("Not logged in", ExceptionContext(
            user_action="studdybuddy login --email <email>",
            error_code=ErrorCodes.CLI_NOT_LOGGED_IN,
        ))

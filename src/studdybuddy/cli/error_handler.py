"""
Centralized error handling for the CLI.

Provides consistent error display and exit codes across all CLI commands.
"""

import sys
from functools import wraps

from rich.console import Console
from rich.markup import escape

from studdybuddy.exceptions import (
    AuthenticationError,
    CLIError,
    ConfigurationError,
    HttpError,
    NetworkFailure,
    StuddyBuddyError,
    UnauthorizedError,
)
from studdybuddy.logging import get_logger

console = Console(stderr=True)
logger = get_logger(__name__)

HINT_STYLES = {"Help": "blue", "Action": "green", "Details": "dim"}


def handle_cli_errors(func):
    """Decorator to render StuddyBuddy errors and exit with status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            _print_error("\nOperation cancelled by user", "yellow")
            sys.exit(1)
        except AuthenticationError as e:
            _print_error(e.message)
            _print_details(e)
            sys.exit(1)
        except UnauthorizedError as e:
            _print_error(f"Session expired: {e.message}")
            _print_details(e)
            sys.exit(1)
        except HttpError as e:
            _print_error(f"Request failed: {e.message}")
            if e.body is not None and not isinstance(e.body, dict):
                console.print(f"[dim]{escape(str(e.body))}[/dim]")
            _print_details(e)
            sys.exit(1)
        except NetworkFailure as e:
            _print_error(f"Connection problem: {e.message}")
            _print_details(e)
            sys.exit(1)
        except ConfigurationError as e:
            _print_error(f"Configuration error: {e.message}")
            _print_details(e)
            sys.exit(1)
        except CLIError as e:
            _print_error(e.message)
            _print_details(e)
            sys.exit(1)
        except StuddyBuddyError as e:
            _print_error(f"Error: {e.message}")
            _print_details(e)
            sys.exit(1)
    return wrapper


def _print_error(message: str, style: str = "red"):
    console.print(f"[{style}]{escape(message)}[/{style}]", highlight=False)


def _print_details(e: StuddyBuddyError):
    for label, text in e.hints():
        style = HINT_STYLES[label]
        console.print(f"[{style}]{label}: {escape(text)}[/{style}]", highlight=False)
    console.print(f"[dim]Error ID: {e.correlation_id}[/dim]", highlight=False)
    logger.error(e.message, **e.to_dict())

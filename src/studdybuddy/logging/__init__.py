"""
StuddyBuddy Logging Package

- formatters: Log formatting (JSON, console, rich)
- loggers: Logger wrapper with correlation IDs
- config: Logging configuration
- manager: Centralized logging setup
- context: Entry/exit logging context manager
"""

from .config import LoggingConfig
from .context import LoggingContext
from .formatters import StructuredFormatter
from .loggers import StuddyBuddyLogger
from .manager import LoggingManager, configure_logging, logging_manager

get_logger = logging_manager.get_logger

__all__ = [
    "LoggingConfig",
    "LoggingManager",
    "configure_logging",
    "StuddyBuddyLogger",
    "get_logger",
    "LoggingContext",
    "StructuredFormatter",
]

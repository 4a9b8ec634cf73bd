"""
Handler installation for the ``studdybuddy`` logger tree.

Library code only logs. The CLI, or an application embedding the client,
calls ``configure_logging`` with the user's settings; calling it again
swaps the handlers rather than stacking new ones.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig
from .formatters import StructuredFormatter, create_console_formatter, create_rich_handler
from .loggers import StuddyBuddyLogger

ROOT_LOGGER_NAME = "studdybuddy"
DEFAULT_LOG_FILE = Path("logs/studdybuddy.log")


class LoggingManager:
    """Process-wide owner of the handlers on the ``studdybuddy`` logger."""

    _instance = None

    config: Optional[LoggingConfig]
    handlers: List[logging.Handler]

    def __new__(cls):
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.config = None
            instance.handlers = []
            cls._instance = instance
        return cls._instance

    def configure(self, config: LoggingConfig):
        """Replace the installed handlers with the ones ``config`` names."""
        tree = logging.getLogger(ROOT_LOGGER_NAME)
        while self.handlers:
            old = self.handlers.pop()
            tree.removeHandler(old)
            old.close()

        self.config = config
        tree.setLevel(config.level)
        tree.propagate = False

        for output in config.output:
            handler = self._build_handler(output, config)
            handler.setLevel(config.level)
            tree.addHandler(handler)
            self.handlers.append(handler)

    def _build_handler(self, output: str, config: LoggingConfig) -> logging.Handler:
        if output == "file":
            path = config.file_path or DEFAULT_LOG_FILE
            path.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(
                path, maxBytes=config.max_file_size, backupCount=config.backup_count
            )
        elif config.format_type == "rich":
            handler = create_rich_handler()
            handler.setFormatter(logging.Formatter("%(message)s"))
            return handler
        else:
            handler = logging.StreamHandler(sys.stderr)

        if config.format_type == "json":
            handler.setFormatter(StructuredFormatter(config.service_name, config.version))
        else:
            handler.setFormatter(create_console_formatter())
        return handler

    def get_logger(self, name: str, correlation_id: Optional[str] = None) -> StuddyBuddyLogger:
        return StuddyBuddyLogger(name, correlation_id)


logging_manager = LoggingManager()


def configure_logging(config: LoggingConfig):
    """Configure the global logging system."""
    logging_manager.configure(config)

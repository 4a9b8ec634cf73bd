"""
Logging context management.
"""

import logging
from typing import Optional, Union

from .loggers import StuddyBuddyLogger
from .manager import logging_manager


class LoggingContext:
    """Context manager for structured logging with entry/exit messages."""

    def __init__(self, entry_msg: Optional[str] = None, success_msg: Optional[str] = None,
                 failure_msg: Optional[str] = None,
                 logger: Union[StuddyBuddyLogger, logging.Logger, None] = None,
                 entry_level: int = logging.DEBUG, success_level: int = logging.INFO,
                 failure_level: int = logging.ERROR):
        self.entry_msg = entry_msg
        self.success_msg = success_msg
        self.failure_msg = failure_msg

        if isinstance(logger, StuddyBuddyLogger):
            self.logger = logger
        else:
            logger_name = logger.name if logger else __name__
            self.logger = logging_manager.get_logger(logger_name)

        self.entry_level = entry_level
        self.success_level = success_level
        self.failure_level = failure_level

    def _emit(self, level: int, msg: str, **kwargs):
        getattr(self.logger, logging.getLevelName(level).lower())(msg, **kwargs)

    def __enter__(self):
        if self.entry_msg:
            self._emit(self.entry_level, self.entry_msg)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            if self.success_msg:
                self._emit(self.success_level, self.success_msg)
        elif self.failure_msg:
            self._emit(self.failure_level, f"{self.failure_msg}: {exc_value}",
                       error_type=exc_type.__name__)
        # exceptions always propagate
        return False

"""
Logging configuration management.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..constants import DEFAULT_LOG_BACKUP_COUNT, DEFAULT_LOG_FILE_SIZE_BYTES


class LoggingConfig:
    """Configuration for the logging system."""

    def __init__(
        self,
        level: Union[str, int] = logging.WARNING,
        format_type: str = "console",  # "console", "json", "rich"
        output: Union[str, List[str]] = "console",  # "console", "file"
        file_path: Optional[Path] = None,
        max_file_size: int = DEFAULT_LOG_FILE_SIZE_BYTES,
        backup_count: int = DEFAULT_LOG_BACKUP_COUNT,
        service_name: str = "studdybuddy",
        version: str = "unknown",
    ):
        self.level = (
            level if isinstance(level, int) else getattr(logging, level.upper())
        )
        self.format_type = format_type
        self.output = output if isinstance(output, list) else [output]
        self.file_path = file_path
        self.max_file_size = max_file_size
        self.backup_count = backup_count
        self.service_name = service_name
        self.version = version

    @classmethod
    def from_settings(cls, settings, version: str = "unknown") -> "LoggingConfig":
        """Build from the ``logging`` section of a ``ClientConfig``."""
        return cls(
            level=settings.level.value,
            format_type=settings.format,
            output=list(settings.output),
            file_path=settings.file_path,
            max_file_size=settings.max_file_size,
            backup_count=settings.backup_count,
            version=version,
        )

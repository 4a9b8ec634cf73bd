"""
Session storage exceptions.
"""

from pathlib import Path
from typing import Optional

from .base import ExceptionContext, StuddyBuddyError
from .codes import ErrorCodes


class SessionStoreError(StuddyBuddyError):
    """Raised when the stored session cannot be read or written."""

    def __init__(self, path: Optional[Path], details: str):
        self.path = path
        message = f"Session store error: {details}"
        help_text = None
        if path is not None:
            help_text = f"Delete {path} and log in again"
        super().__init__(message, ExceptionContext(
            help_text=help_text,
            error_code=ErrorCodes.SESSION_STORE_ERROR,
            context={"path": str(path) if path else None},
        ))

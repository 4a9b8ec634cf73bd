"""
Base exception for the StuddyBuddy client.

Every error carries two audiences: the person at the terminal (help text and
a command to run) and whoever reads the logs (error code, short error id and
structured fields such as the request method and URL).
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple


@dataclass
class ExceptionContext:
    """Optional details attached to a ``StuddyBuddyError``."""

    help_text: Optional[str] = None
    error_code: Optional[str] = None
    user_action: Optional[str] = None
    technical_details: Optional[str] = None
    context: Dict[str, Any] = field(default_factory=dict)


class StuddyBuddyError(Exception):
    """Base exception for all StuddyBuddy client errors.

    Attributes:
        message: The error message
        help_text: What usually fixes this kind of error
        user_action: Command the user can run next
        technical_details: Low-level cause (transport message, HTTP status line)
        error_code: Stable code from ``ErrorCodes``
        context: Structured fields for logs; ``None`` values are dropped
        correlation_id: Short id printed by the CLI and logged with the error
    """

    def __init__(self, message: str, context: Optional[ExceptionContext] = None):
        super().__init__(message)
        details = context or ExceptionContext()
        self.message = message
        self.help_text = details.help_text
        self.error_code = details.error_code
        self.user_action = details.user_action
        self.technical_details = details.technical_details
        self.context = {k: v for k, v in details.context.items() if v is not None}
        self.correlation_id = uuid.uuid4().hex[:8]

    def hints(self) -> Iterator[Tuple[str, str]]:
        """Labelled lines shown under the message."""
        if self.help_text:
            yield "Help", self.help_text
        if self.user_action:
            yield "Action", self.user_action
        if self.technical_details:
            yield "Details", self.technical_details

    def __str__(self) -> str:
        lines = [self.message]
        lines.extend(f"{label}: {text}" for label, text in self.hints())
        lines.append(f"Error ID: {self.correlation_id}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Fields logged alongside the message."""
        data = {
            "error_type": type(self).__name__,
            "error_code": self.error_code,
            "error_id": self.correlation_id,
        }
        data.update(self.context)
        return data

"""
HTTP client exceptions.

Failures surfaced to callers of the authenticated clients and the auth
service. Token refresh never introduces its own error type: callers only
ever see ``NetworkFailure`` or ``HttpError``.
"""

from typing import Any, Optional

from .base import ExceptionContext, StuddyBuddyError
from .codes import ErrorCodes, RecoverySuggestions


class ClientError(StuddyBuddyError):
    """Base class for errors raised while talking to the StuddyBuddy API.

    ``method`` and ``url`` name the call that failed when there was one.
    """

    def __init__(self, message: str, context: Optional[ExceptionContext] = None,
                 method: Optional[str] = None, url: Optional[str] = None):
        context = context or ExceptionContext()
        context.context.setdefault("method", method)
        context.context.setdefault("url", url)
        super().__init__(message, context)
        self.method = method
        self.url = url


class NetworkFailure(ClientError):
    """Raised when no response was received (connection error, timeout)."""

    def __init__(self, method: str, url: str, details: Optional[str] = None,
                 base_url: Optional[str] = None):
        message = f"Network failure on {method} {url}"
        if details:
            message += f": {details}"

        suggestions = RecoverySuggestions.for_network_error(base_url or url)
        super().__init__(message, ExceptionContext(
            help_text=suggestions[0],
            error_code=ErrorCodes.CLIENT_NETWORK_FAILURE,
            technical_details=details,
        ), method, url)


class HttpError(ClientError):
    """Raised when the server answered with a non-2xx status.

    Attributes:
        status: HTTP status code
        body: Decoded response body (JSON when possible, text otherwise)
        response: The transport response object
        request: The ``RequestContext`` that produced the response
    """

    def __init__(self, status: int, body: Any = None, response: Any = None,
                 request: Any = None, error_code: str = ErrorCodes.CLIENT_HTTP_ERROR):
        self.status = status
        self.body = body
        self.response = response
        self.request = request

        method = request.method if request is not None else None
        url = request.url if request is not None else None
        message = f"HTTP {status} for {method} {url}" if request is not None else f"HTTP {status}"
        server_message = _server_message(body)
        if server_message:
            message += f": {server_message}"

        super().__init__(message, ExceptionContext(
            error_code=error_code, context={"status": status},
        ), method, url)


class UnauthorizedError(HttpError):
    """Raised for HTTP 401 responses once recovery could not help."""

    def __init__(self, body: Any = None, response: Any = None, request: Any = None):
        super().__init__(401, body, response, request, ErrorCodes.CLIENT_UNAUTHORIZED)
        self.user_action = "Run: studdybuddy login --email <email>"


class AuthenticationError(ClientError):
    """Raised when the login endpoint rejects the supplied credentials."""

    def __init__(self, details: Optional[str] = None, http_code: Optional[int] = None):
        self.http_code = http_code

        message = "Authentication failed"
        if details:
            message += f" - {details}"

        technical_details = None
        if http_code == 401:
            technical_details = "HTTP 401 Unauthorized - Invalid credentials or refresh token"
        elif http_code == 404:
            technical_details = "HTTP 404 Not Found - Unknown user"
        elif http_code is not None:
            technical_details = f"HTTP {http_code}"

        suggestions = RecoverySuggestions.for_auth_error()
        context = {"http_code": http_code} if http_code else {}
        super().__init__(message, ExceptionContext(
            help_text=suggestions[0],
            error_code=ErrorCodes.CLIENT_AUTH_FAILED,
            context=context,
            user_action=suggestions[1].replace("Run: ", ""),
            technical_details=technical_details,
        ))


def _server_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        message = body.get("message")
        return str(message) if message else None
    return None

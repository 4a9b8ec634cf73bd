"""
Unit tests for the exception hierarchy.
"""

from pathlib import Path

from studdybuddy.exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationValidationError,
    ErrorCodes,
    ExceptionContext,
    HttpError,
    InvalidCommandError,
    NetworkFailure,
    NotLoggedInError,
    SessionStoreError,
    StuddyBuddyError,
    UnauthorizedError,
)
from studdybuddy.infrastructure.http.request import RequestContext


class TestStuddyBuddyError:
    """Test the base exception."""

    def test_message_and_correlation_id(self):
        error = StuddyBuddyError("boom")

        assert error.message == "boom"
        assert len(error.correlation_id) == 8
        assert "Error ID" in str(error)

    def test_context_fields_in_str(self):
        error = StuddyBuddyError("boom", ExceptionContext(
            help_text="try again", user_action="wait", technical_details="HTTP 503"
        ))

        assert str(error).splitlines() == [
            "boom",
            "Help: try again",
            "Action: wait",
            "Details: HTTP 503",
            f"Error ID: {error.correlation_id}",
        ]

    def test_to_dict(self):
        error = StuddyBuddyError("boom", ExceptionContext(
            error_code="X_1", context={"attempt": 2, "path": None}
        ))

        assert error.to_dict() == {
            "error_type": "StuddyBuddyError",
            "error_code": "X_1",
            "error_id": error.correlation_id,
            "attempt": 2,
        }


class TestClientErrors:
    """Test HTTP client errors."""

    def test_http_error_message(self):
        request = RequestContext("post", "http://host/tasks")
        error = HttpError(500, {"message": "server error"}, request=request)

        assert error.status == 500
        assert error.message == "HTTP 500 for POST http://host/tasks: server error"
        assert error.error_code == ErrorCodes.CLIENT_HTTP_ERROR
        assert isinstance(error, ClientError)

    def test_http_error_carries_request(self):
        request = RequestContext("get", "http://host/projects/42")
        error = HttpError(404, request=request)

        assert (error.method, error.url) == ("GET", "http://host/projects/42")
        assert error.to_dict()["status"] == 404
        assert error.to_dict()["url"] == "http://host/projects/42"

    def test_http_error_without_request(self):
        error = HttpError(502)

        assert error.message == "HTTP 502"
        assert error.method is None
        assert "url" not in error.to_dict()

    def test_unauthorized_is_http_error(self):
        error = UnauthorizedError({"message": "jwt expired"})

        assert isinstance(error, HttpError)
        assert error.status == 401
        assert error.error_code == ErrorCodes.CLIENT_UNAUTHORIZED
        assert "studdybuddy login" in error.user_action

    def test_network_failure(self):
        error = NetworkFailure("GET", "http://host/x", "connection refused", "http://host")

        assert "connection refused" in error.message
        assert error.technical_details == "connection refused"
        assert error.error_code == ErrorCodes.CLIENT_NETWORK_FAILURE

    def test_authentication_error(self):
        error = AuthenticationError("Invalid refresh token", 401)

        assert error.message == "Authentication failed - Invalid refresh token"
        assert error.http_code == 401
        assert "401" in error.technical_details


class TestOtherErrors:
    """Test configuration, session and CLI errors."""

    def test_validation_error_lists_errors(self):
        error = ConfigurationValidationError(["api.timeout: too small", "api.base_url: bad"])

        assert "api.timeout: too small" in error.message
        assert len(error.errors) == 2

    def test_session_store_error(self):
        error = SessionStoreError(Path("/tmp/session.json"), "invalid JSON")

        assert error.path == Path("/tmp/session.json")
        assert "/tmp/session.json" in error.help_text

    def test_cli_errors(self):
        assert "studdybuddy request --help" in InvalidCommandError("request", "bad").help_text
        assert NotLoggedInError().error_code == ErrorCodes.CLI_NOT_LOGGED_IN

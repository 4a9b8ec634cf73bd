"""
Unit tests for the shared recovery helpers.
"""

from http.cookiejar import CookieJar
from unittest.mock import Mock
from urllib.request import Request

from studdybuddy.auth import AuthUser
from studdybuddy.infrastructure.http.recovery import (
    BlockAllCookies,
    LoginRedirect,
    extract_access_token,
)


class TestLoginRedirect:
    """Test the default re-login action."""

    def test_navigates_to_login_path(self):
        navigate = Mock(return_value="done")
        redirect = LoginRedirect("/login", navigate)

        assert redirect() == "done"
        navigate.assert_called_once_with("/login")

    def test_without_navigate_only_logs(self):
        assert LoginRedirect("/login")() is None


class TestExtractAccessToken:
    """Test reading the new token from a refresh-login result."""

    def test_mapping_with_api_field_name(self):
        assert extract_access_token({"accessToken": "new1"}) == "new1"

    def test_mapping_with_python_field_name(self):
        assert extract_access_token({"access_token": "new1"}) == "new1"

    def test_auth_user(self):
        user = AuthUser.model_validate({"id": 1, "accessToken": "new1"})

        assert extract_access_token(user) == "new1"

    def test_missing_token(self):
        assert extract_access_token(None) is None
        assert extract_access_token({}) is None
        assert extract_access_token(AuthUser(id=1)) is None


class TestBlockAllCookies:
    """Test the cookie policy used without credentials."""

    def test_rejects_set_and_return(self):
        policy = BlockAllCookies()
        jar = CookieJar(policy=policy)
        request = Request("http://studdybuddy.test/")

        assert not policy.set_ok(Mock(), request)
        assert not policy.return_ok(Mock(), request)
        assert len(jar) == 0

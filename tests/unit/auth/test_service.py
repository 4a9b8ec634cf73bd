"""
Unit tests for the auth services.
"""

import json

import httpx
import pytest
import requests

from studdybuddy.auth import AsyncAuthService, AuthService, MemorySessionStore
from studdybuddy.exceptions import AuthenticationError, HttpError, NetworkFailure

from tests.helpers import BASE_URL, ScriptedSession, make_response, user_payload


def make_service(*outcomes, user=None):
    session = ScriptedSession(*outcomes)
    store = MemorySessionStore(user)
    return AuthService(BASE_URL, store, session=session), session, store


class TestTokenAccess:
    """Test reading the stored session."""

    def test_logged_out(self):
        service, _, _ = make_service()

        assert service.get_auth_user() is None
        assert not service.is_user_logged_in()
        assert service.get_access_token() is None
        assert service.get_refresh_token() is None

    def test_logged_in(self):
        service, _, _ = make_service(user=user_payload())

        assert service.is_user_logged_in()
        assert service.get_auth_user().name == "Ada"
        assert service.get_access_token() == "abc123"
        assert service.get_refresh_token() == "refresh1"

    def test_logout_clears_store(self):
        service, _, store = make_service(user=user_payload())

        service.logout()

        assert store.get() is None
        assert not service.is_user_logged_in()


class TestAuthService:
    """Test the blocking auth service endpoints."""

    def test_email_login_stores_user(self):
        service, session, store = make_service(make_response(200, user_payload("a1", "r1")))

        user = service.login(email="ada@example.com", password="secret")

        assert user.access_token == "a1"
        assert store.get()["refreshToken"] == "r1"
        sent = session.sent[0]
        assert sent["method"] == "POST"
        assert sent["url"] == f"{BASE_URL}/api/user/login"
        assert sent["json"] == {"type": "email", "email": "ada@example.com", "password": "secret"}

    def test_refresh_login_sends_only_refresh_token(self):
        service, session, store = make_service(
            make_response(200, user_payload("new1", "refresh2")), user=user_payload()
        )

        user = service.login(refresh_token="refresh1")

        assert session.sent[0]["json"] == {"refreshToken": "refresh1"}
        assert user.access_token == "new1"
        assert service.get_access_token() == "new1"
        assert service.get_refresh_token() == "refresh2"

    def test_explicit_login_type(self):
        service, session, _ = make_service(make_response(200, user_payload()))

        service.login(refresh_token="refresh1", login_type="refresh")

        assert session.sent[0]["json"] == {"type": "refresh", "refreshToken": "refresh1"}

    def test_rejected_login_raises_authentication_error(self):
        service, _, store = make_service(make_response(401, {"message": "Invalid refresh token"}))

        with pytest.raises(AuthenticationError) as exc_info:
            service.login(refresh_token="stale")

        assert exc_info.value.http_code == 401
        assert "Invalid refresh token" in exc_info.value.message
        assert store.get() is None

    def test_unreachable_api_raises_network_failure(self):
        service, _, _ = make_service(requests.ConnectionError("refused"))

        with pytest.raises(NetworkFailure):
            service.login(email="ada@example.com", password="secret")

    def test_google_login(self):
        service, session, store = make_service(make_response(200, user_payload("g1")))

        user = service.login_with_google({"credential": "google-jwt"})

        assert session.sent[0]["url"] == f"{BASE_URL}/auth/google-login"
        assert session.sent[0]["json"] == {"credential": "google-jwt"}
        assert user.access_token == "g1"
        assert store.get()["accessToken"] == "g1"

    def test_signup_does_not_log_in(self):
        service, session, store = make_service(make_response(201, {"message": "created"}))

        body = service.signup("Ada", "ada@example.com", "secret", project_id="p1")

        assert body == {"message": "created"}
        assert session.sent[0]["url"] == f"{BASE_URL}/api/user/sign-up"
        assert session.sent[0]["json"] == {
            "name": "Ada",
            "email": "ada@example.com",
            "password": "secret",
            "projectId": "p1",
        }
        assert store.get() is None

    def test_signup_conflict(self):
        service, _, _ = make_service(make_response(409, {"message": "User already exists"}))

        with pytest.raises(HttpError) as exc_info:
            service.signup("Ada", "ada@example.com", "secret")

        assert exc_info.value.status == 409

    def test_add_user_to_project(self):
        service, session, _ = make_service(make_response(200, {"ok": True}))

        assert service.add_user_to_project(7, "p1") == {"ok": True}
        assert session.sent[0]["url"] == f"{BASE_URL}/projects/addUserToProject"
        assert session.sent[0]["json"] == {"userId": 7, "projectId": "p1"}


class TestAsyncAuthService:
    """Test the async auth service over a mock transport."""

    @pytest.mark.asyncio
    async def test_refresh_login_stores_user(self):
        sent = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return httpx.Response(200, json=user_payload("new1", "refresh2"))

        store = MemorySessionStore(user_payload())
        service = AsyncAuthService(BASE_URL, store, transport=httpx.MockTransport(handler))

        user = await service.login(refresh_token="refresh1")
        await service.aclose()

        assert user.access_token == "new1"
        assert store.get()["refreshToken"] == "refresh2"
        assert str(sent[0].url) == f"{BASE_URL}/api/user/login"
        assert json.loads(sent[0].content) == {"refreshToken": "refresh1"}

    @pytest.mark.asyncio
    async def test_rejected_login(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(403, json={"message": "no"}))
        service = AsyncAuthService(BASE_URL, MemorySessionStore(), transport=transport)

        with pytest.raises(AuthenticationError):
            await service.login(email="ada@example.com", password="wrong")
        await service.aclose()

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        service = AsyncAuthService(BASE_URL, MemorySessionStore(), transport=httpx.MockTransport(handler))

        with pytest.raises(NetworkFailure):
            await service.add_user_to_project(7, "p1")
        await service.aclose()

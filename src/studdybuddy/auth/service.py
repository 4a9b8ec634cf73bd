"""
Auth service: login, sign-up and token access for the StuddyBuddy API.

The service talks to the API through a plain transport rather than the
authenticated client, so a refresh login never recurses into 401 recovery.
"""

from typing import Any, Dict, Optional

import httpx
import requests
from pydantic import ValidationError

from studdybuddy.constants import (
    ADD_USER_TO_PROJECT_ENDPOINT,
    DEFAULT_HEADERS,
    DEFAULT_TIMEOUT_SECONDS,
    GOOGLE_LOGIN_ENDPOINT,
    LOGIN_ENDPOINT,
    LOGIN_TYPE_EMAIL,
    SIGNUP_ENDPOINT,
)
from studdybuddy.core.security import mask_token
from studdybuddy.exceptions import AuthenticationError, HttpError, NetworkFailure
from studdybuddy.infrastructure.http.client import build_url
from studdybuddy.infrastructure.http.request import decode_body, is_success
from studdybuddy.logging import LoggingContext, get_logger

from .models import AuthUser
from .session import SessionStore


class BaseAuthService:
    """Session access and request/response shaping shared by both services."""

    def __init__(self, base_url: str, store: SessionStore,
                 timeout: int = DEFAULT_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.store = store
        self.timeout = timeout
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    def get_auth_user(self) -> Optional[AuthUser]:
        raw = self.store.get()
        if not raw:
            return None
        return AuthUser.model_validate(raw)

    def is_user_logged_in(self) -> bool:
        return self.get_auth_user() is not None

    def get_access_token(self) -> Optional[str]:
        user = self.get_auth_user()
        return user.access_token if user else None

    def get_refresh_token(self) -> Optional[str]:
        user = self.get_auth_user()
        return user.refresh_token if user else None

    def logout(self) -> None:
        self.store.clear()
        self.logger.info("Logged out")

    def _url(self, endpoint: str) -> str:
        return build_url(self.base_url, endpoint)

    @staticmethod
    def _login_payload(
        email: Optional[str],
        password: Optional[str],
        refresh_token: Optional[str],
        login_type: Optional[str],
    ) -> Dict[str, Any]:
        """Body for the login endpoint.

        Anything other than ``type == "email"`` is treated by the API as a
        refresh-token login, so ``type`` is only sent when it is known.
        """
        if login_type is None and email is not None:
            login_type = LOGIN_TYPE_EMAIL
        payload = {
            "type": login_type,
            "email": email,
            "password": password,
            "refreshToken": refresh_token,
        }
        return {key: value for key, value in payload.items() if value is not None}

    def _complete_login(self, response: Any) -> AuthUser:
        body = decode_body(response)
        if not is_success(response.status_code):
            message = body.get("message") if isinstance(body, dict) else None
            raise AuthenticationError(message, response.status_code)

        try:
            user = AuthUser.model_validate(body)
        except ValidationError as e:
            raise AuthenticationError("unexpected login response", response.status_code) from e

        self.store.set(user.to_storage())
        self.logger.debug(
            "Session stored",
            user_id=user.id,
            access=mask_token(user.access_token),
        )
        return user

    @staticmethod
    def _checked_body(response: Any) -> Any:
        body = decode_body(response)
        if not is_success(response.status_code):
            raise HttpError(response.status_code, body, response)
        return body

    @staticmethod
    def _signup_payload(name: str, email: str, password: str,
                        project_id: Optional[str]) -> Dict[str, Any]:
        payload = {"name": name, "email": email, "password": password}
        if project_id is not None:
            payload["projectId"] = project_id
        return payload


class AuthService(BaseAuthService):
    """Blocking auth service over ``requests``."""

    def __init__(self, base_url: str, store: SessionStore,
                 session: Optional[requests.Session] = None,
                 timeout: int = DEFAULT_TIMEOUT_SECONDS):
        super().__init__(base_url, store, timeout)
        self.session = session or requests.Session()
        for name, value in DEFAULT_HEADERS.items():
            self.session.headers.setdefault(name, value)

    def _post(self, endpoint: str, payload: Dict[str, Any]) -> requests.Response:
        url = self._url(endpoint)
        self.logger.debug(f"POST {url}")
        try:
            return self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise NetworkFailure("POST", url, str(e), self.base_url) from e

    def signup(self, name: str, email: str, password: str,
               project_id: Optional[str] = None) -> Any:
        """Register a new account. The new user is not logged in."""
        response = self._post(SIGNUP_ENDPOINT, self._signup_payload(name, email, password, project_id))
        return self._checked_body(response)

    def login(self, *, email: Optional[str] = None, password: Optional[str] = None,
              refresh_token: Optional[str] = None, login_type: Optional[str] = None) -> AuthUser:
        """Log in with email/password or a refresh token and store the session.

        Raises:
            AuthenticationError: The API rejected the credentials
            NetworkFailure: The API could not be reached
        """
        with LoggingContext(entry_msg="Logging in ...", success_msg="Logged in.",
                            failure_msg="Login failed", logger=self.logger):
            payload = self._login_payload(email, password, refresh_token, login_type)
            return self._complete_login(self._post(LOGIN_ENDPOINT, payload))

    def login_with_google(self, google_payload: Dict[str, Any]) -> AuthUser:
        with LoggingContext(entry_msg="Logging in with Google ...", success_msg="Logged in.",
                            failure_msg="Google login failed", logger=self.logger):
            return self._complete_login(self._post(GOOGLE_LOGIN_ENDPOINT, google_payload))

    def add_user_to_project(self, user_id: Any, project_id: Any) -> Any:
        payload = {"userId": user_id, "projectId": project_id}
        body = self._checked_body(self._post(ADD_USER_TO_PROJECT_ENDPOINT, payload))
        self.logger.info("User added to project", user_id=user_id, project_id=project_id)
        return body

    def close(self) -> None:
        self.session.close()


class AsyncAuthService(BaseAuthService):
    """Async auth service over ``httpx.AsyncClient``."""

    def __init__(self, base_url: str, store: SessionStore,
                 client: Optional[httpx.AsyncClient] = None,
                 timeout: int = DEFAULT_TIMEOUT_SECONDS,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(base_url, store, timeout)
        self.client = client or httpx.AsyncClient(
            headers=DEFAULT_HEADERS, timeout=timeout, transport=transport
        )

    async def _post(self, endpoint: str, payload: Dict[str, Any]) -> httpx.Response:
        url = self._url(endpoint)
        self.logger.debug(f"POST {url}")
        try:
            return await self.client.post(url, json=payload)
        except httpx.TransportError as e:
            raise NetworkFailure("POST", url, str(e), self.base_url) from e

    async def signup(self, name: str, email: str, password: str,
                     project_id: Optional[str] = None) -> Any:
        response = await self._post(SIGNUP_ENDPOINT, self._signup_payload(name, email, password, project_id))
        return self._checked_body(response)

    async def login(self, *, email: Optional[str] = None, password: Optional[str] = None,
                    refresh_token: Optional[str] = None,
                    login_type: Optional[str] = None) -> AuthUser:
        with LoggingContext(entry_msg="Logging in ...", success_msg="Logged in.",
                            failure_msg="Login failed", logger=self.logger):
            payload = self._login_payload(email, password, refresh_token, login_type)
            return self._complete_login(await self._post(LOGIN_ENDPOINT, payload))

    async def login_with_google(self, google_payload: Dict[str, Any]) -> AuthUser:
        with LoggingContext(entry_msg="Logging in with Google ...", success_msg="Logged in.",
                            failure_msg="Google login failed", logger=self.logger):
            return self._complete_login(await self._post(GOOGLE_LOGIN_ENDPOINT, google_payload))

    async def add_user_to_project(self, user_id: Any, project_id: Any) -> Any:
        payload = {"userId": user_id, "projectId": project_id}
        body = self._checked_body(await self._post(ADD_USER_TO_PROJECT_ENDPOINT, payload))
        self.logger.info("User added to project", user_id=user_id, project_id=project_id)
        return body

    async def aclose(self) -> None:
        await self.client.aclose()

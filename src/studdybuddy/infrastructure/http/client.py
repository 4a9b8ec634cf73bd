"""
Blocking HTTP clients built on ``requests``.

``HttpClient`` issues requests against a base URL and turns failures into
``NetworkFailure`` / ``HttpError``. ``AuthenticatedHttpClient`` adds bearer
injection and a single refresh-and-replay on the first 401 of each call.
"""

import asyncio
import inspect
from typing import Any, Callable, Dict, Optional, Set
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from studdybuddy.constants import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_LOGIN_PATH,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_STATUS_UNAUTHORIZED,
)
from studdybuddy.exceptions import ClientError, HttpError, NetworkFailure, UnauthorizedError
from studdybuddy.logging import get_logger

from .protocol import TokenSource
from .recovery import AuthRecoveryMixin, BlockAllCookies, LoginRedirect, extract_access_token
from .request import RequestContext, RequestState, decode_body, is_success


def build_url(base_url: str, endpoint: str) -> str:
    """Build full URL from endpoint."""
    if endpoint.startswith(("http://", "https://")):
        return endpoint
    return urljoin(base_url + "/", endpoint.lstrip("/"))


def error_for_response(response: Any, request: RequestContext) -> HttpError:
    body = decode_body(response)
    if response.status_code == HTTP_STATUS_UNAUTHORIZED:
        return UnauthorizedError(body, response, request)
    return HttpError(response.status_code, body, response, request)


class HttpClient:
    """Base HTTP client bound to one API base URL."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
        with_credentials: bool = True,
    ):
        """Initialize HTTP client with configuration.

        Args:
            base_url: Base URL for all requests
            session: Optional existing session to use
            timeout: Request timeout in seconds
            max_retries: Transport-level retries on connection errors
            backoff_factor: Backoff factor for transport retries
            with_credentials: Keep cookies set by the API and send them back
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.with_credentials = with_credentials
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}").with_context(
            base_url=self.base_url
        )

        self.session = session or self._create_session(max_retries, backoff_factor)
        if not with_credentials:
            self.session.cookies.set_policy(BlockAllCookies())

    def _create_session(self, max_retries: int, backoff_factor: float) -> requests.Session:
        """Create a session with connection retries."""
        session = requests.Session()

        # status codes are never retried here; 401 handling belongs to the client
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=backoff_factor,
            status_forcelist=[],
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> requests.Response:
        """Send a request and return the 2xx response.

        Raises:
            NetworkFailure: No response was received
            HttpError: The server answered with a non-2xx status
        """
        request = RequestContext(
            method=method,
            url=build_url(self.base_url, endpoint),
            headers=dict(headers or {}),
            params=params,
            json=json,
            data=data,
            timeout=timeout,
        )
        return self.send(request)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> requests.Response:
        return self.request("GET", endpoint, params=params, **kwargs)

    def post(self, endpoint: str, json: Any = None, **kwargs) -> requests.Response:
        return self.request("POST", endpoint, json=json, **kwargs)

    def put(self, endpoint: str, json: Any = None, **kwargs) -> requests.Response:
        return self.request("PUT", endpoint, json=json, **kwargs)

    def delete(self, endpoint: str, **kwargs) -> requests.Response:
        return self.request("DELETE", endpoint, **kwargs)

    def send(self, request: RequestContext) -> requests.Response:
        """Run ``request`` through the pre-send hook, transport and failure hook."""
        self._before_send(request)
        request.transition(RequestState.SENT)
        try:
            response = self._dispatch(request)
        except ClientError as error:
            return self._on_failure(error, request)
        request.transition(RequestState.SUCCESS)
        return response

    def _before_send(self, request: RequestContext) -> None:
        """Pre-send hook."""

    def _on_failure(self, error: ClientError, request: RequestContext) -> requests.Response:
        """Failure hook; the base client propagates everything."""
        request.transition(RequestState.FAILED_OTHER)
        raise error

    def _dispatch(self, request: RequestContext) -> requests.Response:
        self.logger.debug(f"{request.method} {request.url}")
        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.params,
                json=request.json,
                data=request.data,
                headers=request.transport_headers(),
                timeout=request.timeout or self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkFailure(request.method, request.url, str(e), self.base_url) from e

        self._log_response(response)
        if not is_success(response.status_code):
            raise error_for_response(response, request)
        return response

    def _log_response(self, response: requests.Response) -> None:
        self.logger.debug(
            f"Response: {response.status_code} - {len(response.content)} bytes"
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class AuthenticatedHttpClient(AuthRecoveryMixin, HttpClient):
    """HTTP client that attaches the session's bearer token and refreshes it once.

    On the first 401 of a call the refresh token is exchanged for a new
    access token through ``auth.login`` and the call is replayed with it.
    When that is impossible ``on_unrecoverable_auth_failure`` fires and the
    original 401 is raised. A replayed call is never recovered again.
    """

    def __init__(
        self,
        base_url: str,
        auth: TokenSource,
        on_unrecoverable_auth_failure: Optional[Callable[[], Any]] = None,
        login_path: str = DEFAULT_LOGIN_PATH,
        **kwargs,
    ):
        """Initialize authenticated HTTP client.

        Args:
            base_url: Base URL for all requests
            auth: Source of access/refresh tokens and refresh-login
            on_unrecoverable_auth_failure: Force re-login callback
            login_path: Login location for the default callback
            **kwargs: Additional arguments for HttpClient
        """
        super().__init__(base_url, **kwargs)
        self.auth = auth
        self._background_tasks: Set[asyncio.Future] = set()
        self.on_unrecoverable_auth_failure = (
            on_unrecoverable_auth_failure or LoginRedirect(login_path)
        )

    def _before_send(self, request: RequestContext) -> None:
        self._inject_token(request)

    def _on_failure(self, error: ClientError, request: RequestContext) -> requests.Response:
        if not self._starts_recovery(error, request):
            raise error

        refresh_token = self.auth.get_refresh_token()
        if not refresh_token:
            self._abandon_recovery(request, "no refresh token")
            raise error

        request.transition(RequestState.REFRESHING)
        try:
            access_token = extract_access_token(self.auth.login(refresh_token=refresh_token))
        except Exception as refresh_error:
            self._abandon_recovery(request, f"refresh failed: {refresh_error}")
            raise error

        if not access_token:
            self._abandon_recovery(request, "refresh returned no access token")
            raise error

        self._prepare_replay(request, access_token)
        return self.send(request)

    def _detach(self, result: Any) -> None:
        if not inspect.isawaitable(result):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # no loop to hand it to, so the re-login finishes before the 401 is raised
            try:
                asyncio.run(_wait_for(result))
            except Exception as e:
                self.logger.exception(f"Re-login callback failed: {e}", error_type=type(e).__name__)
        else:
            self._schedule(result)


async def _wait_for(awaitable: Any) -> Any:
    return await awaitable

"""
Event-loop HTTP clients built on ``httpx.AsyncClient``.

Same contract as ``client.py``: every await point (send, refresh login,
replay) suspends only the calling task, and each call carries its own
``RequestContext`` so concurrent 401s recover independently.
"""

import asyncio
import inspect
from http.cookiejar import CookieJar
from typing import Any, Callable, Dict, Optional, Set

import httpx

from studdybuddy.constants import (
    DEFAULT_LOGIN_PATH,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
)
from studdybuddy.exceptions import ClientError, NetworkFailure
from studdybuddy.logging import get_logger

from .client import build_url, error_for_response
from .protocol import AsyncTokenSource
from .recovery import AuthRecoveryMixin, BlockAllCookies, LoginRedirect, extract_access_token
from .request import RequestContext, RequestState, is_success


class AsyncHttpClient:
    """Async counterpart of ``HttpClient``."""

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        with_credentials: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize async HTTP client.

        Args:
            base_url: Base URL for all requests
            client: Optional existing ``httpx.AsyncClient``
            timeout: Request timeout in seconds
            max_retries: Transport-level retries on connection errors
            with_credentials: Keep cookies set by the API and send them back
            transport: Transport for a newly created client (tests pass
                ``httpx.MockTransport``)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.with_credentials = with_credentials
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}").with_context(
            base_url=self.base_url
        )
        self.client = client or self._create_client(max_retries, transport)

    def _create_client(
        self, max_retries: int, transport: Optional[httpx.AsyncBaseTransport]
    ) -> httpx.AsyncClient:
        cookies = None
        if not self.with_credentials:
            cookies = httpx.Cookies(CookieJar(policy=BlockAllCookies()))
        return httpx.AsyncClient(
            cookies=cookies,
            timeout=self.timeout,
            follow_redirects=True,
            transport=transport or httpx.AsyncHTTPTransport(retries=max_retries),
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
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
        return await self.send(request)

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> httpx.Response:
        return await self.request("GET", endpoint, params=params, **kwargs)

    async def post(self, endpoint: str, json: Any = None, **kwargs) -> httpx.Response:
        return await self.request("POST", endpoint, json=json, **kwargs)

    async def put(self, endpoint: str, json: Any = None, **kwargs) -> httpx.Response:
        return await self.request("PUT", endpoint, json=json, **kwargs)

    async def delete(self, endpoint: str, **kwargs) -> httpx.Response:
        return await self.request("DELETE", endpoint, **kwargs)

    async def send(self, request: RequestContext) -> httpx.Response:
        self._before_send(request)
        request.transition(RequestState.SENT)
        try:
            response = await self._dispatch(request)
        except ClientError as error:
            return await self._on_failure(error, request)
        request.transition(RequestState.SUCCESS)
        return response

    def _before_send(self, request: RequestContext) -> None:
        """Pre-send hook."""

    async def _on_failure(self, error: ClientError, request: RequestContext) -> httpx.Response:
        request.transition(RequestState.FAILED_OTHER)
        raise error

    async def _dispatch(self, request: RequestContext) -> httpx.Response:
        self.logger.debug(f"{request.method} {request.url}")

        kwargs: Dict[str, Any] = {"params": request.params, "headers": request.transport_headers()}
        if request.json is not None:
            kwargs["json"] = request.json
        if isinstance(request.data, (bytes, str)):
            kwargs["content"] = request.data
        elif request.data is not None:
            kwargs["data"] = request.data
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        try:
            response = await self.client.request(request.method, request.url, **kwargs)
        except httpx.TransportError as e:
            raise NetworkFailure(request.method, request.url, str(e), self.base_url) from e

        self.logger.debug(
            f"Response: {response.status_code} - {len(response.content)} bytes"
        )
        if not is_success(response.status_code):
            raise error_for_response(response, request)
        return response

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()


class AsyncAuthenticatedHttpClient(AuthRecoveryMixin, AsyncHttpClient):
    """Async client with bearer injection and one refresh-and-replay per call.

    A coroutine returned by ``on_unrecoverable_auth_failure`` is scheduled as
    a background task and never awaited by the failing call.
    """

    def __init__(
        self,
        base_url: str,
        auth: AsyncTokenSource,
        on_unrecoverable_auth_failure: Optional[Callable[[], Any]] = None,
        login_path: str = DEFAULT_LOGIN_PATH,
        **kwargs,
    ):
        super().__init__(base_url, **kwargs)
        self.auth = auth
        self.on_unrecoverable_auth_failure = (
            on_unrecoverable_auth_failure or LoginRedirect(login_path)
        )
        self._background_tasks: Set[asyncio.Future] = set()

    def _before_send(self, request: RequestContext) -> None:
        self._inject_token(request)

    async def _on_failure(self, error: ClientError, request: RequestContext) -> httpx.Response:
        if not self._starts_recovery(error, request):
            raise error

        refresh_token = self.auth.get_refresh_token()
        if not refresh_token:
            self._abandon_recovery(request, "no refresh token")
            raise error

        request.transition(RequestState.REFRESHING)
        try:
            result = self.auth.login(refresh_token=refresh_token)
            if inspect.isawaitable(result):
                result = await result
            access_token = extract_access_token(result)
        except Exception as refresh_error:
            self._abandon_recovery(request, f"refresh failed: {refresh_error}")
            raise error

        if not access_token:
            self._abandon_recovery(request, "refresh returned no access token")
            raise error

        self._prepare_replay(request, access_token)
        return await self.send(request)

    def _detach(self, result: Any) -> None:
        if inspect.isawaitable(result):
            self._schedule(result)

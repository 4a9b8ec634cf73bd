"""HTTP infrastructure components."""

from .async_client import AsyncAuthenticatedHttpClient, AsyncHttpClient
from .client import AuthenticatedHttpClient, HttpClient, build_url
from .protocol import AsyncTokenSource, TokenSource
from .recovery import LoginRedirect
from .request import RequestContext, RequestState

__all__ = [
    "HttpClient",
    "AuthenticatedHttpClient",
    "AsyncHttpClient",
    "AsyncAuthenticatedHttpClient",
    "TokenSource",
    "AsyncTokenSource",
    "LoginRedirect",
    "RequestContext",
    "RequestState",
    "build_url",
]

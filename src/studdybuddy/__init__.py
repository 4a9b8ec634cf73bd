"""
StuddyBuddy API client

Python client for the StuddyBuddy study-planner API. The authenticated
clients attach the stored bearer token to every call and, on the first 401
of a call, exchange the refresh token for a new access token and replay the
call once.

Architecture Overview:
- auth: Session stores, user model and the login/sign-up service
- infrastructure.http: Sync (requests) and async (httpx) clients
- core.config: Pydantic configuration with TOML and environment overrides
- logging: Structured logging setup
- exceptions: Error hierarchy surfaced to callers
- cli: ``studdybuddy`` command line
"""

__version__ = "0.2.0"

from .auth import AsyncAuthService, AuthService, AuthUser, FileSessionStore, MemorySessionStore
from .core.config import ClientConfig, ConfigManager
from .exceptions import HttpError, NetworkFailure, StuddyBuddyError, UnauthorizedError
from .factory import ClientFactory
from .infrastructure.http import (
    AsyncAuthenticatedHttpClient,
    AuthenticatedHttpClient,
    LoginRedirect,
    RequestContext,
)

__all__ = [
    "AuthenticatedHttpClient",
    "AsyncAuthenticatedHttpClient",
    "LoginRedirect",
    "RequestContext",
    "AuthService",
    "AsyncAuthService",
    "AuthUser",
    "FileSessionStore",
    "MemorySessionStore",
    "ClientConfig",
    "ConfigManager",
    "ClientFactory",
    "StuddyBuddyError",
    "NetworkFailure",
    "HttpError",
    "UnauthorizedError",
]

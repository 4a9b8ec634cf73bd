"""Authentication: session stores, user model and auth services."""

from .models import AuthUser
from .service import AsyncAuthService, AuthService
from .session import FileSessionStore, MemorySessionStore, SessionStore

__all__ = [
    "AuthUser",
    "AuthService",
    "AsyncAuthService",
    "SessionStore",
    "MemorySessionStore",
    "FileSessionStore",
]

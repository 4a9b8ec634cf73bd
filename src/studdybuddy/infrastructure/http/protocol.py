"""
Interfaces the authenticated clients consume.
"""

from typing import Any, Awaitable, Optional, Protocol, runtime_checkable


@runtime_checkable
class TokenSource(Protocol):
    """Read access to the current session's tokens plus refresh-login.

    ``login`` is expected to persist the refreshed session itself; the
    client only reads the access token it returns.
    """

    def get_access_token(self) -> Optional[str]:
        ...

    def get_refresh_token(self) -> Optional[str]:
        ...

    def login(self, *, refresh_token: str) -> Any:
        ...


@runtime_checkable
class AsyncTokenSource(Protocol):
    """``TokenSource`` whose refresh-login is a coroutine."""

    def get_access_token(self) -> Optional[str]:
        ...

    def get_refresh_token(self) -> Optional[str]:
        ...

    def login(self, *, refresh_token: str) -> Awaitable[Any]:
        ...

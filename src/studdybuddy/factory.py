"""
Build session stores, auth services and clients from a ``ClientConfig``.
"""

from typing import Any, Callable, Optional

from .auth import AsyncAuthService, AuthService, FileSessionStore, MemorySessionStore, SessionStore
from .core.config import ClientConfig, SessionStoreType
from .infrastructure.http import AsyncAuthenticatedHttpClient, AuthenticatedHttpClient


def create_session_store(config: ClientConfig) -> SessionStore:
    if config.session.store == SessionStoreType.MEMORY:
        return MemorySessionStore()
    return FileSessionStore(config.session.file_path, key=config.session.key)


class ClientFactory:
    """Wires a session store, auth service and authenticated client together.

    All objects built by one factory share the same session store, so a
    refresh performed by the client is visible to later calls.
    """

    def __init__(self, config: ClientConfig, store: Optional[SessionStore] = None):
        self.config = config
        self.store = store or create_session_store(config)

    def create_auth_service(self) -> AuthService:
        return AuthService(self.config.api.base_url, self.store, timeout=self.config.api.timeout)

    def create_async_auth_service(self, **kwargs) -> AsyncAuthService:
        return AsyncAuthService(
            self.config.api.base_url, self.store, timeout=self.config.api.timeout, **kwargs
        )

    def create_client(
        self,
        auth: Optional[AuthService] = None,
        on_unrecoverable_auth_failure: Optional[Callable[[], Any]] = None,
    ) -> AuthenticatedHttpClient:
        api = self.config.api
        return AuthenticatedHttpClient(
            api.base_url,
            auth or self.create_auth_service(),
            on_unrecoverable_auth_failure=on_unrecoverable_auth_failure,
            login_path=api.login_path,
            timeout=api.timeout,
            max_retries=api.max_retries,
            with_credentials=api.with_credentials,
        )

    def create_async_client(
        self,
        auth: Optional[AsyncAuthService] = None,
        on_unrecoverable_auth_failure: Optional[Callable[[], Any]] = None,
        **kwargs,
    ) -> AsyncAuthenticatedHttpClient:
        api = self.config.api
        return AsyncAuthenticatedHttpClient(
            api.base_url,
            auth or self.create_async_auth_service(),
            on_unrecoverable_auth_failure=on_unrecoverable_auth_failure,
            login_path=api.login_path,
            timeout=api.timeout,
            max_retries=api.max_retries,
            with_credentials=api.with_credentials,
            **kwargs,
        )

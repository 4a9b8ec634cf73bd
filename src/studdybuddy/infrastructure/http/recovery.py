"""
Token refresh-and-retry protocol shared by the sync and async clients.

The decision logic lives here; each client supplies the I/O (refresh login
and replay) in its own calling convention.
"""

import asyncio
from collections.abc import Mapping
from http import cookiejar
from typing import Any, Callable, Optional, Set

from studdybuddy.constants import DEFAULT_LOGIN_PATH, HTTP_STATUS_UNAUTHORIZED
from studdybuddy.exceptions import ClientError, HttpError
from studdybuddy.logging import StuddyBuddyLogger, get_logger

from .request import RequestContext, RequestState

logger = get_logger(__name__)


class LoginRedirect:
    """Default force re-login action.

    Logs the expiry and hands the login path to ``navigate`` when one is
    given (a UI router, a CLI prompt, a webbrowser opener).
    """

    def __init__(self, login_path: str = DEFAULT_LOGIN_PATH,
                 navigate: Optional[Callable[[str], Any]] = None):
        self.login_path = login_path
        self.navigate = navigate

    def __call__(self) -> Any:
        logger.warning("Redirecting to login", login_path=self.login_path)
        if self.navigate is not None:
            return self.navigate(self.login_path)
        return None


class BlockAllCookies(cookiejar.CookiePolicy):
    """Cookie policy used when ``with_credentials`` is off."""

    return_ok = set_ok = domain_return_ok = path_return_ok = (
        lambda self, *args, **kwargs: False
    )
    netscape = True
    rfc2965 = hide_cookie2 = False


def extract_access_token(login_result: Any) -> Optional[str]:
    """Pull the new access token out of whatever ``login`` returned."""
    if login_result is None:
        return None
    if isinstance(login_result, Mapping):
        return login_result.get("accessToken") or login_result.get("access_token")
    return getattr(login_result, "access_token", None)


class AuthRecoveryMixin:
    """Bearer injection and 401 recovery bookkeeping.

    Expects ``auth``, ``on_unrecoverable_auth_failure``, ``logger`` and
    ``_background_tasks`` on the host class.
    """

    auth: Any
    on_unrecoverable_auth_failure: Callable[[], Any]
    logger: StuddyBuddyLogger
    _background_tasks: Set[asyncio.Future]

    def _inject_token(self, request: RequestContext) -> None:
        # a replay already carries the token minted by the refresh
        if request.retried:
            return
        access_token = self.auth.get_access_token()
        if access_token:
            request.set_bearer(access_token)

    def _starts_recovery(self, error: ClientError, request: RequestContext) -> bool:
        """Classify a failure; True only for a first-attempt 401."""
        if (
            isinstance(error, HttpError)
            and error.status == HTTP_STATUS_UNAUTHORIZED
            and not request.retried
        ):
            request.transition(RequestState.FAILED_401_FIRST)
            self.logger.warning("Session expired", method=request.method, url=request.url)
            return True

        request.transition(
            RequestState.FAILED_FINAL if request.retried else RequestState.FAILED_OTHER
        )
        return False

    def _prepare_replay(self, request: RequestContext, access_token: str) -> None:
        request.retried = True
        request.set_bearer(access_token)
        request.transition(RequestState.RETRY_SENT)
        self.logger.info(
            "Access token refreshed, replaying request",
            method=request.method, url=request.url,
        )

    def _abandon_recovery(self, request: RequestContext, reason: str) -> None:
        request.transition(RequestState.REFRESH_FAILED)
        request.transition(RequestState.FAILED_FINAL)
        self.logger.warning(
            "Session could not be refreshed",
            reason=reason, method=request.method, url=request.url,
        )
        self._force_relogin()

    def _force_relogin(self) -> None:
        try:
            result = self.on_unrecoverable_auth_failure()
        except Exception as e:
            # the caller still receives the original HTTP error
            self.logger.exception(f"Re-login callback failed: {e}", error_type=type(e).__name__)
            return
        self._detach(result)

    def _detach(self, result: Any) -> None:
        """Finish or schedule an awaitable callback result; per client."""
        raise NotImplementedError

    def _schedule(self, awaitable: Any) -> None:
        """Run an awaitable callback result on the current loop without waiting."""
        task = asyncio.ensure_future(awaitable)
        self._background_tasks.add(task)
        task.add_done_callback(self._relogin_finished)

    def _relogin_finished(self, task: asyncio.Future) -> None:
        self._background_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error(f"Re-login callback failed: {task.exception()}")

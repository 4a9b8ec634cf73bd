"""
Per-call request context.

A ``RequestContext`` is created for every outgoing call and threaded
through the interceptor chain. It owns the ``retried`` flag, so two calls
in flight never share retry state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from studdybuddy.constants import AUTHORIZATION_HEADER, BEARER_PREFIX, DEFAULT_HEADERS


class RequestState(str, Enum):
    """Lifecycle of a single call through the authenticated client."""

    INIT = "init"
    SENT = "sent"
    SUCCESS = "success"
    FAILED_401_FIRST = "failed_401_first"
    FAILED_OTHER = "failed_other"
    REFRESHING = "refreshing"
    RETRY_SENT = "retry_sent"
    REFRESH_FAILED = "refresh_failed"
    FAILED_FINAL = "failed_final"


TERMINAL_STATES = frozenset(
    {RequestState.SUCCESS, RequestState.FAILED_OTHER, RequestState.FAILED_FINAL}
)


@dataclass
class RequestContext:
    """An outgoing HTTP call and its retry bookkeeping."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    json: Any = None
    data: Any = None
    timeout: Optional[float] = None
    retried: bool = False
    state: RequestState = RequestState.INIT
    history: List[RequestState] = field(default_factory=list)

    def __post_init__(self):
        self.method = self.method.upper()
        self.history.append(self.state)

    def transition(self, state: RequestState) -> None:
        self.state = state
        self.history.append(state)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def authorization(self) -> Optional[str]:
        return self.headers.get(AUTHORIZATION_HEADER)

    def set_bearer(self, token: str) -> None:
        self.headers[AUTHORIZATION_HEADER] = f"{BEARER_PREFIX}{token}"

    def transport_headers(self) -> Dict[str, str]:
        """Headers to send, with the JSON defaults under the caller's own.

        A form or raw ``data`` body gets no default Content-Type; the HTTP
        library sets the right one for it.
        """
        if self.data is not None and self.json is None:
            return dict(self.headers)
        given = {name.lower() for name in self.headers}
        headers = {k: v for k, v in DEFAULT_HEADERS.items() if k.lower() not in given}
        headers.update(self.headers)
        return headers


def decode_body(response: Any) -> Any:
    """Decode a response body as JSON, falling back to text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300

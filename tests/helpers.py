"""
Test doubles shared across the unit tests.
"""

import json
from typing import Any, Dict, List, Optional

import requests

BASE_URL = "http://studdybuddy.test"


def make_response(status: int, body: Any = None, url: str = BASE_URL) -> requests.Response:
    """Build a real ``requests.Response`` with a JSON (or text) body."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


class ScriptedSession(requests.Session):
    """``requests.Session`` that answers from a script and records what was sent.

    Headers are copied at send time because the client reuses the same
    mapping when it replays a request.
    """

    def __init__(self, *outcomes):
        super().__init__()
        self.outcomes: List[Any] = list(outcomes)
        self.sent: List[Dict[str, Any]] = []

    def request(self, method, url, **kwargs):
        self.sent.append({
            "method": method,
            "url": url,
            "params": kwargs.get("params"),
            "json": kwargs.get("json"),
            "headers": dict(kwargs.get("headers") or {}),
            "timeout": kwargs.get("timeout"),
        })
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def user_payload(access: str = "abc123", refresh: Optional[str] = "refresh1") -> Dict[str, Any]:
    payload = {"id": 7, "name": "Ada", "email": "ada@example.com", "accessToken": access}
    if refresh is not None:
        payload["refreshToken"] = refresh
    return payload

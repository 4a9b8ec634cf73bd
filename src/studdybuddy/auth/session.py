"""
Session stores holding the logged-in user record.

The store is the only place the token pair lives; the auth service reads
and writes it and the HTTP clients only ever go through the service.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

from studdybuddy.constants import DEFAULT_SESSION_KEY, SESSION_FILE_MODE
from studdybuddy.exceptions import SessionStoreError
from studdybuddy.logging import get_logger

logger = get_logger(__name__)


class SessionStore(ABC):
    """Get/set/clear access to the stored user record."""

    @abstractmethod
    def get(self) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def set(self, user: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class MemorySessionStore(SessionStore):
    """Process-local store, handy for scripts and tests."""

    def __init__(self, user: Optional[Dict[str, Any]] = None):
        self._user = dict(user) if user else None

    def get(self) -> Optional[Dict[str, Any]]:
        return dict(self._user) if self._user else None

    def set(self, user: Dict[str, Any]) -> None:
        self._user = dict(user)

    def clear(self) -> None:
        self._user = None


class FileSessionStore(SessionStore):
    """JSON file keyed by ``key``, readable by the owner only.

    Other keys in the file are left untouched so several profiles can
    share one file.
    """

    def __init__(self, path: Path, key: str = DEFAULT_SESSION_KEY):
        self.path = Path(path).expanduser()
        self.key = key

    def get(self) -> Optional[Dict[str, Any]]:
        user = self._read().get(self.key)
        if user is not None and not isinstance(user, dict):
            raise SessionStoreError(self.path, f"entry '{self.key}' is not an object")
        return user

    def set(self, user: Dict[str, Any]) -> None:
        data = self._read()
        data[self.key] = user
        self._write(data)
        logger.debug("Session saved", path=str(self.path))

    def clear(self) -> None:
        data = self._read()
        if data.pop(self.key, None) is None:
            return
        if data:
            self._write(data)
        else:
            self.path.unlink(missing_ok=True)
        logger.debug("Session cleared", path=str(self.path))

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise SessionStoreError(self.path, f"invalid JSON: {e}") from e
        except OSError as e:
            raise SessionStoreError(self.path, f"cannot read: {e}") from e
        if not isinstance(data, dict):
            raise SessionStoreError(self.path, "top-level value is not an object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SESSION_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise SessionStoreError(self.path, f"cannot write: {e}") from e

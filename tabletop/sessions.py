"""Connected user sessions and the events they send."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any


@dataclass
class UserSession:
    """One connected websocket user."""

    id: str
    name: str = ""
    connection: Any = None
    room_id: str = ""
    is_host: bool = False


@dataclass
class SocketEvent:
    """A message received over a websocket."""

    type: str = ""
    room_id: str = ""
    name: str = ""
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> SocketEvent:
        """Build an event from decoded JSON; raise ValueError on a wrong shape."""
        if not isinstance(data, dict):
            raise ValueError("event must be a JSON object")
        fields = {}
        for key, attr in (("type", "type"), ("roomId", "room_id"), ("name", "name")):
            value = data.get(key) or ""
            if not isinstance(value, str):
                raise ValueError(f"field {key!r} must be a string")
            fields[attr] = value
        payload = data.get("data") or {}
        if not isinstance(payload, dict):
            raise ValueError("field 'data' must be an object")
        return cls(data=payload, **fields)


class SessionRegistry:
    """Thread-safe registry of connected sessions keyed by session id."""

    def __init__(self) -> None:
        self._sessions: dict[str, UserSession] = {}
        self._lock = threading.Lock()

    def register(self, user: UserSession) -> None:
        with self._lock:
            self._sessions[user.id] = user

    def unregister(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def get(self, session_id: str) -> UserSession | None:
        with self._lock:
            return self._sessions.get(session_id)

    def all(self) -> list[UserSession]:
        with self._lock:
            return list(self._sessions.values())
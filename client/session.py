"""
client/session.py -- Local persistence of the client session.

The session file is a small JSON object with two keys, matching what the
browser client keeps in localStorage:

  {"token": "<jwt>", "currentuser": {"username": ..., "role": ..., "company": ...}}

It is created on successful login or registration, deleted on logout, and
never refreshed. has_session() only checks that "currentuser" is present;
it does not look inside the token (see client/guard.py).
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger("profiledir.client.session")

TOKEN_KEY = "token"
USER_KEY = "currentuser"


@dataclass(frozen=True)
class SessionUser:
    """Client copy of the server's public user view."""

    username: str
    role: str
    company: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionUser:
        return cls(username=str(data["username"]), role=str(data["role"]), company=str(data["company"]))


@dataclass(frozen=True)
class ClientSessionState:
    token: str
    user: SessionUser


class LocalSessionStore:
    """JSON-file session store.

    Usage:
        store = LocalSessionStore(Path("~/.profile_directory_session.json").expanduser())
        store.save(ClientSessionState(token, SessionUser("alice", "User", "Company")))
        store.has_session()   # True
        store.clear()
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def has_session(self) -> bool:
        """True if a stored user entry exists, whatever its contents."""
        return self._read().get(USER_KEY) is not None

    def load(self) -> Optional[ClientSessionState]:
        """Return the stored session, or None if absent or incomplete."""
        data = self._read()
        token = data.get(TOKEN_KEY)
        user = data.get(USER_KEY)
        if not isinstance(token, str) or not isinstance(user, dict):
            return None
        try:
            return ClientSessionState(token=token, user=SessionUser.from_dict(user))
        except KeyError:
            return None

    def save(self, state: ClientSessionState) -> None:
        """Write the session, readable by the current user only."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = {TOKEN_KEY: state.token, USER_KEY: asdict(state.user)}
        tmp.write_text(json.dumps(payload), encoding="utf-8")
        os.chmod(tmp, 0o600)
        os.replace(tmp, self.path)

    def clear(self) -> None:
        """Delete the stored session. Logging out does not contact the server."""
        self.path.unlink(missing_ok=True)

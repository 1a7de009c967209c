"""
client/api.py -- HTTP wrapper around the profile directory API.

Uses one requests.Session for connection pooling. Every non-2xx response
becomes an ApiError carrying the server's "message" text, which is meant to
be shown to the user as-is. Nothing is retried.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from client.session import ClientSessionState, SessionUser

logger = logging.getLogger("profiledir.client.api")

DEFAULT_API_URL = "http://127.0.0.1:8000/api"
_TIMEOUT = 10


class ApiError(Exception):
    """A non-2xx response or a transport failure (status_code None)."""

    def __init__(self, status_code: Optional[int], message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ProfileDirectoryClient:
    def __init__(self, base_url: str = DEFAULT_API_URL, session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.max_redirects = 3

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            resp = self._session.request(method, f"{self.base_url}{path}", timeout=_TIMEOUT, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(None, "Could not reach the server. Please try again.") from e
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not resp.ok:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(resp.status_code, message or f"Request failed ({resp.status_code})")
        if not isinstance(body, dict):
            logger.warning("%s %s returned a non-object body", method, path)
            raise ApiError(resp.status_code, "Unexpected response")
        return body

    @staticmethod
    def _to_state(body: dict[str, Any]) -> ClientSessionState:
        return ClientSessionState(token=body["token"], user=SessionUser.from_dict(body["user"]))

    def register(self, username: str, password: str, email: str) -> ClientSessionState:
        body = self._request(
            "POST", "/auth/register", json={"username": username, "password": password, "email": email}
        )
        return self._to_state(body)

    def login(self, username: str, password: str) -> ClientSessionState:
        body = self._request("POST", "/auth/login", json={"username": username, "password": password})
        return self._to_state(body)

    def list_profiles(
        self, token: str, search: Optional[str] = None, category: Optional[str] = None
    ) -> list[dict[str, Any]]:
        """Fetch the directory. Blank search and the "All" category are not sent."""
        params: dict[str, str] = {}
        if search and search.strip():
            params["search"] = search.strip()
        if category and category != "All":
            params["category"] = category
        body = self._request(
            "GET", "/user/list", params=params, headers={"Authorization": f"Bearer {token}"}
        )
        return list(body.get("users", []))

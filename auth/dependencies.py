"""
auth/dependencies.py -- FastAPI Depends() helpers for token authentication.

The session token travels as "Authorization: Bearer <token>". This is the
server-side check: unlike the client's Session Guard, it verifies signature
and expiry on every request.

try_get_current_user() is the soft variant (returns None on failure).
get_current_user() wraps it and raises HTTP 401 if unauthenticated.

Layer rule: may import from fastapi (Depends/HTTPException/Request) because
this module is part of the FastAPI dependency injection system. No imports
from api/, client/, core/, or directory/.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from auth.exceptions import InvalidToken
from auth.models import UserRecord
from auth.service import AuthService


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def try_get_current_user(request: Request) -> UserRecord | None:
    """Return the UserRecord for the request's bearer token, or None.

    Never raises -- callers that need a hard 401 should use get_current_user().
    """
    token = _bearer_token(request)
    if token is None:
        return None
    auth_service: AuthService = request.app.state.auth_service
    try:
        return auth_service.authenticate(token)
    except InvalidToken:
        return None


def get_current_user(request: Request) -> UserRecord:
    """Require a valid bearer token. Raises HTTP 401 otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: UserRecord = Depends(get_current_user)): ...
    """
    user = try_get_current_user(request)
    if user is None:
        raise HTTPException(status_code=401, detail=InvalidToken.default_message)
    return user

"""
client/guard.py -- Session Guard: per-navigation route admission.

decide() is a pure function of (route kind, is a local session present).
It runs on every navigation and has no memory between calls.

Routing table:
  /          login view      -- auth-only
  /register  register view   -- auth-only
  /home      directory view  -- protected
  /profile   profile view    -- protected
  anything else              -- unknown, always sent to the auth view

Known weak point, kept as-is: the guard never verifies the stored token.
Any stored session object admits the user to protected views, even if its
token is expired or tampered with. The real check happens when that token is
sent to a protected API operation and rejected with 401.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

AUTH_VIEW_PATH = "/"
PROTECTED_VIEW_PATH = "/home"


class RouteKind(str, Enum):
    AUTH_ONLY = "auth_only"
    PROTECTED = "protected"
    UNKNOWN = "unknown"


class Decision(str, Enum):
    SHOW_AUTH_VIEW = "show_auth_view"
    SHOW_PROTECTED_VIEW = "show_protected_view"
    REDIRECT_TO_AUTH_VIEW = "redirect_to_auth_view"
    REDIRECT_TO_PROTECTED_VIEW = "redirect_to_protected_view"


ROUTES: dict[str, RouteKind] = {
    "/": RouteKind.AUTH_ONLY,
    "/register": RouteKind.AUTH_ONLY,
    "/home": RouteKind.PROTECTED,
    "/profile": RouteKind.PROTECTED,
}


class SessionPresence(Protocol):
    def has_session(self) -> bool: ...


@dataclass(frozen=True)
class Navigation:
    """Result of one navigation: what to do, and which path ends up displayed."""

    decision: Decision
    target: str


def decide(kind: RouteKind, has_local_session: bool) -> Decision:
    if kind is RouteKind.AUTH_ONLY:
        return Decision.REDIRECT_TO_PROTECTED_VIEW if has_local_session else Decision.SHOW_AUTH_VIEW
    if kind is RouteKind.PROTECTED:
        return Decision.SHOW_PROTECTED_VIEW if has_local_session else Decision.REDIRECT_TO_AUTH_VIEW
    return Decision.REDIRECT_TO_AUTH_VIEW


def classify(path: str) -> RouteKind:
    """Map a path to its RouteKind. A single trailing slash is ignored."""
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return ROUTES.get(path, RouteKind.UNKNOWN)


def navigate(path: str, session: SessionPresence) -> Navigation:
    """Evaluate the guard for path against the current local session."""
    decision = decide(classify(path), session.has_session())
    if decision is Decision.REDIRECT_TO_AUTH_VIEW:
        return Navigation(decision, AUTH_VIEW_PATH)
    if decision is Decision.REDIRECT_TO_PROTECTED_VIEW:
        return Navigation(decision, PROTECTED_VIEW_PATH)
    return Navigation(decision, path)

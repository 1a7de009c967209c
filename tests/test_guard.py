"""Unit tests for client/guard.py -- per-navigation route admission."""

from dataclasses import dataclass

import pytest

from client.guard import Decision, RouteKind, classify, decide, navigate


@dataclass
class _Presence:
    present: bool

    def has_session(self) -> bool:
        return self.present


@pytest.mark.parametrize(
    ("kind", "has_session", "expected"),
    [
        (RouteKind.AUTH_ONLY, False, Decision.SHOW_AUTH_VIEW),
        (RouteKind.AUTH_ONLY, True, Decision.REDIRECT_TO_PROTECTED_VIEW),
        (RouteKind.PROTECTED, False, Decision.REDIRECT_TO_AUTH_VIEW),
        (RouteKind.PROTECTED, True, Decision.SHOW_PROTECTED_VIEW),
        (RouteKind.UNKNOWN, False, Decision.REDIRECT_TO_AUTH_VIEW),
        (RouteKind.UNKNOWN, True, Decision.REDIRECT_TO_AUTH_VIEW),
    ],
)
def test_decision_table(kind: RouteKind, has_session: bool, expected: Decision) -> None:
    assert decide(kind, has_session) is expected


@pytest.mark.parametrize(
    ("path", "kind"),
    [
        ("/", RouteKind.AUTH_ONLY),
        ("/register", RouteKind.AUTH_ONLY),
        ("/register/", RouteKind.AUTH_ONLY),
        ("/home", RouteKind.PROTECTED),
        ("/profile", RouteKind.PROTECTED),
        ("/admin", RouteKind.UNKNOWN),
        ("/HOME", RouteKind.UNKNOWN),
        ("", RouteKind.UNKNOWN),
    ],
)
def test_classify(path: str, kind: RouteKind) -> None:
    assert classify(path) is kind


def test_protected_route_without_session_goes_to_login() -> None:
    nav = navigate("/home", _Presence(False))
    assert nav.decision is Decision.REDIRECT_TO_AUTH_VIEW
    assert nav.target == "/"


def test_auth_route_with_session_goes_to_directory() -> None:
    nav = navigate("/register", _Presence(True))
    assert nav.decision is Decision.REDIRECT_TO_PROTECTED_VIEW
    assert nav.target == "/home"


def test_shown_view_keeps_its_path() -> None:
    assert navigate("/profile", _Presence(True)).target == "/profile"
    assert navigate("/register", _Presence(False)).target == "/register"


def test_unknown_route_redirects_even_when_signed_in() -> None:
    nav = navigate("/nowhere", _Presence(True))
    assert nav.decision is Decision.REDIRECT_TO_AUTH_VIEW
    assert nav.target == "/"

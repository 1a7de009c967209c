"""Unit tests for client/session.py, plus the guard's presence-only behaviour."""

import json
import os
import stat

import pytest

from client.guard import Decision, navigate
from client.session import ClientSessionState, LocalSessionStore, SessionUser

ALICE = SessionUser(username="alice", role="User", company="Company")


@pytest.fixture
def session_store(tmp_path) -> LocalSessionStore:
    return LocalSessionStore(tmp_path / "session.json")


def test_no_file_means_no_session(session_store: LocalSessionStore) -> None:
    assert session_store.has_session() is False
    assert session_store.load() is None


def test_save_then_load(session_store: LocalSessionStore) -> None:
    session_store.save(ClientSessionState(token="tok", user=ALICE))
    assert session_store.has_session() is True
    assert session_store.load() == ClientSessionState(token="tok", user=ALICE)


def test_file_uses_browser_storage_keys(session_store: LocalSessionStore) -> None:
    session_store.save(ClientSessionState(token="tok", user=ALICE))
    data = json.loads(session_store.path.read_text())
    assert data == {"token": "tok", "currentuser": {"username": "alice", "role": "User", "company": "Company"}}


@pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
def test_file_is_private(session_store: LocalSessionStore) -> None:
    session_store.save(ClientSessionState(token="tok", user=ALICE))
    assert stat.S_IMODE(session_store.path.stat().st_mode) == 0o600


def test_clear_removes_session(session_store: LocalSessionStore) -> None:
    session_store.save(ClientSessionState(token="tok", user=ALICE))
    session_store.clear()
    assert session_store.has_session() is False
    session_store.clear()  # idempotent


def test_corrupt_file_counts_as_no_session(session_store: LocalSessionStore) -> None:
    session_store.path.write_text("{not json")
    assert session_store.has_session() is False
    assert session_store.load() is None


def test_presence_is_enough_for_has_session(session_store: LocalSessionStore) -> None:
    session_store.path.write_text(json.dumps({"currentuser": {"nonsense": True}}))
    assert session_store.has_session() is True
    assert session_store.load() is None


def test_guard_admits_expired_or_tampered_token(session_store: LocalSessionStore) -> None:
    """The guard only checks presence; token validity is never examined client-side."""
    session_store.save(ClientSessionState(token="expired.or.forged", user=ALICE))
    assert navigate("/home", session_store).decision is Decision.SHOW_PROTECTED_VIEW


def test_logout_then_protected_route_redirects(session_store: LocalSessionStore) -> None:
    session_store.save(ClientSessionState(token="tok", user=ALICE))
    session_store.clear()
    nav = navigate("/profile", session_store)
    assert nav.decision is Decision.REDIRECT_TO_AUTH_VIEW

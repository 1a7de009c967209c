"""
tests/conftest.py -- Shared test fixtures for the profile directory.

This module provides:
  - hasher / tokens / store / auth_service: unit-level building blocks
  - api_client: TestClient wired to an isolated in-memory store

Design: Named shared-memory SQLite URIs (not plain :memory:) are used for the
HTTP fixture because TestClient runs sync route handlers in a thread pool.
Plain :memory: DBs are per-connection and would present a blank schema to
each worker thread.

DEBUG must be set before any api/core import so get_settings() auto-generates
SECRET_KEY instead of raising. AUTH_RATE_LIMIT is raised so that suites which
log in many times never trip the limiter by accident.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("AUTH_RATE_LIMIT", "1000/minute")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.passwords import PasswordHasher
from auth.service import AuthService
from auth.store import CredentialStore
from auth.tokens import TokenService

TEST_SECRET = "test-signing-key-0123456789abcdef0123456789"


class FakeClock:
    """Callable clock for TokenService; advance() moves it forward."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta) -> None:
        self.now = self.now + delta


# ---------------------------------------------------------------------------
# Unit-level fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def hasher() -> PasswordHasher:
    """bcrypt at its minimum cost factor so tests stay fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def secret_key() -> str:
    return TEST_SECRET


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokens(clock: FakeClock, secret_key: str) -> TokenService:
    return TokenService(secret_key, clock=clock)


@pytest.fixture
def store() -> Generator[CredentialStore, None, None]:
    s = CredentialStore("sqlite:///:memory:")
    yield s
    s.close()


@pytest.fixture
def auth_service(store: CredentialStore, hasher: PasswordHasher, tokens: TokenService) -> AuthService:
    return AuthService(store, hasher, tokens)


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


def _patch_lifespan(store: CredentialStore, auth_service: AuthService):
    """Return a lifespan that wires the test store and service into app.state."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = store
        app.state.auth_service = auth_service
        yield

    return test_lifespan


@pytest.fixture
def http_tokens(secret_key: str) -> TokenService:
    """Wall-clock TokenService for HTTP tests."""
    return TokenService(secret_key)


@pytest.fixture
def api_client(hasher: PasswordHasher, http_tokens: TokenService) -> Generator[TestClient, None, None]:
    """TestClient over the real app with a fresh, isolated credential store."""
    db_url = f"sqlite:///file:test_auth_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"
    user_store = CredentialStore(db_url)
    service = AuthService(user_store, hasher, http_tokens)
    app.router.lifespan_context = _patch_lifespan(user_store, service)

    with TestClient(app, raise_server_exceptions=False) as client:
        yield client

    user_store.close()

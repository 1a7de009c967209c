"""
auth/store.py -- SQLAlchemy Core persistence layer for user credentials.

Pattern: Repository + Data Mapper. CredentialStore is the repository;
_row_to_record is the mapper. Services and routes never touch SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

Uniqueness:
  UNIQUE(username) is enforced by the database, not by a check-then-insert in
  Python. Two concurrent registrations for the same name can both pass the
  service's pre-check; only one INSERT survives, and the loser's
  IntegrityError is translated into DuplicateUsername here. No Python lock is
  held, so bcrypt work in other requests is never blocked by the store.

Username comparison is exact and case-sensitive: SQLite's default BINARY
collation applies to the username column.

Layer rule: no imports from api/, client/, core/, or directory/.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, MetaData, String, Table, Text, create_engine, event, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.exceptions import DuplicateUsername
from auth.models import NewUser, UserRecord

logger = logging.getLogger("profiledir.auth.store")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", String(32), primary_key=True),  # uuid4 hex, opaque to clients
    Column("username", String(255), nullable=False, unique=True),
    Column("email", String(255), nullable=False),
    Column("password_hash", Text, nullable=False),
    Column("role", String(100), nullable=False),
    Column("company", String(255), nullable=False),
    Column("created_at", String(32), nullable=False),
)


# ---------------------------------------------------------------------------
# WAL mode
# ---------------------------------------------------------------------------


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so readers are not blocked during writes.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CredentialStore:
    """Repository for UserRecord entities.

    Usage:
        store = CredentialStore("sqlite:///users.db")
        record = store.create(NewUser(username="alice", email="a@x.com", password_hash=digest))
        store.find_by_username("alice")
        store.close()
    """

    def __init__(self, db_url: str) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_wal_mode)
        _metadata.create_all(self.engine)

    def find_by_username(self, username: str) -> UserRecord | None:
        """Look up a user by exact username (case-sensitive). Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.username == username)).fetchone()
        return _row_to_record(row) if row is not None else None

    def find_by_id(self, user_id: str) -> UserRecord | None:
        """Look up a user by its opaque id. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_record(row) if row is not None else None

    def create(self, candidate: NewUser) -> UserRecord:
        """Insert a new user and return the stored record.

        Raises DuplicateUsername if the username is already taken, including
        when a concurrent request inserted it first.
        """
        record = UserRecord(
            id=uuid.uuid4().hex,
            username=candidate.username,
            email=candidate.email,
            password_hash=candidate.password_hash,
            role=candidate.role,
            company=candidate.company,
            created_at=_now_iso(),
        )
        try:
            with self.engine.begin() as conn:
                conn.execute(
                    _users.insert().values(
                        id=record.id,
                        username=record.username,
                        email=record.email,
                        password_hash=record.password_hash,
                        role=record.role,
                        company=record.company,
                        created_at=record.created_at,
                    )
                )
        except IntegrityError as exc:
            logger.info("Rejected duplicate username on insert")
            raise DuplicateUsername() from exc
        return record

    def count(self) -> int:
        """Return the number of stored users."""
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(_users)).scalar()
        return result or 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_record(row) -> UserRecord:
    return UserRecord(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        role=row.role,
        company=row.company,
        created_at=row.created_at,
    )

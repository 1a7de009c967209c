"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Dataclasses own domain
shape; the store and services do the work.

Layer rule: no imports from api/, client/, core/, or directory/.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ROLE = "User"
DEFAULT_COMPANY = "Company"


@dataclass(frozen=True)
class UserRecord:
    """A persisted user account.

    id is an opaque UUID hex string assigned by the store at creation.
    password_hash is a bcrypt digest; it never leaves the auth package.
    """

    id: str
    username: str
    email: str
    password_hash: str
    role: str
    company: str
    created_at: str


@dataclass(frozen=True)
class NewUser:
    """Creation candidate handed to CredentialStore.create()."""

    username: str
    email: str
    password_hash: str
    role: str = DEFAULT_ROLE
    company: str = DEFAULT_COMPANY


@dataclass(frozen=True)
class PublicUserView:
    """The only projection of a UserRecord that is ever sent to a client.

    from_record() copies the three public fields explicitly, so id, email and
    password_hash cannot leak through a forgotten filter.
    """

    username: str
    role: str
    company: str

    @classmethod
    def from_record(cls, record: UserRecord) -> PublicUserView:
        return cls(username=record.username, role=record.role, company=record.company)


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a session token. Times are epoch seconds."""

    subject_id: str
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful register or login."""

    token: str
    user: PublicUserView

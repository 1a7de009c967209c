"""
auth/service.py -- Registration and login orchestration.

AuthService composes the CredentialStore, PasswordHasher and TokenService.
Both operations are terminal: they either return an AuthResult or raise an
AuthError, with nothing half-committed in between (the only write is the
single INSERT in register).

Failure policy:
  - DuplicateUsername, UserNotFound and InvalidCredentials are expected
    outcomes and propagate unchanged.
  - Anything else (database unavailable, bcrypt failure, signing failure) is
    logged with its traceback and re-raised as RegistrationFailed or
    LoginFailed. The generic message is all a caller ever sees.

UserNotFound and InvalidCredentials stay distinguishable. This lets a caller
probe which usernames exist; it is kept on purpose and recorded as an open
question in DESIGN.md.
"""

from __future__ import annotations

import logging

from auth.exceptions import (
    AuthError,
    DuplicateUsername,
    InvalidCredentials,
    InvalidToken,
    LoginFailed,
    RegistrationFailed,
    UserNotFound,
)
from auth.models import DEFAULT_COMPANY, DEFAULT_ROLE, AuthResult, NewUser, PublicUserView, UserRecord
from auth.passwords import PasswordHasher
from auth.store import CredentialStore
from auth.tokens import TokenService

logger = logging.getLogger("profiledir.auth")


class AuthService:
    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: TokenService) -> None:
        self._store = store
        self._hasher = hasher
        self._tokens = tokens

    def register(self, username: str, password: str, email: str) -> AuthResult:
        """Create an account with the default role and company, then sign it in.

        Callers cannot choose role or company at registration.
        """
        try:
            if self._store.find_by_username(username) is not None:
                raise DuplicateUsername()
            password_hash = self._hasher.hash(password)
            record = self._store.create(
                NewUser(
                    username=username,
                    email=email,
                    password_hash=password_hash,
                    role=DEFAULT_ROLE,
                    company=DEFAULT_COMPANY,
                )
            )
            token = self._tokens.issue(record.id)
        except DuplicateUsername:
            logger.info("Registration rejected: username already exists")
            raise
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Registration failed unexpectedly")
            raise RegistrationFailed() from exc

        logger.info("Registered user id=%s", record.id)
        return AuthResult(token=token, user=PublicUserView.from_record(record))

    def login(self, username: str, password: str) -> AuthResult:
        """Verify a username/password pair and issue a fresh token."""
        try:
            record = self._store.find_by_username(username)
            if record is None:
                raise UserNotFound()
            if not self._hasher.verify(password, record.password_hash):
                raise InvalidCredentials()
            token = self._tokens.issue(record.id)
        except (UserNotFound, InvalidCredentials) as exc:
            logger.warning("Login rejected: %s", exc.code)
            raise
        except AuthError:
            raise
        except Exception as exc:
            logger.exception("Login failed unexpectedly")
            raise LoginFailed() from exc

        logger.info("Login succeeded for user id=%s", record.id)
        return AuthResult(token=token, user=PublicUserView.from_record(record))

    def authenticate(self, token: str) -> UserRecord:
        """Resolve a bearer token to its user. Raises InvalidToken.

        A token whose subject no longer exists is treated as invalid.
        """
        claims = self._tokens.verify(token)
        record = self._store.find_by_id(claims.subject_id)
        if record is None:
            raise InvalidToken()
        return record

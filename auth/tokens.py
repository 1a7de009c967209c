"""
auth/tokens.py -- Signed, time-limited session tokens (JWT via python-jose).

Security design decisions:
  JWT: python-jose with HS256. Tokens carry only the subject id ("sub"), the
       issue time ("iat") and an absolute expiry ("exp" = iat + ttl). No
       username, role or email is embedded.

  Stateless: the server never records issued tokens. A token is valid until
       its encoded expiry elapses; there is no revocation and no refresh. A
       token past expiry requires a fresh login.

  Signing key: passed in at construction. An empty key raises
       MissingSigningKey immediately, so no code path can sign or verify with
       a default key.

  Clock: expiry is checked against the injected clock rather than by
       python-jose (whose exp check always uses the wall clock). A token is
       invalid at and after its exp second.

Layer rule: no imports from api/, client/, core/, or directory/.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from jose import JWTError, jwt

from auth.exceptions import InvalidToken, MissingSigningKey
from auth.models import TokenClaims

logger = logging.getLogger("profiledir.auth.tokens")

_ALGORITHM = "HS256"
DEFAULT_TTL_SECONDS = 60 * 60


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issue and verify session tokens.

    Usage:
        tokens = TokenService(secret_key=settings.secret_key)
        token = tokens.issue(record.id)
        claims = tokens.verify(token)   # raises InvalidToken
    """

    def __init__(
        self,
        secret_key: str | None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret_key:
            raise MissingSigningKey()
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._secret_key = secret_key
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock().timestamp())

    def issue(self, subject_id: str) -> str:
        """Encode a signed token for subject_id expiring ttl_seconds from now."""
        issued_at = self._now()
        payload = {
            "sub": subject_id,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """Decode and check a token. Raises InvalidToken on any failure.

        Signature errors, malformed input, missing claims and expiry all
        collapse into the same InvalidToken so callers cannot tell them apart.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidToken() from exc

        subject_id = payload.get("sub")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(subject_id, str) or not subject_id:
            raise InvalidToken()
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise InvalidToken()
        if self._now() >= expires_at:
            raise InvalidToken()
        return TokenClaims(subject_id=subject_id, issued_at=issued_at, expires_at=expires_at)

"""
auth/passwords.py -- One-way salted password hashing (bcrypt, direct usage).

bcrypt is used directly rather than through passlib: passlib's wrap-bug
detection feeds bcrypt a password longer than 72 bytes, which bcrypt 4.x
rejects outright.

bcrypt.gensalt() draws a fresh salt on every call, so hashing the same
plaintext twice yields two different digests. checkpw() compares in constant
time.

bcrypt only reads the first 72 bytes of a password; depending on the release
it truncates the rest or raises. hash() refuses anything longer than
MAX_PASSWORD_BYTES (UTF-8 encoded) and the API request models reject such
passwords with a 422 before they get here.
"""

from __future__ import annotations

import bcrypt

# Work factor shared by every hash this process creates.
BCRYPT_ROUNDS = 10

# Measured in UTF-8 bytes, not characters.
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Hash and verify passwords with a fixed bcrypt cost factor.

    rounds exists for tests, which pass bcrypt's minimum (4) to keep the
    suite fast. Production code uses the BCRYPT_ROUNDS default.
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Return a 60-character bcrypt digest of plaintext.

        Raises ValueError if plaintext is longer than MAX_PASSWORD_BYTES once
        encoded.
        """
        encoded = plaintext.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password is longer than {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, plaintext: str, digest: str) -> bool:
        """Return True if plaintext matches digest.

        A digest that is not a valid bcrypt string makes checkpw raise
        ValueError; that is a non-match, not an error.
        """
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            return False

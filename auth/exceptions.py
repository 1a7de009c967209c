"""
auth/exceptions.py -- Error taxonomy for the auth package.

Validation-shaped failures (DuplicateUsername, UserNotFound,
InvalidCredentials, InvalidToken) are expected outcomes; their messages are
safe to show to the user. RegistrationFailed and LoginFailed wrap
infrastructure faults and carry only a generic message -- the original
exception is chained for the logs, never serialized.
"""


class AuthError(Exception):
    """Base class for every auth failure."""

    default_message = "Authentication error"
    code = "auth_error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateUsername(AuthError):
    default_message = "Username already exists"
    code = "duplicate_username"


class UserNotFound(AuthError):
    default_message = "User not found"
    code = "user_not_found"


class InvalidCredentials(AuthError):
    default_message = "Invalid credentials"
    code = "invalid_credentials"


class InvalidToken(AuthError):
    """Bad signature, malformed token, or expired -- deliberately one kind."""

    default_message = "Invalid or expired token"
    code = "invalid_token"


class RegistrationFailed(AuthError):
    default_message = "Registration failed"
    code = "registration_failed"


class LoginFailed(AuthError):
    default_message = "Login failed"
    code = "login_failed"


class MissingSigningKey(AuthError):
    """Raised at TokenService construction when no signing key is configured."""

    default_message = "Token signing key is not configured"
    code = "missing_signing_key"

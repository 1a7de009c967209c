"""
API request and response models for the profile directory REST endpoints.

These Pydantic v2 models define the HTTP transport contract. They are kept
separate from the dataclasses in auth/models.py, which own the internal
domain representation. Route handlers map between the two.

Request bodies are strict: required fields are explicit, lengths are bounded,
and unknown fields are rejected (extra="forbid") before anything reaches the
AuthService.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.passwords import MAX_PASSWORD_BYTES

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

# Character bound; the byte bound is enforced by _check_password_bytes.
PASSWORD_MAX_LENGTH = MAX_PASSWORD_BYTES


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/auth/register."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=PASSWORD_MAX_LENGTH)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login.

    No minimum on password here: a short password is simply wrong, and the
    caller should hear "Invalid credentials" rather than a validation error.
    """

    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        return _check_password_bytes(value)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class PublicUser(BaseModel):
    """Public projection of a user: the only user shape a client ever sees."""

    model_config = ConfigDict(frozen=True)

    username: str
    role: str
    company: str


class AuthResponse(BaseModel):
    """Response for a successful register (201) or login (200)."""

    model_config = ConfigDict(frozen=True)

    message: str
    token: str
    user: PublicUser


class MessageResponse(BaseModel):
    """Error envelope for 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    message: str
    errors: Optional[list[dict]] = None


class ProfileRow(BaseModel):
    """One directory entry. Same public fields as PublicUser plus an id."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    role: str
    company: str


class DirectoryResponse(BaseModel):
    """Response for GET /api/user/list."""

    model_config = ConfigDict(frozen=True)

    users: list[ProfileRow] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)

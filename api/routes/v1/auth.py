"""
api/routes/v1/auth.py -- Registration and login REST endpoints.

Routes:
  POST /api/auth/register  -- create account; 201 with token + public user
  POST /api/auth/login     -- password login; 200 with token + public user

Status mapping:
  DuplicateUsername               -> 400
  UserNotFound, InvalidCredentials -> 401 (same status, different message)
  RegistrationFailed, LoginFailed  -> 500 (generic message only)

Security:
  Both routes are rate-limited per client IP (AUTH_RATE_LIMIT).
  Cache-Control: no-store on every response that may carry a token.
  Handlers are plain `def` so bcrypt runs in the threadpool and never blocks
  the event loop.

There is no logout route: tokens are stateless and cannot be revoked, so
logging out is the client deleting its stored session.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.limiter import auth_rate_limit, limiter
from api.models import AuthResponse, LoginRequest, MessageResponse, PublicUser, RegisterRequest
from auth.exceptions import (
    AuthError,
    DuplicateUsername,
    InvalidCredentials,
    LoginFailed,
    RegistrationFailed,
    UserNotFound,
)
from auth.models import AuthResult
from auth.service import AuthService

router = APIRouter()

_STATUS_BY_ERROR: dict[type[AuthError], int] = {
    DuplicateUsername: 400,
    UserNotFound: 401,
    InvalidCredentials: 401,
    RegistrationFailed: 500,
    LoginFailed: 500,
}


def _no_store(resp: JSONResponse) -> JSONResponse:
    resp.headers["Cache-Control"] = "no-store"
    return resp


def _error_response(exc: AuthError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 500)
    return _no_store(
        JSONResponse(
            status_code=status_code,
            content=MessageResponse(message=exc.message).model_dump(exclude_none=True),
        )
    )


def _auth_response(status_code: int, message: str, result: AuthResult) -> JSONResponse:
    body = AuthResponse(
        message=message,
        token=result.token,
        user=PublicUser(
            username=result.user.username,
            role=result.user.role,
            company=result.user.company,
        ),
    )
    return _no_store(JSONResponse(status_code=status_code, content=body.model_dump()))


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/auth/register",
    response_model=AuthResponse,
    status_code=201,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
@limiter.limit(auth_rate_limit)
def register(request: Request, body: RegisterRequest) -> JSONResponse:
    """Create an account (role "User", company "Company") and return a session token."""
    auth_service: AuthService = request.app.state.auth_service
    try:
        result = auth_service.register(body.username, body.password, body.email)
    except (DuplicateUsername, RegistrationFailed) as exc:
        return _error_response(exc)
    return _auth_response(201, "User registered successfully", result)


@router.post(
    "/auth/login",
    response_model=AuthResponse,
    responses={401: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
@limiter.limit(auth_rate_limit)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password and return a session token.

    Unknown username and wrong password both return 401 but with different
    messages ("User not found" / "Invalid credentials").
    """
    auth_service: AuthService = request.app.state.auth_service
    try:
        result = auth_service.login(body.username, body.password)
    except (UserNotFound, InvalidCredentials, LoginFailed) as exc:
        return _error_response(exc)
    return _auth_response(200, "Logged In", result)

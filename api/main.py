"""
api/main.py -- FastAPI application entry point for the profile directory.

Run with:  uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. CORSMiddleware    -- adds CORS headers for the configured client origins
  2. SlowAPIMiddleware -- enforces per-route rate limits from api.limiter

Lifespan builds the auth object graph once at startup:
  CredentialStore(database_url) + PasswordHasher + TokenService(secret_key)
  -> AuthService, stored on app.state for route handlers and dependencies.

Every error response has the same {"message": ...} body so clients can show
it to the user without inspecting the status code first.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.limiter import limiter
from api.models import HealthResponse, MessageResponse
from api.routes.v1.auth import router as auth_router
from api.routes.v1.directory import router as directory_router
from auth.passwords import PasswordHasher
from auth.service import AuthService
from auth.store import CredentialStore
from auth.tokens import TokenService
from core.config import get_settings

VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("profiledir.api")

_settings = get_settings()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the auth services on startup and release the DB on shutdown.

    TokenService receives the signing key here, once. It raises
    MissingSigningKey if the key is empty, which aborts startup.
    """
    logger.info("Profile directory API starting up")
    settings = get_settings()
    store = CredentialStore(settings.database_url)
    tokens = TokenService(settings.secret_key, ttl_seconds=settings.token_expire_seconds)
    app.state.user_store = store
    app.state.auth_service = AuthService(store, PasswordHasher(), tokens)
    logger.info("Auth initialized (token_ttl=%ds)", settings.token_expire_seconds)

    yield

    app.state.user_store.close()
    logger.info("Profile directory API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Profile Directory API",
    description="Account registration, login, and a directory of professional profiles.",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

app.add_middleware(SlowAPIMiddleware)

# SlowAPI looks for app.state.limiter by convention.
app.state.limiter = limiter


# ---------------------------------------------------------------------------
# Request logging middleware
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(directory_router, prefix="/api", tags=["Directory"])


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------


def _message(status_code: int, message: str, errors: list[dict] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message, errors=errors).model_dump(exclude_none=True),
    )


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 with Retry-After when a rate limit is exceeded.

    Plain def: SlowAPIMiddleware calls this handler synchronously.
    """
    retry_after = int(getattr(exc, "retry_after", 60))
    response = _message(429, "Too many requests.")
    response.headers["Retry-After"] = str(retry_after)
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 listing which fields failed, without echoing submitted values."""
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _message(422, "Request validation failed.", errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _message(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unexpected server errors.

    The exception is logged with its traceback; the client only receives a
    generic message.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return _message(500, "An unexpected error occurred.")


# ---------------------------------------------------------------------------
# Health endpoint
# ---------------------------------------------------------------------------


@app.get("/api/health", tags=["Health"])
def health(request: Request) -> HealthResponse:
    """Return API liveness, version, and database reachability."""
    database = "ok"
    try:
        request.app.state.user_store.count()
    except Exception:
        logger.exception("Health check: database unreachable")
        database = "error"
    return HealthResponse(
        status="healthy" if database == "ok" else "degraded",
        version=VERSION,
        components={"app": "ok", "database": database},
    )

"""
api/routes/auth.py -- Registration, login, and two-factor REST endpoints.

Routes:
  POST /auth/register       -- create account; 201 with public profile
  POST /auth/login          -- password login; token, or 2FA challenge
  POST /auth/2fa/enable     -- start 2FA setup; returns secret + QR (requires auth)
  POST /auth/2fa/confirm    -- finish setup with a first code (requires auth)
  POST /auth/2fa/verify     -- answer a login challenge; returns token
  POST /auth/2fa/disable    -- turn 2FA off with password + code (requires auth)

Security:
  POST /login and POST /2fa/verify are rate-limited per IP (LOGIN_RATE_LIMIT).
  Login and token responses carry Cache-Control: no-store.
  Service errors (auth.errors.AuthError) are mapped to HTTP by api/main.py.

Handlers are plain `def`: bcrypt is CPU-bound and blocking, so FastAPI runs
them in its threadpool instead of on the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.limiter import LOGIN_RATE_LIMIT, limiter
from api.models import (
    Confirm2FARequest,
    Disable2FARequest,
    Enable2FARequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    TwoFactorSetupResponse,
    UserResponse,
    Verify2FARequest,
)
from auth import service
from auth.dependencies import get_current_user
from auth.models import LoginResult, User
from auth.store import UserStore

# Auth policy:
# - POST /auth/register:      public
# - POST /auth/login:         public, rate-limited
# - POST /auth/2fa/verify:    public (the caller holds a challenge, not a token), rate-limited
# - POST /auth/2fa/enable:    requires auth (get_current_user)
# - POST /auth/2fa/confirm:   requires auth (get_current_user)
# - POST /auth/2fa/disable:   requires auth (get_current_user)
router = APIRouter(prefix="/auth")


def _login_response(result: LoginResult) -> JSONResponse:
    """Serialize a LoginResult as a challenge or a token, never both."""
    if result.requires_two_factor:
        body = LoginResponse(
            requires_two_factor=True,
            user_id=result.user.id,
            message="2FA code required",
        )
    else:
        body = LoginResponse(
            requires_two_factor=False,
            access_token=result.access_token,
            token_type="bearer",  # noqa: S106 # nosec B106 -- OAuth token type, not a password
            user=UserResponse.from_user(result.user),
        )
    resp = JSONResponse(status_code=200, content=body.model_dump(by_alias=True, exclude_none=True))
    resp.headers["Cache-Control"] = "no-store"
    return resp


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.post("/register", response_model=UserResponse, status_code=201)
def register(request: Request, body: RegisterRequest) -> UserResponse:
    """Create a USER account. 409 if the email is already registered."""
    user_store: UserStore = request.app.state.user_store
    user = service.register(user_store, body.email, body.password, body.name)
    return UserResponse.from_user(user)


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password.

    2FA off: returns access_token + user.
    2FA on:  returns requiresTwoFactor=true and userId; the client follows up
             with POST /auth/2fa/verify.
    """
    user_store: UserStore = request.app.state.user_store
    return _login_response(service.login(user_store, body.email, body.password))


@router.post("/2fa/verify", response_model=LoginResponse, response_model_exclude_none=True)
@limiter.limit(LOGIN_RATE_LIMIT)
def verify_two_factor(request: Request, body: Verify2FARequest) -> JSONResponse:
    """Exchange a login challenge (user id + TOTP code) for a token."""
    user_store: UserStore = request.app.state.user_store
    return _login_response(service.verify_two_factor(user_store, body.user_id, body.code))


# ---------------------------------------------------------------------------
# Authenticated endpoints
# ---------------------------------------------------------------------------


@router.post("/2fa/enable", response_model=TwoFactorSetupResponse)
def enable_two_factor(
    request: Request,
    body: Enable2FARequest,
    current_user: User = Depends(get_current_user),
) -> TwoFactorSetupResponse:
    """Start 2FA setup. The secret is stored but 2FA stays off until a code is confirmed."""
    user_store: UserStore = request.app.state.user_store
    setup = service.enable_two_factor(user_store, current_user.id, body.password)
    return TwoFactorSetupResponse(secret=setup.secret, qr_code=setup.qr_code, otpauth_url=setup.otpauth_url)


@router.post("/2fa/confirm", response_model=UserResponse)
def confirm_two_factor(
    request: Request,
    body: Confirm2FARequest,
    current_user: User = Depends(get_current_user),
) -> UserResponse:
    """Enable 2FA by submitting the first code from the authenticator app."""
    user_store: UserStore = request.app.state.user_store
    return UserResponse.from_user(service.confirm_two_factor(user_store, current_user.id, body.code))


@router.post("/2fa/disable", response_model=MessageResponse)
def disable_two_factor(
    request: Request,
    body: Disable2FARequest,
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Disable 2FA. Both the password and a current code are required."""
    user_store: UserStore = request.app.state.user_store
    service.disable_two_factor(user_store, current_user.id, body.password, body.code)
    return MessageResponse(message="2FA has been disabled successfully")

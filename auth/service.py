"""
auth/service.py -- Registration, login, and two-factor flows.

Each operation takes the UserStore as its first argument (same seam as
tokens.authenticate_user) and either returns domain objects or raises an
auth.errors.AuthError subclass. HTTP mapping happens in api/.

Flow:
  register -> login --(2FA off)--> token
                    --(2FA on)---> challenge(user id) -> verify_two_factor -> token

  enable_two_factor stores a fresh secret with enabled=False; only a valid
  code (confirm_two_factor or verify_two_factor) flips the flag on.

Layer rule: no imports from api/.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from auth import totp
from auth.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from auth.models import ROLE_USER, LoginResult, TwoFactorSetup, User
from auth.store import UserStore
from auth.tokens import authenticate_user, create_access_token, hash_password, verify_password
from core.config import get_settings

logger = logging.getLogger("passcheck.auth.service")

_settings = get_settings()


def _issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role)


def _require_user(store: UserStore, user_id: str) -> User:
    """Load a user for an authenticated or challenge step. Unknown ids are a 401, not a 404."""
    user = store.get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("User not found.")
    return user


def _check_code(user: User, code: str) -> bool:
    return totp.verify_code(user.two_factor_secret, code, valid_window=_settings.totp_valid_window)


# ---------------------------------------------------------------------------
# Registration and login
# ---------------------------------------------------------------------------


def register(store: UserStore, email: str, password: str, name: str | None = None, role: str = ROLE_USER) -> User:
    """Create an account and return it. Raises ConflictError if the email is taken.

    The pre-check gives a clean error in the common case; the UNIQUE constraint
    catches the race where two registrations pass the check together.
    """
    if store.get_by_email(email) is not None:
        raise ConflictError("User with this email already exists.")
    new_user = User(email=email, hashed_password=hash_password(password), name=name, role=role)
    try:
        user_id = store.create_user(new_user)
    except IntegrityError as exc:
        raise ConflictError("User with this email already exists.") from exc
    logger.info("Registered user %s (role=%s)", user_id, role)
    return store.get_by_id(user_id)


def login(store: UserStore, email: str, password: str) -> LoginResult:
    """Check credentials; issue a token unless the account has 2FA enabled.

    Wrong email and wrong password raise the same error so the response does
    not reveal which emails are registered.
    """
    user = authenticate_user(store, email, password)
    if user is None:
        logger.warning("Failed login attempt")
        raise UnauthorizedError("Invalid credentials.")
    if user.two_factor_enabled:
        logger.info("Login for user %s awaiting 2FA code", user.id)
        return LoginResult(user=user)
    logger.info("Login for user %s", user.id)
    return LoginResult(user=user, access_token=_issue_token(user))


# ---------------------------------------------------------------------------
# Two-factor authentication
# ---------------------------------------------------------------------------


def enable_two_factor(store: UserStore, user_id: str, password: str) -> TwoFactorSetup:
    """Start 2FA setup: re-check the password, store a new secret, keep 2FA disabled.

    Calling again before confirming replaces the pending secret.
    """
    user = _require_user(store, user_id)
    if not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid password.")
    if user.two_factor_enabled:
        raise BadRequestError("2FA is already enabled.")

    secret = totp.generate_secret()
    uri = totp.provisioning_uri(secret, user.email, _settings.app_name)
    store.update_user(user.id, two_factor_secret=secret, two_factor_enabled=False)
    logger.info("2FA setup started for user %s", user.id)
    return TwoFactorSetup(secret=secret, otpauth_url=uri, qr_code=totp.qr_data_url(uri))


def confirm_two_factor(store: UserStore, user_id: str, code: str) -> User:
    """Finish setup for an authenticated user by proving possession of the secret."""
    user = _require_user(store, user_id)
    if not user.two_factor_secret:
        raise UnauthorizedError("2FA setup not started.")
    if not _check_code(user, code):
        logger.warning("Invalid 2FA confirmation code for user %s", user.id)
        raise UnauthorizedError("Invalid 2FA code.")
    if not user.two_factor_enabled:
        store.update_user(user.id, two_factor_enabled=True)
        logger.info("2FA enabled for user %s", user.id)
    return store.get_by_id(user.id)


def verify_two_factor(store: UserStore, user_id: str, code: str) -> LoginResult:
    """Answer a login challenge with a TOTP code and receive a token.

    Also completes a pending setup: a valid code against a stored-but-disabled
    secret enables 2FA before the token is issued.
    """
    user = _require_user(store, user_id)
    if not user.two_factor_secret:
        raise BadRequestError("2FA is not set up for this user.")
    if not _check_code(user, code):
        logger.warning("Invalid 2FA code for user %s", user.id)
        raise UnauthorizedError("Invalid 2FA code.")
    if not user.two_factor_enabled:
        store.update_user(user.id, two_factor_enabled=True)
        logger.info("2FA enabled for user %s", user.id)
        user = store.get_by_id(user.id)
    logger.info("2FA login for user %s", user.id)
    return LoginResult(user=user, access_token=_issue_token(user))


def disable_two_factor(store: UserStore, user_id: str, password: str, code: str) -> None:
    """Turn 2FA off. Needs both the password and a current code; nothing changes on failure."""
    user = _require_user(store, user_id)
    if not verify_password(password, user.hashed_password):
        raise UnauthorizedError("Invalid password.")
    if not user.two_factor_enabled:
        raise BadRequestError("2FA is not enabled.")
    if not user.two_factor_secret:
        raise BadRequestError("2FA secret missing for this user.")
    if not _check_code(user, code):
        logger.warning("Invalid 2FA code on disable for user %s", user.id)
        raise UnauthorizedError("Invalid 2FA code.")
    store.update_user(user.id, two_factor_secret=None, two_factor_enabled=False)
    logger.info("2FA disabled for user %s", user.id)


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


def get_user(store: UserStore, user_id: str) -> User:
    """Return a user by id for admin views. Raises NotFoundError if absent."""
    user = store.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user

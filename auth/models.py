"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Dataclasses own domain
shape; the store and service do the work.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


@dataclass
class User:
    """A registered account.

    id is an opaque UUID4 string assigned by the store on insert.

    Two-factor states:
      - no secret, disabled: 2FA never set up (or disabled again).
      - secret, disabled:    setup started via enable, awaiting a first valid code.
      - secret, enabled:     login requires a TOTP code.
    A user is never enabled without a secret.
    """

    email: str
    hashed_password: str
    role: str = ROLE_USER
    id: str | None = None
    name: str | None = None
    two_factor_secret: str | None = None
    two_factor_enabled: bool = False
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass
class LoginResult:
    """Outcome of a password login or a 2FA verification.

    access_token is None when the user still owes a TOTP code; the caller then
    answers with a challenge carrying only the user id.
    """

    user: User
    access_token: str | None = None

    @property
    def requires_two_factor(self) -> bool:
        return self.access_token is None


@dataclass
class TwoFactorSetup:
    """Material returned once when 2FA setup starts. The secret is not shown again."""

    secret: str
    otpauth_url: str
    qr_code: str  # data:image/svg+xml;base64,...

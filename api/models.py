"""
API request and response models for Password Checker REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
core/models.py, which own the internal domain representation. Route handlers
map between the two.

Wire format: camelCase keys (isCommon, requiresTwoFactor, twoFactorEnabled...)
because the SPA consumes them directly. Python attributes stay snake_case via
alias_generator; populate_by_name lets tests and handlers construct models
with either spelling. access_token keeps its OAuth-style snake_case name.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from auth.models import User
from auth.tokens import BCRYPT_MAX_BYTES, exceeds_bcrypt_limit
from core.models import PasswordStrength, PwnedResult

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

EMAIL_PATTERN = r"^[^@\s]{1,64}@[^@\s]{1,255}\.[^@\s]{2,}$"
TOTP_CODE_PATTERN = r"^[0-9]{6}$"

# bcrypt reads at most 72 bytes; registration refuses anything longer so the
# stored hash covers the whole password.
PASSWORD_MAX_LENGTH = BCRYPT_MAX_BYTES


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _CamelResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Auth -- request models
# ---------------------------------------------------------------------------


class RegisterRequest(_CamelModel):
    """Request body for POST /auth/register.

    The password is taken verbatim (no whitespace stripping); only the email
    is normalized.
    """

    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=PASSWORD_MAX_LENGTH)
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        """Strip and lower-case before the pattern check so uniqueness is case-insensitive."""
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if exceeds_bcrypt_limit(value):
            raise ValueError(f"Password must be at most {PASSWORD_MAX_LENGTH} bytes when UTF-8 encoded")
        return value


class LoginRequest(_CamelModel):
    """Request body for POST /auth/login. No length policy -- any string may be tried."""

    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class Enable2FARequest(_CamelModel):
    password: str = Field(min_length=1, max_length=255)


class Confirm2FARequest(_CamelModel):
    code: str = Field(pattern=TOTP_CODE_PATTERN, description="6-digit code from the authenticator app.")


class Verify2FARequest(_CamelModel):
    """Request body for POST /auth/2fa/verify (the login challenge answer)."""

    user_id: str = Field(min_length=1, max_length=64)
    code: str = Field(pattern=TOTP_CODE_PATTERN)


class Disable2FARequest(_CamelModel):
    password: str = Field(min_length=1, max_length=255)
    code: str = Field(pattern=TOTP_CODE_PATTERN)


# ---------------------------------------------------------------------------
# Auth -- response models
# ---------------------------------------------------------------------------


class UserResponse(_CamelResponse):
    """Public profile. Never carries the password hash or the 2FA secret."""

    id: str
    email: str
    name: Optional[str]
    role: str
    two_factor_enabled: bool
    created_at: str
    updated_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        """Factory Method: the mapping lives here, colocated with the output model."""
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
            two_factor_enabled=user.two_factor_enabled,
            created_at=user.created_at or "",
            updated_at=user.updated_at or "",
        )


class LoginResponse(_CamelResponse):
    """Response for POST /auth/login and POST /auth/2fa/verify.

    Challenge shape (2FA on):  requiresTwoFactor=true, userId, message.
    Token shape:               requiresTwoFactor=false, access_token, user.
    Routes serialize with exclude_none so absent fields are omitted entirely.
    """

    requires_two_factor: bool
    user_id: Optional[str] = None
    access_token: Optional[str] = Field(default=None, alias="access_token")
    token_type: Optional[str] = Field(default=None, alias="token_type")
    user: Optional[UserResponse] = None
    message: Optional[str] = None


class TwoFactorSetupResponse(_CamelResponse):
    secret: str
    qr_code: str
    otpauth_url: str
    message: str = "Scan this QR code with your authenticator app, then verify with a code"


class MessageResponse(_CamelResponse):
    message: str


# ---------------------------------------------------------------------------
# Password checker
# ---------------------------------------------------------------------------


class CheckPasswordRequest(_CamelModel):
    """Request body for POST /password/check and /password/check-pwned."""

    password: str = Field(min_length=1, max_length=1024)


class PasswordStrengthResponse(_CamelResponse):
    score: int = Field(ge=0, le=4)
    feedback: list[str]
    is_common: bool
    crack_time: str

    @classmethod
    def from_strength(cls, strength: PasswordStrength) -> "PasswordStrengthResponse":
        return cls(
            score=strength.score,
            feedback=strength.feedback,
            is_common=strength.is_common,
            crack_time=strength.crack_time,
        )


class PwnedResponse(_CamelResponse):
    is_pwned: bool
    count: int

    @classmethod
    def from_result(cls, result: PwnedResult) -> "PwnedResponse":
        return cls(is_pwned=result.is_pwned, count=result.count)


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str] = Field(default_factory=dict)

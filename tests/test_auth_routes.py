"""
tests/test_auth_routes.py -- Integration tests for /auth/* endpoints.

Covers:
  - register: 201 public profile, 409 duplicate, 422 validation envelope
  - login: token shape vs 2FA challenge shape, 401 on bad credentials
  - full 2FA lifecycle over HTTP: enable -> confirm -> login challenge -> verify -> disable
  - disable with a wrong code leaves 2FA on
"""

from __future__ import annotations

import time
import uuid

import pyotp


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _unique_email() -> str:
    return f"route-{uuid.uuid4().hex[:10]}@example.com"


def _other_code(secret: str) -> str:
    t = pyotp.TOTP(secret)
    now = time.time()
    valid = {t.at(now + d) for d in (-60, -30, 0, 30, 60)}
    return next(f"{n:06d}" for n in range(1_000_000) if f"{n:06d}" not in valid)


# ---------------------------------------------------------------------------
# Register
# ---------------------------------------------------------------------------


def test_register_returns_public_profile(api_client):
    client, _, _ = api_client
    email = _unique_email()
    resp = client.post("/auth/register", json={"email": email, "password": "GoodPass123!", "name": "Eve"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["email"] == email
    assert data["name"] == "Eve"
    assert data["role"] == "USER"
    assert data["twoFactorEnabled"] is False
    assert "hashedPassword" not in data
    assert "password" not in data
    assert "twoFactorSecret" not in data


def test_register_normalizes_email_case(api_client):
    client, _, _ = api_client
    email = _unique_email()
    resp = client.post("/auth/register", json={"email": f"  {email.upper()} ", "password": "GoodPass123!"})
    assert resp.status_code == 201
    assert resp.json()["email"] == email


def test_register_duplicate_email_conflicts(api_client):
    client, _, _ = api_client
    email = _unique_email()
    assert client.post("/auth/register", json={"email": email, "password": "GoodPass123!"}).status_code == 201
    resp = client.post("/auth/register", json={"email": email, "password": "OtherPass123!"})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "conflict"


def test_register_short_password_is_422(api_client):
    client, _, _ = api_client
    resp = client.post("/auth/register", json={"email": _unique_email(), "password": "short"})
    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "validation_error"
    assert "short" not in resp.text


def test_register_bad_email_is_422(api_client):
    client, _, _ = api_client
    resp = client.post("/auth/register", json={"email": "not-an-email", "password": "GoodPass123!"})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


def test_login_without_2fa_returns_token(api_client, register_user):
    client, _, _ = api_client
    email, user_id, _ = register_user()
    resp = client.post("/auth/login", json={"email": email, "password": "UserPass123!"})
    assert resp.status_code == 200
    assert resp.headers["cache-control"] == "no-store"
    data = resp.json()
    assert data["requiresTwoFactor"] is False
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == user_id
    assert "userId" not in data


def test_login_wrong_password_is_401(api_client, register_user):
    client, _, _ = api_client
    email, _, _ = register_user()
    resp = client.post("/auth/login", json={"email": email, "password": "WrongPass123!"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "unauthorized"


def test_login_unknown_email_is_401(api_client):
    client, _, _ = api_client
    resp = client.post("/auth/login", json={"email": _unique_email(), "password": "Whatever123!"})
    assert resp.status_code == 401


def test_login_missing_field_is_422(api_client):
    client, _, _ = api_client
    resp = client.post("/auth/login", json={"email": _unique_email()})
    assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Two-factor lifecycle
# ---------------------------------------------------------------------------


def test_two_factor_endpoints_require_auth(api_client):
    client, _, _ = api_client
    assert client.post("/auth/2fa/enable", json={"password": "x"}).status_code == 401
    assert client.post("/auth/2fa/confirm", json={"code": "123456"}).status_code == 401
    assert client.post("/auth/2fa/disable", json={"password": "x", "code": "123456"}).status_code == 401


def test_full_two_factor_flow(api_client, register_user):
    client, _, _ = api_client
    email, user_id, token = register_user()

    setup = client.post("/auth/2fa/enable", json={"password": "UserPass123!"}, headers=_auth(token))
    assert setup.status_code == 200
    setup_data = setup.json()
    secret = setup_data["secret"]
    assert setup_data["qrCode"].startswith("data:image/svg+xml;base64,")
    assert setup_data["otpauthUrl"].startswith("otpauth://totp/")

    # Still off until confirmed: login returns a token directly.
    pre = client.post("/auth/login", json={"email": email, "password": "UserPass123!"})
    assert pre.json()["requiresTwoFactor"] is False

    confirm = client.post("/auth/2fa/confirm", json={"code": pyotp.TOTP(secret).now()}, headers=_auth(token))
    assert confirm.status_code == 200
    assert confirm.json()["twoFactorEnabled"] is True

    challenge = client.post("/auth/login", json={"email": email, "password": "UserPass123!"})
    assert challenge.status_code == 200
    challenge_data = challenge.json()
    assert challenge_data["requiresTwoFactor"] is True
    assert challenge_data["userId"] == user_id
    assert "access_token" not in challenge_data

    verified = client.post("/auth/2fa/verify", json={"userId": user_id, "code": pyotp.TOTP(secret).now()})
    assert verified.status_code == 200
    verified_data = verified.json()
    assert verified_data["requiresTwoFactor"] is False
    assert verified_data["access_token"]

    disabled = client.post(
        "/auth/2fa/disable",
        json={"password": "UserPass123!", "code": pyotp.TOTP(secret).now()},
        headers=_auth(verified_data["access_token"]),
    )
    assert disabled.status_code == 200
    assert "disabled" in disabled.json()["message"]

    after = client.post("/auth/login", json={"email": email, "password": "UserPass123!"})
    assert after.json()["requiresTwoFactor"] is False


def test_enable_wrong_password_is_401(api_client, register_user):
    client, _, _ = api_client
    _, _, token = register_user()
    resp = client.post("/auth/2fa/enable", json={"password": "NotMine123!"}, headers=_auth(token))
    assert resp.status_code == 401


def test_enable_twice_after_confirm_is_400(api_client, register_user):
    client, _, _ = api_client
    _, _, token = register_user()
    secret = client.post("/auth/2fa/enable", json={"password": "UserPass123!"}, headers=_auth(token)).json()["secret"]
    client.post("/auth/2fa/confirm", json={"code": pyotp.TOTP(secret).now()}, headers=_auth(token))
    resp = client.post("/auth/2fa/enable", json={"password": "UserPass123!"}, headers=_auth(token))
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "bad_request"


def test_confirm_without_setup_is_401(api_client, register_user):
    client, _, _ = api_client
    _, _, token = register_user()
    resp = client.post("/auth/2fa/confirm", json={"code": "123456"}, headers=_auth(token))
    assert resp.status_code == 401


def test_confirm_malformed_code_is_422(api_client, register_user):
    client, _, _ = api_client
    _, _, token = register_user()
    resp = client.post("/auth/2fa/confirm", json={"code": "12ab56"}, headers=_auth(token))
    assert resp.status_code == 422


def test_verify_wrong_code_is_401(api_client, register_user):
    client, _, _ = api_client
    _, user_id, token = register_user()
    secret = client.post("/auth/2fa/enable", json={"password": "UserPass123!"}, headers=_auth(token)).json()["secret"]
    client.post("/auth/2fa/confirm", json={"code": pyotp.TOTP(secret).now()}, headers=_auth(token))
    resp = client.post("/auth/2fa/verify", json={"userId": user_id, "code": _other_code(secret)})
    assert resp.status_code == 401


def test_verify_unknown_user_is_401(api_client):
    client, _, _ = api_client
    resp = client.post("/auth/2fa/verify", json={"userId": str(uuid.uuid4()), "code": "123456"})
    assert resp.status_code == 401


def test_verify_without_setup_is_400(api_client, register_user):
    client, _, _ = api_client
    _, user_id, _ = register_user()
    resp = client.post("/auth/2fa/verify", json={"userId": user_id, "code": "123456"})
    assert resp.status_code == 400


def test_disable_wrong_code_keeps_two_factor_on(api_client, register_user, user_store):
    client, _, _ = api_client
    _, user_id, token = register_user()
    secret = client.post("/auth/2fa/enable", json={"password": "UserPass123!"}, headers=_auth(token)).json()["secret"]
    client.post("/auth/2fa/confirm", json={"code": pyotp.TOTP(secret).now()}, headers=_auth(token))

    resp = client.post(
        "/auth/2fa/disable",
        json={"password": "UserPass123!", "code": _other_code(secret)},
        headers=_auth(token),
    )
    assert resp.status_code == 401
    stored = user_store.get_by_id(user_id)
    assert stored.two_factor_enabled is True
    assert stored.two_factor_secret == secret


def test_disable_when_not_enabled_is_400(api_client, register_user):
    client, _, _ = api_client
    _, _, token = register_user()
    resp = client.post(
        "/auth/2fa/disable",
        json={"password": "UserPass123!", "code": "123456"},
        headers=_auth(token),
    )
    assert resp.status_code == 400


def test_invalid_bearer_token_is_401(api_client):
    client, _, _ = api_client
    resp = client.post("/auth/2fa/enable", json={"password": "x"}, headers=_auth("not.a.jwt"))
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"
    assert resp.json()["error"]["code"] == "unauthorized"

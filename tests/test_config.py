"""Unit tests for core/config.py -- the SECRET_KEY policy and env parsing."""

import pytest
from pydantic import ValidationError

from core.config import Settings


def test_debug_generates_secret_key():
    settings = Settings(debug=True, secret_key="")
    assert len(settings.secret_key) >= 32


def test_production_requires_secret_key():
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(debug=False, secret_key="")


def test_short_secret_key_rejected():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(debug=False, secret_key="too-short")


def test_bcrypt_rounds_lower_bound():
    with pytest.raises(ValidationError):
        Settings(debug=True, bcrypt_rounds=3)


def test_list_fields_read_as_json(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", '["https://app.example.com"]')
    settings = Settings(debug=True)
    assert settings.cors_origins == ["https://app.example.com"]


def test_pwned_settings_from_env(monkeypatch):
    monkeypatch.setenv("PWNED_API_URL", "http://mirror.local/range/")
    monkeypatch.setenv("PWNED_TIMEOUT", "1.5")
    settings = Settings(debug=True)
    assert settings.pwned_api_url == "http://mirror.local/range/"
    assert settings.pwned_timeout == 1.5

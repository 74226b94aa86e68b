"""
tests/conftest.py -- Shared test fixtures for Password Checker integration tests.

This module provides:
  - user_store: an isolated named shared-memory DB per test module
  - _patch_lifespan(): wires the test store into app.state, bypassing real startup
  - api_client: TestClient plus an ADMIN JWT for API integration tests
  - register_user: helper fixture that registers + logs in a fresh USER via HTTP

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.

Environment must be set before any auth/core import:
  DEBUG=true              -- get_settings() auto-generates SECRET_KEY
  BCRYPT_ROUNDS=4         -- bcrypt's minimum cost; keeps the suite fast
  RATE_LIMIT_ENABLED=false -- many logins per module would trip 10/minute
  ALLOWED_HOSTS           -- TestClient sends Host: testserver
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator
from contextlib import asynccontextmanager

os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ALLOWED_HOSTS", '["testserver", "localhost"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.models import ROLE_ADMIN, User
from auth.store import UserStore
from auth.tokens import create_access_token, hash_password

ADMIN_EMAIL = "testadmin@example.com"
ADMIN_PASSWORD = "AdminPass123!"


def _patch_lifespan(user_store: UserStore):
    """Return an async context manager that replaces the real lifespan.

    Wires the pre-created test store into app.state so TestClient routes see
    an isolated test DB rather than the configured DATABASE_URL.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def user_store(request) -> Generator[UserStore, None, None]:
    """Isolated shared-memory store, one per test module."""
    name = request.module.__name__.replace(".", "_")
    store = UserStore(db_url=f"sqlite:///file:{name}_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true")
    yield store
    store.close()


@pytest.fixture(scope="module")
def api_client(user_store: UserStore) -> Generator[tuple[TestClient, str, str], None, None]:
    """Yield (client, admin_token, admin_id) for API integration tests.

    The admin is inserted straight into the store (role changes are not
    exposed over HTTP) and a JWT is minted for Authorization headers.
    """
    admin = User(
        email=ADMIN_EMAIL,
        hashed_password=hash_password(ADMIN_PASSWORD),
        name="Test Admin",
        role=ROLE_ADMIN,
    )
    uid = user_store.create_user(admin)
    token = create_access_token(user_id=uid, email=ADMIN_EMAIL, role=ROLE_ADMIN, expire_seconds=3600)

    app.router.lifespan_context = _patch_lifespan(user_store)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client, token, uid


@pytest.fixture
def register_user(api_client) -> Callable[..., tuple[str, str, str]]:
    """Return a helper that registers a unique USER and logs in.

    The helper returns (email, user_id, access_token). Each call uses a fresh
    email so tests sharing the module-scoped DB never collide.
    """
    client, _token, _uid = api_client

    def _register(password: str = "UserPass123!", name: str | None = "Test User") -> tuple[str, str, str]:
        email = f"user-{uuid.uuid4().hex[:10]}@example.com"
        resp = client.post("/auth/register", json={"email": email, "password": password, "name": name})
        assert resp.status_code == 201, resp.text
        user_id = resp.json()["id"]
        login = client.post("/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return email, user_id, login.json()["access_token"]

    return _register

"""Unit tests for auth/store.py -- UserStore persistence.

Covers:
- create_user() assigns an opaque id and timestamps
- email uniqueness enforced by the UNIQUE constraint
- get_by_email / get_by_id / list_users
- update_user() field whitelist, bool mapping, and updated_at refresh
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from auth.models import ROLE_ADMIN, ROLE_USER, User
from auth.store import UserStore


@pytest.fixture
def store():
    s = UserStore("sqlite:///:memory:")
    yield s
    s.close()


def _user(email: str = "alice@example.com", **kwargs) -> User:
    return User(email=email, hashed_password="$2b$04$notarealhashnotarealhashnotarealhashnotarealhas", **kwargs)


class TestCreateAndGet:
    def test_create_assigns_uuid_and_timestamps(self, store):
        user_id = store.create_user(_user(name="Alice"))
        uuid.UUID(user_id)  # raises if not a UUID
        user = store.get_by_id(user_id)
        assert user.email == "alice@example.com"
        assert user.name == "Alice"
        assert user.role == ROLE_USER
        assert user.two_factor_enabled is False
        assert user.two_factor_secret is None
        assert user.created_at
        assert user.updated_at == user.created_at

    def test_duplicate_email_raises_integrity_error(self, store):
        store.create_user(_user())
        with pytest.raises(IntegrityError):
            store.create_user(_user())

    def test_get_by_email(self, store):
        user_id = store.create_user(_user("bob@example.com"))
        assert store.get_by_email("bob@example.com").id == user_id
        assert store.get_by_email("nobody@example.com") is None

    def test_get_by_id_unknown(self, store):
        assert store.get_by_id(str(uuid.uuid4())) is None

    def test_has_users(self, store):
        assert store.has_users() is False
        store.create_user(_user())
        assert store.has_users() is True

    def test_list_users(self, store):
        store.create_user(_user("a@example.com"))
        store.create_user(_user("b@example.com", role=ROLE_ADMIN))
        users = store.list_users()
        assert {u.email for u in users} == {"a@example.com", "b@example.com"}
        assert {u.role for u in users} == {ROLE_USER, ROLE_ADMIN}

    def test_ping(self, store):
        assert store.ping() is True


class TestUpdateUser:
    def test_two_factor_fields_round_trip(self, store):
        user_id = store.create_user(_user())
        assert store.update_user(user_id, two_factor_secret="JBSWY3DPEHPK3PXP", two_factor_enabled=True)
        user = store.get_by_id(user_id)
        assert user.two_factor_secret == "JBSWY3DPEHPK3PXP"
        assert user.two_factor_enabled is True

    def test_clear_secret(self, store):
        user_id = store.create_user(_user(two_factor_secret="JBSWY3DPEHPK3PXP", two_factor_enabled=True))
        store.update_user(user_id, two_factor_secret=None, two_factor_enabled=False)
        user = store.get_by_id(user_id)
        assert user.two_factor_secret is None
        assert user.two_factor_enabled is False

    def test_updated_at_refreshed(self, store):
        user_id = store.create_user(_user())
        before = store.get_by_id(user_id).updated_at
        store.update_user(user_id, name="Renamed")
        after = store.get_by_id(user_id)
        assert after.name == "Renamed"
        assert after.updated_at >= before

    def test_unknown_user_returns_false(self, store):
        assert store.update_user(str(uuid.uuid4()), name="ghost") is False

    def test_immutable_field_rejected(self, store):
        user_id = store.create_user(_user())
        with pytest.raises(ValueError, match="Unknown user fields"):
            store.update_user(user_id, email="other@example.com")

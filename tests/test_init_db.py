# tests/test_init_db.py
"""Tests for the administrator bootstrap helper."""

from askit.core.security import verify_password
from askit.init_db import ensure_admin
from askit.models import Role, User


def test_ensure_admin_creates_account(db_session):
    user = ensure_admin(db_session, "Root", "root@ufpr.br", "bootstrap-secret")
    assert user.role is Role.ADMIN
    assert verify_password("bootstrap-secret", user.password)


def test_ensure_admin_promotes_existing_user(db_session, test_user):
    original_hash = test_user.password
    user = ensure_admin(db_session, "Ignored", test_user.email, "ignored-secret")
    assert user.id == test_user.id
    assert user.role is Role.ADMIN
    assert user.password == original_hash
    assert db_session.query(User).count() == 1

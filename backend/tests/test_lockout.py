"""Tests for failed-login counting and account lock"""
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from admin_panel.config import settings
from admin_panel.models.admin import Admin
from admin_panel.utils.lockout import increment_login_attempts, is_account_locked, reset_login_attempts
from admin_panel.utils.time import utcnow


def test_locked_after_max_attempts(client: TestClient, db: Session, superadmin: Admin, login):
    """Test the account locks after five bad passwords, even for the right one"""
    for _ in range(settings.MAX_LOGIN_ATTEMPTS):
        assert login("admin", "wrong-password").status_code == 401

    response = login("admin")
    assert response.status_code == 401
    assert "locked" in response.json()["message"]

    db.expire_all()
    admin = db.get(Admin, superadmin.id)
    assert admin.login_attempts == settings.MAX_LOGIN_ATTEMPTS
    assert admin.lock_until > utcnow() + timedelta(minutes=settings.LOCK_TIME_MINUTES - 1)


def test_not_locked_below_threshold(client: TestClient, db: Session, superadmin: Admin, login):
    """Test four failures do not lock and a success resets the counter"""
    for _ in range(settings.MAX_LOGIN_ATTEMPTS - 1):
        login("admin", "wrong-password")

    assert login("admin").status_code == 200
    db.expire_all()
    admin = db.get(Admin, superadmin.id)
    assert admin.login_attempts == 0
    assert admin.lock_until is None


def test_lock_expires(client: TestClient, db: Session, make_admin, login):
    """Test a lock in the past no longer blocks login"""
    make_admin("expired", login_attempts=5, lock_until=utcnow() - timedelta(minutes=1))
    assert login("expired").status_code == 200


def test_failure_after_expired_lock_relocks(db: Session, make_admin):
    """Test the stale counter re-locks on the next failure"""
    admin = make_admin("stale", login_attempts=5, lock_until=utcnow() - timedelta(minutes=1))
    assert not is_account_locked(admin)

    increment_login_attempts(db, admin)
    assert admin.login_attempts == 6
    assert is_account_locked(admin)


def test_increment_keeps_active_lock(db: Session, make_admin):
    """Test further failures do not extend an active lock"""
    lock_until = utcnow() + timedelta(minutes=5)
    admin = make_admin("held", login_attempts=5, lock_until=lock_until)

    increment_login_attempts(db, admin)
    assert admin.login_attempts == 6
    assert abs((admin.lock_until - lock_until).total_seconds()) < 1


def test_reset_login_attempts(db: Session, make_admin):
    """Test resetting clears both the counter and the lock"""
    admin = make_admin("reset", login_attempts=5, lock_until=utcnow() + timedelta(minutes=5))
    reset_login_attempts(db, admin)
    db.refresh(admin)
    assert admin.login_attempts == 0
    assert admin.lock_until is None


def test_locked_admin_session_rejected(as_moderator: TestClient, db: Session, moderator: Admin):
    """Test an existing session stops working while the account is locked"""
    db.query(Admin).filter(Admin.id == moderator.id).update(
        {"lock_until": utcnow() + timedelta(minutes=10)}
    )
    db.commit()

    response = as_moderator.get("/auth/profile")
    assert response.status_code == 401
    assert "locked" in response.json()["message"]
